"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the attribute names SQLAlchemy's
declarative base claims for itself.
"""

from ...core.naming import NameSanitizer

# Python reserved keywords
PYTHON_RESERVED_WORDS = frozenset(
    {
        "False",
        "None",
        "True",
        "and",
        "as",
        "assert",
        "async",
        "await",
        "break",
        "class",
        "continue",
        "def",
        "del",
        "elif",
        "else",
        "except",
        "finally",
        "for",
        "from",
        "global",
        "if",
        "import",
        "in",
        "is",
        "lambda",
        "nonlocal",
        "not",
        "or",
        "pass",
        "raise",
        "return",
        "try",
        "while",
        "with",
        "yield",
    }
)

# Attributes of DeclarativeBase subclasses and Pydantic models
PYTHON_FRAMEWORK_RESERVED = frozenset({"metadata", "registry", "model_config"})

PYTHON_IDENTIFIER_RESERVED = PYTHON_RESERVED_WORDS | PYTHON_FRAMEWORK_RESERVED


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(set(PYTHON_IDENTIFIER_RESERVED))
