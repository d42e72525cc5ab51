"""
TypeScript-specific naming utilities and sanitization.
"""

from ...core.naming import NameSanitizer

# ECMAScript reserved words plus TypeScript strict-mode and type keywords
TYPESCRIPT_RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "as",
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
        "any",
        "boolean",
        "constructor",
        "declare",
        "keyof",
        "module",
        "never",
        "number",
        "readonly",
        "require",
        "string",
        "symbol",
        "type",
        "undefined",
        "unknown",
    }
)


def create_typescript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript."""
    return NameSanitizer(set(TYPESCRIPT_RESERVED_WORDS))
