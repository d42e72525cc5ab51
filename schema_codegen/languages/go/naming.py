"""
Go-specific naming utilities and sanitization.

Handles Go reserved words, predeclared identifiers and the method names
GORM looks up on models.
"""

from ...core.naming import NameSanitizer

# Go reserved words
GO_RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

# Predeclared types, constants and functions
GO_PREDECLARED = frozenset(
    {
        "any",
        "bool",
        "byte",
        "comparable",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "true",
        "false",
        "iota",
        "nil",
        "append",
        "cap",
        "clear",
        "close",
        "copy",
        "delete",
        "len",
        "make",
        "max",
        "min",
        "new",
        "panic",
        "print",
        "println",
        "recover",
    }
)

# Methods GORM calls on models when defined
GORM_MODEL_METHODS = frozenset({"TableName", "BeforeCreate", "BeforeSave", "AfterFind"})

GO_IDENTIFIER_RESERVED = GO_RESERVED_WORDS | GO_PREDECLARED | GORM_MODEL_METHODS


def create_go_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Go."""
    return NameSanitizer(set(GO_IDENTIFIER_RESERVED))
