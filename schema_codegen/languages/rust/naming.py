"""
Rust-specific naming utilities and sanitization.
"""

from ...core.naming import NameSanitizer

# Strict and reserved keywords (2021 edition)
RUST_RESERVED_WORDS = frozenset(
    {
        "as",
        "async",
        "await",
        "break",
        "const",
        "continue",
        "crate",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "self",
        "Self",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
        "abstract",
        "become",
        "box",
        "do",
        "final",
        "gen",
        "macro",
        "override",
        "priv",
        "try",
        "typeof",
        "unsized",
        "virtual",
        "yield",
    }
)


def create_rust_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Rust."""
    return NameSanitizer(set(RUST_RESERVED_WORDS))
