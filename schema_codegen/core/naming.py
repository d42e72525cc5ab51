"""
Naming utilities for safe code generation.

Case conversion, pluralization, audit-field detection and keyword escaping
shared by every target ecosystem. All functions are pure and null-safe:
None or an empty string is returned unchanged.
"""

import re
from enum import Enum
from typing import Iterable, List, Optional, Set

# Framework-managed columns never rendered as business fields
AUDIT_FIELDS = frozenset(
    {
        "id",
        "active",
        "activo",
        "estado",
        "created_at",
        "updated_at",
        "deleted_at",
        "created_by",
        "updated_by",
        "deleted_by",
    }
)

VOWELS = "aeiouAEIOU"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


def split_words(name: Optional[str]) -> List[str]:
    """
    Split an identifier into its words.

    Separators are underscores, hyphens, any other non-alphanumeric
    character, and capital-letter boundaries ("HTTPServer" -> HTTP, Server).
    """
    if not name:
        return []
    spaced = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    spaced = _CAMEL_BOUNDARY.sub(r"\1_\2", spaced)
    return [word for word in _SEPARATORS.split(spaced) if word]


def to_pascal_case(name: Optional[str]) -> Optional[str]:
    """Convert to PascalCase (order_item -> OrderItem)."""
    words = split_words(name)
    if not words:
        return name
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def to_camel_case(name: Optional[str]) -> Optional[str]:
    """Convert to camelCase (order_item -> orderItem)."""
    words = split_words(name)
    if not words:
        return name
    head, tail = words[0], words[1:]
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)


def to_snake_case(name: Optional[str]) -> Optional[str]:
    """Convert to snake_case (OrderItem -> order_item)."""
    words = split_words(name)
    if not words:
        return name
    return "_".join(word.lower() for word in words)


def to_kebab_case(name: Optional[str]) -> Optional[str]:
    """Convert to kebab-case (OrderItem -> order-item)."""
    words = split_words(name)
    if not words:
        return name
    return "-".join(word.lower() for word in words)


def convert_case(name: Optional[str], target_case: NamingCase) -> Optional[str]:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_kebab_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        snake = to_snake_case(name)
        return snake.upper() if snake else snake
    return name


def to_plural(name: Optional[str]) -> Optional[str]:
    """
    Pluralize an English noun.

    category -> categories, key -> keys, status -> statuses, box -> boxes,
    user -> users. The suffix follows the case of the last letter
    (CATEGORY -> CATEGORIES).
    """
    if not name:
        return name

    upper = name[-1].isupper()
    lower = name.lower()
    if lower.endswith("y") and len(name) > 1 and name[-2] not in VOWELS:
        return name[:-1] + ("IES" if upper else "ies")
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return name + ("ES" if upper else "es")
    return name + ("S" if upper else "s")


def to_singular(name: Optional[str]) -> Optional[str]:
    """
    Singularize a plural table name.

    categories -> category, classes -> class, boxes -> box,
    statuses -> status, users -> user. Names ending in "ss" are kept.
    """
    if not name:
        return name

    lower = name.lower()
    if lower.endswith("ies"):
        return name[:-3] + "y"
    if lower.endswith("sses"):
        return name[:-2]
    if lower.endswith(("xes", "ches", "shes")):
        return name[:-2]
    if lower.endswith(("uses", "ases", "ises", "oses")):
        return name[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return name[:-1]
    return name


def to_property_name(column_name: Optional[str]) -> Optional[str]:
    """Strip a trailing _id from a foreign-key column (category_id -> category)."""
    if not column_name:
        return column_name
    if column_name.lower().endswith("_id"):
        return column_name[:-3]
    return column_name


def is_audit_field(column_name: Optional[str]) -> bool:
    """Check if a column is framework managed and excluded from business fields."""
    if not column_name:
        return False
    return column_name.lower() in AUDIT_FIELDS


def escape_if_keyword(
    name: Optional[str], keywords: Iterable[str], suffix: str = "_"
) -> Optional[str]:
    """Append suffix when name collides with a reserved word of the target."""
    if not name:
        return name
    if name in keywords:
        return f"{name}{suffix}"
    return name


class NameSanitizer:
    """
    Produces safe, unique identifiers within one naming scope.

    A scope is typically the member list of a single generated class: every
    name handed out is cleaned, converted to the requested case, escaped if
    it is a reserved word and de-duplicated against names already used.
    """

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        self.reserved_words = frozenset(reserved_words or ())
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.SNAKE_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix added for reserved words

        Returns:
            Sanitized name, unique within this sanitizer's scope
        """
        cleaned = self._clean_basic(name)
        converted = convert_case(cleaned, target_case) or cleaned
        if converted[0].isdigit():
            converted = f"_{converted}"

        final_name = self._resolve_conflicts(converted, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name or "")
        cleaned = cleaned.strip("_-")
        return cleaned or "field"

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve conflicts with reserved words and names used in this scope."""
        name = escape_if_keyword(name, self.reserved_words, suffix)

        original_name = name
        counter = 2
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
