"""
Type mapping contract shared by all target ecosystems.

Each target provides one TypeMapper subclass holding fixed lookup tables
from symbolic source types ("String", "Long", "UUID", ...) to native type
strings. Nullable and non-nullable tables are separate because several
ecosystems use structurally different nullable representations.
"""

from abc import ABC
from typing import Dict, FrozenSet, Optional

from .naming import NameSanitizer, NamingCase, escape_if_keyword

# Canonical symbolic source types every target must map
SOURCE_TYPES = (
    "String",
    "Character",
    "Integer",
    "Long",
    "Short",
    "Byte",
    "Double",
    "Float",
    "BigDecimal",
    "Boolean",
    "LocalDate",
    "LocalDateTime",
    "LocalTime",
    "Instant",
    "ZonedDateTime",
    "UUID",
    "byte[]",
)

# Alternative spellings accepted from the parser
SOURCE_TYPE_ALIASES = {
    "string": "String",
    "char": "Character",
    "character": "Character",
    "int": "Integer",
    "integer": "Integer",
    "long": "Long",
    "short": "Short",
    "byte": "Byte",
    "double": "Double",
    "float": "Float",
    "bigdecimal": "BigDecimal",
    "decimal": "BigDecimal",
    "boolean": "Boolean",
    "bool": "Boolean",
    "localdate": "LocalDate",
    "localdatetime": "LocalDateTime",
    "localtime": "LocalTime",
    "instant": "Instant",
    "zoneddatetime": "ZonedDateTime",
    "offsetdatetime": "ZonedDateTime",
    "uuid": "UUID",
    "byte[]": "byte[]",
    "bytes": "byte[]",
}


def normalize_source_type(source_type: Optional[str]) -> Optional[str]:
    """Return the canonical spelling of a source type, or the input if unknown."""
    if not source_type:
        return source_type
    stripped = source_type.strip()
    return SOURCE_TYPE_ALIASES.get(stripped.lower(), stripped)


class TypeMapper(ABC):
    """
    Base class for per-target type mapping.

    Subclasses fill in the class-level tables; the lookups themselves are
    shared. Every query is total: unknown source types map to UNKNOWN_TYPE
    for both nullabilities.
    """

    NON_NULLABLE_TYPES: Dict[str, str] = {}
    NULLABLE_TYPES: Dict[str, str] = {}
    # source type -> import/using/use statement target
    IMPORTS: Dict[str, str] = {}
    NULLABLE_IMPORTS: Dict[str, str] = {}
    # target type -> zero-value literal
    DEFAULT_VALUES: Dict[str, str] = {}
    NULLABLE_DEFAULT = "null"
    FALLBACK_DEFAULT = "null"

    UNKNOWN_TYPE = "object"
    UNKNOWN_IMPORT: Optional[str] = None
    PRIMARY_KEY_TYPE = "long"

    RESERVED_WORDS: FrozenSet[str] = frozenset()
    KEYWORD_SUFFIX = "_"
    FIELD_CASE = NamingCase.CAMEL_CASE

    def map_type(self, source_type: str, nullable: bool = False) -> str:
        """Map a source type to the target's native type string."""
        canonical = normalize_source_type(source_type)
        table = self.NULLABLE_TYPES if nullable else self.NON_NULLABLE_TYPES
        return table.get(canonical, self.UNKNOWN_TYPE)

    def is_mapped(self, source_type: str) -> bool:
        return normalize_source_type(source_type) in self.NON_NULLABLE_TYPES

    def is_nullable_type(self, target_type: str) -> bool:
        return target_type in self.NULLABLE_TYPES.values()

    def default_value_for(self, target_type: str) -> str:
        """Zero-value literal for a mapped target type."""
        if target_type in self.DEFAULT_VALUES:
            return self.DEFAULT_VALUES[target_type]
        if self.is_nullable_type(target_type):
            return self.NULLABLE_DEFAULT
        return self.FALLBACK_DEFAULT

    def required_import(self, source_type: str, nullable: bool = False) -> Optional[str]:
        """Import needed to use the mapped type, None for built-ins."""
        canonical = normalize_source_type(source_type)
        if canonical not in self.NON_NULLABLE_TYPES:
            return self.UNKNOWN_IMPORT
        if nullable and canonical in self.NULLABLE_IMPORTS:
            return self.NULLABLE_IMPORTS[canonical]
        return self.IMPORTS.get(canonical)

    def primary_key_type(self) -> str:
        return self.PRIMARY_KEY_TYPE

    def list_type(self, element_type: str) -> str:
        return f"List<{element_type}>"

    def collection_type(self, element_type: str) -> str:
        """Type of a generated to-many navigation field."""
        return self.list_type(element_type)

    def nullable_type(self, target_type: str) -> str:
        """Optional form of an arbitrary target type string."""
        return f"{target_type}?"

    def reference_type(self, entity_name: str, nullable: bool = False) -> str:
        """Type of a generated single-valued navigation field."""
        return self.nullable_type(entity_name) if nullable else entity_name

    def escape_identifier(self, name: str) -> str:
        return escape_if_keyword(name, self.RESERVED_WORDS, self.KEYWORD_SUFFIX)

    def is_reserved(self, name: str) -> bool:
        return name in self.RESERVED_WORDS

    def create_sanitizer(self) -> NameSanitizer:
        """Fresh per-scope sanitizer using this target's reserved words."""
        return NameSanitizer(set(self.RESERVED_WORDS))
