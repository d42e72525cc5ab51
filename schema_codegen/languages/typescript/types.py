"""
TypeScript type system for code generation.

Types are the ones TypeORM hydrates: numbers for every numeric column
except decimals, which the drivers return as strings.
"""

from ...core.naming import NamingCase
from ...core.types import TypeMapper
from .naming import TYPESCRIPT_RESERVED_WORDS


class TypeScriptTypeMapper(TypeMapper):
    """Type mapper for the TypeScript / NestJS + TypeORM target."""

    NON_NULLABLE_TYPES = {
        "String": "string",
        "Character": "string",
        "Integer": "number",
        "Long": "number",
        "Short": "number",
        "Byte": "number",
        "Double": "number",
        "Float": "number",
        "BigDecimal": "string",
        "Boolean": "boolean",
        "LocalDate": "string",
        "LocalDateTime": "Date",
        "LocalTime": "string",
        "Instant": "Date",
        "ZonedDateTime": "Date",
        "UUID": "string",
        "byte[]": "Buffer",
    }

    NULLABLE_TYPES = {
        source: f"{target} | null" for source, target in NON_NULLABLE_TYPES.items()
    }

    DEFAULT_VALUES = {
        "string": "''",
        "number": "0",
        "boolean": "false",
        "Date": "new Date()",
        "Buffer": "Buffer.alloc(0)",
    }
    NULLABLE_DEFAULT = "null"
    FALLBACK_DEFAULT = "undefined"

    UNKNOWN_TYPE = "unknown"
    PRIMARY_KEY_TYPE = "number"

    RESERVED_WORDS = TYPESCRIPT_RESERVED_WORDS
    FIELD_CASE = NamingCase.CAMEL_CASE

    def list_type(self, element_type: str) -> str:
        if " " in element_type:
            return f"({element_type})[]"
        return f"{element_type}[]"

    def nullable_type(self, target_type: str) -> str:
        if target_type.endswith(" | null"):
            return target_type
        return f"{target_type} | null"
