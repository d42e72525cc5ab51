"""
Go type system for code generation.

Nullable columns become pointers, except where the ecosystem has a
dedicated null wrapper (decimal.NullDecimal, uuid.NullUUID, sql.Null).
"""

from ...core.naming import NamingCase
from ...core.types import TypeMapper
from .naming import GO_IDENTIFIER_RESERVED


class GoTypeMapper(TypeMapper):
    """Type mapper for the Go / Gin + GORM target."""

    NON_NULLABLE_TYPES = {
        "String": "string",
        "Character": "rune",
        "Integer": "int",
        "Long": "int64",
        "Short": "int16",
        "Byte": "int8",
        "Double": "float64",
        "Float": "float32",
        "BigDecimal": "decimal.Decimal",
        "Boolean": "bool",
        "LocalDate": "time.Time",
        "LocalDateTime": "time.Time",
        "LocalTime": "time.Time",
        "Instant": "time.Time",
        "ZonedDateTime": "time.Time",
        "UUID": "uuid.UUID",
        "byte[]": "[]byte",
    }

    NULLABLE_TYPES = {
        "String": "*string",
        "Character": "*rune",
        "Integer": "*int",
        "Long": "*int64",
        "Short": "*int16",
        "Byte": "*int8",
        "Double": "*float64",
        "Float": "*float32",
        "BigDecimal": "decimal.NullDecimal",
        "Boolean": "*bool",
        "LocalDate": "*time.Time",
        "LocalDateTime": "*time.Time",
        "LocalTime": "*time.Time",
        "Instant": "*time.Time",
        "ZonedDateTime": "*time.Time",
        "UUID": "uuid.NullUUID",
        "byte[]": "sql.Null[[]byte]",
    }

    IMPORTS = {
        "BigDecimal": "github.com/shopspring/decimal",
        "LocalDate": "time",
        "LocalDateTime": "time",
        "LocalTime": "time",
        "Instant": "time",
        "ZonedDateTime": "time",
        "UUID": "github.com/google/uuid",
    }
    NULLABLE_IMPORTS = {"byte[]": "database/sql"}

    DEFAULT_VALUES = {
        "string": '""',
        "rune": "0",
        "int": "0",
        "int64": "0",
        "int16": "0",
        "int8": "0",
        "float64": "0",
        "float32": "0",
        "bool": "false",
        "decimal.Decimal": "decimal.Zero",
        "time.Time": "time.Time{}",
        "uuid.UUID": "uuid.Nil",
        "[]byte": "nil",
        "decimal.NullDecimal": "decimal.NullDecimal{}",
        "uuid.NullUUID": "uuid.NullUUID{}",
        "sql.Null[[]byte]": "sql.Null[[]byte]{}",
    }
    NULLABLE_DEFAULT = "nil"
    FALLBACK_DEFAULT = "nil"

    UNKNOWN_TYPE = "any"
    PRIMARY_KEY_TYPE = "int64"

    RESERVED_WORDS = GO_IDENTIFIER_RESERVED
    FIELD_CASE = NamingCase.PASCAL_CASE

    def list_type(self, element_type: str) -> str:
        return f"[]{element_type}"

    def nullable_type(self, target_type: str) -> str:
        if target_type.startswith(("*", "decimal.Null", "uuid.Null", "sql.Null")):
            return target_type
        return f"*{target_type}"

    def reference_type(self, entity_name: str, nullable: bool = False) -> str:
        # Struct fields cannot embed their own type by value
        return f"*{entity_name}"
