"""
Rust type system for code generation.

Maps source types to the types sqlx decodes with the chrono, uuid and
rust_decimal features enabled.
"""

from ...core.naming import NamingCase
from ...core.types import TypeMapper
from .naming import RUST_RESERVED_WORDS


class RustTypeMapper(TypeMapper):
    """Type mapper for the Rust / Axum + sqlx target."""

    NON_NULLABLE_TYPES = {
        "String": "String",
        "Character": "String",
        "Integer": "i32",
        "Long": "i64",
        "Short": "i16",
        "Byte": "i8",
        "Double": "f64",
        "Float": "f32",
        "BigDecimal": "Decimal",
        "Boolean": "bool",
        "LocalDate": "NaiveDate",
        "LocalDateTime": "NaiveDateTime",
        "LocalTime": "NaiveTime",
        "Instant": "DateTime<Utc>",
        "ZonedDateTime": "DateTime<Utc>",
        "UUID": "Uuid",
        "byte[]": "Vec<u8>",
    }

    NULLABLE_TYPES = {
        source: f"Option<{target}>" for source, target in NON_NULLABLE_TYPES.items()
    }

    IMPORTS = {
        "BigDecimal": "rust_decimal::Decimal",
        "LocalDate": "chrono::NaiveDate",
        "LocalDateTime": "chrono::NaiveDateTime",
        "LocalTime": "chrono::NaiveTime",
        "Instant": "chrono::{DateTime, Utc}",
        "ZonedDateTime": "chrono::{DateTime, Utc}",
        "UUID": "uuid::Uuid",
    }

    DEFAULT_VALUES = {
        "String": "String::new()",
        "i32": "0",
        "i64": "0",
        "i16": "0",
        "i8": "0",
        "f64": "0.0",
        "f32": "0.0",
        "bool": "false",
        "Decimal": "Decimal::ZERO",
        "Uuid": "Uuid::nil()",
        "Vec<u8>": "Vec::new()",
    }
    NULLABLE_DEFAULT = "None"
    FALLBACK_DEFAULT = "Default::default()"

    UNKNOWN_TYPE = "Value"
    UNKNOWN_IMPORT = "serde_json::Value"
    PRIMARY_KEY_TYPE = "i64"

    RESERVED_WORDS = RUST_RESERVED_WORDS
    FIELD_CASE = NamingCase.SNAKE_CASE

    def list_type(self, element_type: str) -> str:
        return f"Vec<{element_type}>"

    def nullable_type(self, target_type: str) -> str:
        if target_type.startswith("Option<"):
            return target_type
        return f"Option<{target_type}>"

    def reference_type(self, entity_name: str, nullable: bool = False) -> str:
        # Loaded on demand, and boxed so self references have a finite size
        return f"Option<Box<{entity_name}>>"
