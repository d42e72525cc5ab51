"""
C# type system for code generation.

Nullable value types and nullable reference types share the `T?` form.
"""

from ...core.naming import NamingCase
from ...core.types import TypeMapper
from .naming import CSHARP_IDENTIFIER_RESERVED


class CSharpTypeMapper(TypeMapper):
    """Type mapper for the C# / ASP.NET Core + EF Core target."""

    NON_NULLABLE_TYPES = {
        "String": "string",
        "Character": "char",
        "Integer": "int",
        "Long": "long",
        "Short": "short",
        "Byte": "sbyte",
        "Double": "double",
        "Float": "float",
        "BigDecimal": "decimal",
        "Boolean": "bool",
        "LocalDate": "DateOnly",
        "LocalDateTime": "DateTime",
        "LocalTime": "TimeOnly",
        "Instant": "DateTimeOffset",
        "ZonedDateTime": "DateTimeOffset",
        "UUID": "Guid",
        "byte[]": "byte[]",
    }

    NULLABLE_TYPES = {
        source: f"{target}?" for source, target in NON_NULLABLE_TYPES.items()
    }

    DEFAULT_VALUES = {
        "string": "string.Empty",
        "char": "'\\0'",
        "int": "0",
        "long": "0L",
        "short": "0",
        "sbyte": "0",
        "double": "0.0",
        "float": "0f",
        "decimal": "0m",
        "bool": "false",
        "DateOnly": "DateOnly.MinValue",
        "DateTime": "DateTime.MinValue",
        "TimeOnly": "TimeOnly.MinValue",
        "DateTimeOffset": "DateTimeOffset.MinValue",
        "Guid": "Guid.Empty",
        "byte[]": "Array.Empty<byte>()",
    }
    NULLABLE_DEFAULT = "null"
    FALLBACK_DEFAULT = "null!"

    UNKNOWN_TYPE = "object"
    PRIMARY_KEY_TYPE = "long"

    RESERVED_WORDS = CSHARP_IDENTIFIER_RESERVED
    FIELD_CASE = NamingCase.PASCAL_CASE

    def collection_type(self, element_type: str) -> str:
        return f"ICollection<{element_type}>"

    def nullable_type(self, target_type: str) -> str:
        if target_type.endswith("?"):
            return target_type
        return f"{target_type}?"
