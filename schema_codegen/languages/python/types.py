"""
Python type system for code generation.

Maps source types to annotations used by SQLAlchemy 2.0 typed mappings
and Pydantic models.
"""

from ...core.naming import NamingCase
from ...core.types import TypeMapper
from .naming import PYTHON_IDENTIFIER_RESERVED


class PythonTypeMapper(TypeMapper):
    """Type mapper for the Python / FastAPI target."""

    NON_NULLABLE_TYPES = {
        "String": "str",
        "Character": "str",
        "Integer": "int",
        "Long": "int",
        "Short": "int",
        "Byte": "int",
        "Double": "float",
        "Float": "float",
        "BigDecimal": "Decimal",
        "Boolean": "bool",
        "LocalDate": "date",
        "LocalDateTime": "datetime",
        "LocalTime": "time",
        "Instant": "datetime",
        "ZonedDateTime": "datetime",
        "UUID": "UUID",
        "byte[]": "bytes",
    }

    NULLABLE_TYPES = {
        source: f"{target} | None" for source, target in NON_NULLABLE_TYPES.items()
    }

    IMPORTS = {
        "BigDecimal": "from decimal import Decimal",
        "LocalDate": "from datetime import date",
        "LocalDateTime": "from datetime import datetime",
        "LocalTime": "from datetime import time",
        "Instant": "from datetime import datetime",
        "ZonedDateTime": "from datetime import datetime",
        "UUID": "from uuid import UUID",
    }

    DEFAULT_VALUES = {
        "str": '""',
        "int": "0",
        "float": "0.0",
        "bool": "False",
        "Decimal": 'Decimal("0")',
        "bytes": 'b""',
        "date": "None",
        "datetime": "None",
        "time": "None",
        "UUID": "None",
        "Any": "None",
    }
    NULLABLE_DEFAULT = "None"
    FALLBACK_DEFAULT = "None"

    UNKNOWN_TYPE = "Any"
    UNKNOWN_IMPORT = "from typing import Any"
    PRIMARY_KEY_TYPE = "int"

    RESERVED_WORDS = PYTHON_IDENTIFIER_RESERVED
    FIELD_CASE = NamingCase.SNAKE_CASE

    def list_type(self, element_type: str) -> str:
        return f"list[{element_type}]"

    def nullable_type(self, target_type: str) -> str:
        if target_type.endswith(" | None"):
            return target_type
        return f"{target_type} | None"
