"""
Core schema representation for code generation.

Immutable relational schema model (tables, columns, foreign keys, indexes,
stored functions) plus the conversion from the parser's JSON document into
that model. Derived names are pure functions of the table name.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .diagnostics import Diagnostic, DiagnosticKind, warning
from .naming import (
    is_audit_field,
    to_camel_case,
    to_pascal_case,
    to_property_name,
    to_singular,
)

logger = get_logger(__name__)

# Columns managed by the generated base entity
BASE_COLUMNS = frozenset(
    {
        "estado",
        "active",
        "activo",
        "fecha_creacion",
        "fecha_actualizacion",
        "fecha_eliminacion",
        "creado_por",
        "modificado_por",
        "eliminado_por",
        "version",
        "created_at",
        "updated_at",
        "deleted_at",
        "created_by",
        "updated_by",
        "deleted_by",
    }
)

AUDIT_TABLE_SUFFIXES = ("_aud", "_audit")
AUDIT_TABLE_NAMES = frozenset({"revision_info"})

GLOBAL_FUNCTIONS_KEY = "_global"


class SchemaError(Exception):
    """Exception raised for malformed schema documents."""

    pass


@dataclass(frozen=True)
class Column:
    """A single table column."""

    name: str
    source_type: str
    nullable: bool = True
    unique: bool = False
    length: Optional[int] = None
    primary_key: bool = False
    default: Optional[str] = None

    @property
    def is_audit(self) -> bool:
        return is_audit_field(self.name)


@dataclass(frozen=True)
class ForeignKey:
    """A foreign key owned by one column of a table."""

    column: str
    referenced_table: str
    referenced_column: str = "id"
    field_name: Optional[str] = None  # explicit navigation-field override
    on_delete: Optional[str] = None

    @property
    def property_name(self) -> str:
        """Navigation field name (created_by_id -> createdBy)."""
        if self.field_name:
            return self.field_name
        return to_camel_case(to_property_name(self.column) or self.column)

    @property
    def referenced_entity_name(self) -> str:
        return to_pascal_case(to_singular(self.referenced_table))

    def references(self, table_name: str) -> bool:
        """Case-insensitive match against a table name."""
        if not table_name or not self.referenced_table:
            return False
        return self.referenced_table.lower() == table_name.lower()


@dataclass(frozen=True)
class Index:
    """An index over an ordered list of columns."""

    columns: Tuple[str, ...]
    unique: bool = False
    name: Optional[str] = None

    def resolved_name(self, table_name: str) -> str:
        if self.name:
            return self.name
        prefix = "uk" if self.unique else "idx"
        return f"{prefix}_{table_name}_{'_'.join(self.columns)}"


@dataclass(frozen=True)
class StoredFunction:
    """Stored procedure or function metadata carried from the parser."""

    name: str
    parameters: Tuple[Tuple[str, str], ...] = ()
    return_type: Optional[str] = None
    table: Optional[str] = None


@dataclass(frozen=True)
class Table:
    """A relational table and its derived naming."""

    name: str
    columns: Tuple[Column, ...] = ()
    foreign_keys: Tuple[ForeignKey, ...] = ()
    indexes: Tuple[Index, ...] = ()
    is_junction_table: bool = False
    comment: Optional[str] = None

    @property
    def entity_name(self) -> str:
        """PascalCase singular name (order_items -> OrderItem)."""
        return to_pascal_case(to_singular(self.name))

    @property
    def module_name(self) -> str:
        """Lower-case name without separators (order_items -> orderitems)."""
        return "".join(ch for ch in self.name.lower() if ch.isalnum())

    @property
    def entity_variable_name(self) -> str:
        return to_camel_case(self.entity_name)

    @property
    def primary_key_columns(self) -> List[Column]:
        return [column for column in self.columns if column.primary_key]

    @property
    def primary_key(self) -> Optional[Column]:
        keys = self.primary_key_columns
        return keys[0] if keys else None

    @property
    def foreign_key_columns(self) -> List[str]:
        return [fk.column.lower() for fk in self.foreign_keys]

    @property
    def business_columns(self) -> List[Column]:
        """Columns rendered as plain fields: no audit, primary key or FK columns."""
        fk_columns = set(self.foreign_key_columns)
        return [
            column
            for column in self.columns
            if not column.primary_key
            and not column.is_audit
            and column.name.lower() not in BASE_COLUMNS
            and column.name.lower() not in fk_columns
        ]

    @property
    def extends_base(self) -> bool:
        """True when the table carries the framework audit columns."""
        names = {column.name.lower() for column in self.columns}
        return bool(names & {"estado", "active", "activo", "created_at"})

    @property
    def is_audit_table(self) -> bool:
        lower = self.name.lower()
        return lower.endswith(AUDIT_TABLE_SUFFIXES) or lower in AUDIT_TABLE_NAMES

    def get_column(self, name: str) -> Optional[Column]:
        """Case-insensitive column lookup."""
        if not name:
            return None
        lower = name.lower()
        for column in self.columns:
            if column.name.lower() == lower:
                return column
        return None

    def foreign_key_for(self, column_name: str) -> Optional[ForeignKey]:
        lower = column_name.lower()
        for fk in self.foreign_keys:
            if fk.column.lower() == lower:
                return fk
        return None

    def is_unique_column(self, column_name: str) -> bool:
        """Column is unique by flag or by a unique single-column index."""
        column = self.get_column(column_name)
        if column is not None and column.unique:
            return True
        lower = column_name.lower()
        return any(
            index.unique
            and len(index.columns) == 1
            and index.columns[0].lower() == lower
            for index in self.indexes
        )


@dataclass(frozen=True)
class SchemaModel:
    """Immutable schema for one generation request."""

    tables: Tuple[Table, ...] = ()
    functions: Tuple[StoredFunction, ...] = ()
    name: Optional[str] = None

    def get_table(self, name: str) -> Optional[Table]:
        """Case-insensitive table lookup, first match wins."""
        if not name:
            return None
        lower = name.lower()
        for table in self.tables:
            if table.name.lower() == lower:
                return table
        return None

    def entity_tables(self) -> List[Table]:
        """Tables that become entities: no junction or audit-history tables."""
        return [
            table
            for table in self.tables
            if not table.is_junction_table and not table.is_audit_table
        ]

    def junction_tables(self) -> List[Table]:
        return [table for table in self.tables if table.is_junction_table]

    def functions_by_table(self) -> Dict[str, List[StoredFunction]]:
        """
        Group stored functions by the table they operate on.

        An explicit table wins. Otherwise the first table whose singular name
        appears in the function name claims it; the rest are global.
        """
        grouped: Dict[str, List[StoredFunction]] = {}
        for function in self.functions:
            key = GLOBAL_FUNCTIONS_KEY
            if function.table and self.get_table(function.table) is not None:
                key = self.get_table(function.table).name
            else:
                function_name = function.name.lower()
                for table in self.tables:
                    singular = to_singular(table.name.lower())
                    if singular and singular in function_name:
                        key = table.name
                        break
            grouped.setdefault(key, []).append(function)
        return grouped

    def validate(self) -> List[Diagnostic]:
        """Report structural problems without rejecting the schema."""
        diagnostics: List[Diagnostic] = []
        entity_names: Dict[str, str] = {}
        module_names: Dict[str, str] = {}

        for table in self.tables:
            if not table.primary_key_columns:
                diagnostics.append(
                    warning(
                        DiagnosticKind.MISSING_PRIMARY_KEY,
                        "table has no primary key",
                        table=table.name,
                    )
                )

            for fk in table.foreign_keys:
                if self.get_table(fk.referenced_table) is None:
                    diagnostics.append(
                        warning(
                            DiagnosticKind.DANGLING_FOREIGN_KEY,
                            f"references unknown table '{fk.referenced_table}'",
                            table=table.name,
                            column=fk.column,
                        )
                    )

            if table.is_junction_table:
                continue

            previous = entity_names.get(table.entity_name)
            if previous is not None:
                diagnostics.append(
                    warning(
                        DiagnosticKind.DUPLICATE_ENTITY_NAME,
                        f"entity name '{table.entity_name}' also derived from '{previous}'",
                        table=table.name,
                    )
                )
            else:
                entity_names[table.entity_name] = table.name

            previous = module_names.get(table.module_name)
            if previous is not None:
                diagnostics.append(
                    warning(
                        DiagnosticKind.NAME_COLLISION,
                        f"module name '{table.module_name}' also derived from '{previous}'",
                        table=table.name,
                    )
                )
            else:
                module_names[table.module_name] = table.name

        return diagnostics


def infer_junction_table(columns: List[Column], foreign_keys: List[ForeignKey]) -> bool:
    """
    Parser-side junction classification.

    A junction table has exactly two foreign keys whose columns form its
    whole primary key.
    """
    if len(foreign_keys) != 2:
        return False
    pk_columns = {column.name.lower() for column in columns if column.primary_key}
    fk_columns = {fk.column.lower() for fk in foreign_keys}
    return bool(pk_columns) and pk_columns == fk_columns


def _get(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Read the first present key, accepting camelCase or snake_case spellings."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _convert_column(data: Dict[str, Any], table_name: str) -> Column:
    if not isinstance(data, dict) or not data.get("name"):
        raise SchemaError(f"Table '{table_name}' has a column without a name")
    length = _get(data, "length", "size")
    return Column(
        name=data["name"],
        source_type=_get(data, "type", "sourceType", "source_type", default="String"),
        nullable=bool(_get(data, "nullable", default=True)),
        unique=bool(_get(data, "unique", default=False)),
        length=int(length) if length is not None else None,
        primary_key=bool(_get(data, "primaryKey", "primary_key", default=False)),
        default=_get(data, "default", "defaultValue", "default_value"),
    )


def _convert_foreign_key(data: Dict[str, Any], table_name: str) -> ForeignKey:
    column = _get(data, "column", "columnName", "column_name")
    referenced = _get(data, "referencedTable", "referenced_table")
    if not column or not referenced:
        raise SchemaError(
            f"Foreign key on table '{table_name}' needs column and referencedTable"
        )
    return ForeignKey(
        column=column,
        referenced_table=referenced,
        referenced_column=_get(
            data, "referencedColumn", "referenced_column", default="id"
        ),
        field_name=_get(data, "fieldName", "field_name"),
        on_delete=_get(data, "onDelete", "on_delete"),
    )


def _convert_index(data: Dict[str, Any], table_name: str) -> Index:
    columns = data.get("columns") or []
    if not columns:
        raise SchemaError(f"Index on table '{table_name}' has no columns")
    return Index(
        columns=tuple(columns),
        unique=bool(data.get("unique", False)),
        name=data.get("name"),
    )


def _convert_table(data: Dict[str, Any]) -> Table:
    if not isinstance(data, dict) or not data.get("name"):
        raise SchemaError("Every table needs a name")
    name = data["name"]

    columns = [_convert_column(c, name) for c in data.get("columns") or []]
    foreign_keys = [
        _convert_foreign_key(fk, name)
        for fk in _get(data, "foreignKeys", "foreign_keys", default=None) or []
    ]
    indexes = [_convert_index(ix, name) for ix in data.get("indexes") or []]

    junction = _get(data, "junction", "isJunctionTable", "is_junction_table")
    if junction is None:
        junction = infer_junction_table(columns, foreign_keys)

    return Table(
        name=name,
        columns=tuple(columns),
        foreign_keys=tuple(foreign_keys),
        indexes=tuple(indexes),
        is_junction_table=bool(junction),
        comment=data.get("comment"),
    )


def _convert_function(data: Dict[str, Any]) -> StoredFunction:
    if not isinstance(data, dict) or not data.get("name"):
        raise SchemaError("Every function needs a name")
    parameters = tuple(
        (param.get("name", f"arg{i}"), param.get("type", "String"))
        for i, param in enumerate(data.get("parameters") or [])
    )
    return StoredFunction(
        name=data["name"],
        parameters=parameters,
        return_type=_get(data, "returnType", "return_type"),
        table=data.get("table"),
    )


def schema_from_dict(data: Dict[str, Any]) -> SchemaModel:
    """
    Build a SchemaModel from the parser's JSON document.

    Args:
        data: Document with "tables" and optional "functions" and "name"

    Returns:
        Immutable schema model

    Raises:
        SchemaError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema document must be a JSON object")

    tables_data = data.get("tables")
    if not isinstance(tables_data, list):
        raise SchemaError("Schema document must contain a 'tables' list")

    tables = tuple(_convert_table(t) for t in tables_data)
    functions = tuple(_convert_function(f) for f in data.get("functions") or [])

    logger.debug(
        "Converted schema with %d tables and %d functions", len(tables), len(functions)
    )
    return SchemaModel(tables=tables, functions=functions, name=data.get("name"))
