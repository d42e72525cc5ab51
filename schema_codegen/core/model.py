"""
Intermediate emission model.

Decides *what* each generated artifact contains (fields, navigation
properties, indexes, imports) independently of *how* a target renders it.
Templates only ever see an EntityModel, so relationship and type-mapping
logic can be tested without looking at output text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .diagnostics import Diagnostic, DiagnosticKind, info, warning
from .naming import (
    NameSanitizer,
    convert_case,
    to_kebab_case,
    to_plural,
    to_snake_case,
)
from .relationships import ManyToManyRelation, RelationType, TableRelationship
from .schema import ForeignKey, StoredFunction, Table
from .types import TypeMapper

# Cascades on generated one-to-many collections; deletes stay explicit
ADDITIVE_CASCADES = ("persist", "merge")


class RelationKind(Enum):
    """Shape of a generated navigation property."""

    ONE_TO_ONE = "one_to_one"
    MANY_TO_ONE = "many_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_MANY = "many_to_many"


@dataclass(frozen=True)
class FieldSpec:
    """A scalar field generated from a business column."""

    name: str
    column_name: str
    source_type: str
    target_type: str
    nullable: bool
    unique: bool = False
    length: Optional[int] = None
    default_value: str = ""
    import_ref: Optional[str] = None


@dataclass(frozen=True)
class RelationFieldSpec:
    """A navigation property generated from a relationship."""

    kind: RelationKind
    name: str
    target_entity: str
    target_table: str
    target_variable: str
    target_type: str
    target_kebab: str = ""
    target_snake: str = ""
    nullable: bool = True
    unique: bool = False
    join_column: Optional[str] = None
    join_field: Optional[str] = None
    join_field_type: Optional[str] = None
    referenced_column: str = "id"
    mapped_by: Optional[str] = None
    back_reference: Optional[str] = None  # member name on the other side
    join_table: Optional[str] = None
    inverse_join_column: Optional[str] = None
    cascade: Tuple[str, ...] = ()

    @property
    def is_collection(self) -> bool:
        return self.kind in (RelationKind.ONE_TO_MANY, RelationKind.MANY_TO_MANY)

    @property
    def is_owning(self) -> bool:
        """Owning side carries the join column."""
        return self.kind in (RelationKind.ONE_TO_ONE, RelationKind.MANY_TO_ONE)


@dataclass(frozen=True)
class IndexSpec:
    name: str
    columns: Tuple[str, ...]
    unique: bool = False


@dataclass(frozen=True)
class FunctionSpec:
    """Repository method stub for a stored function."""

    name: str
    method_name: str
    parameters: Tuple[Tuple[str, str], ...] = ()
    return_type: Optional[str] = None


@dataclass
class EntityModel:
    """Everything a target needs to render the artifacts of one table."""

    table: Table
    entity_name: str
    variable_name: str
    primary_key_name: str
    primary_key_type: str
    fields: List[FieldSpec] = field(default_factory=list)
    relations: List[RelationFieldSpec] = field(default_factory=list)
    indexes: List[IndexSpec] = field(default_factory=list)
    functions: List[FunctionSpec] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    snake_name: str = ""  # module stem, keyword-escaped for the target

    def __post_init__(self):
        if not self.snake_name:
            self.snake_name = to_snake_case(self.entity_name)

    @property
    def table_name(self) -> str:
        return self.table.name

    @property
    def module_name(self) -> str:
        return self.table.module_name

    @property
    def kebab_name(self) -> str:
        return to_kebab_case(self.entity_name)

    @property
    def plural_name(self) -> str:
        return to_plural(self.entity_name)

    @property
    def plural_variable_name(self) -> str:
        return to_plural(self.table.entity_variable_name)

    @property
    def has_indexes(self) -> bool:
        return bool(self.indexes)

    @property
    def has_relations(self) -> bool:
        return bool(self.relations)

    @property
    def owning_relations(self) -> List[RelationFieldSpec]:
        return [relation for relation in self.relations if relation.is_owning]

    @property
    def collection_relations(self) -> List[RelationFieldSpec]:
        return [relation for relation in self.relations if relation.is_collection]

    @property
    def extends_base(self) -> bool:
        return self.table.extends_base


class _ModelBuilder:
    """Builds one EntityModel; one builder per table, never reused."""

    def __init__(self, table: Table, type_mapper: TypeMapper):
        self.table = table
        self.mapper = type_mapper
        self.case = type_mapper.FIELD_CASE
        self.sanitizer: NameSanitizer = type_mapper.create_sanitizer()
        self.imports: List[str] = []
        self.diagnostics: List[Diagnostic] = []

    def member_name(self, raw_name: str) -> str:
        """Unique, keyword-safe member name in the target's field case."""
        candidate = convert_case(raw_name, self.case)
        name = self.sanitizer.sanitize_name(
            raw_name, self.case, self.mapper.KEYWORD_SUFFIX
        )
        if candidate and self.mapper.is_reserved(candidate):
            self.diagnostics.append(
                info(
                    DiagnosticKind.KEYWORD_ESCAPED,
                    f"'{candidate}' is reserved, renamed to '{name}'",
                    table=self.table.name,
                    column=raw_name,
                )
            )
        elif name != candidate:
            self.diagnostics.append(
                info(
                    DiagnosticKind.NAME_COLLISION,
                    f"'{candidate}' already used, renamed to '{name}'",
                    table=self.table.name,
                    column=raw_name,
                )
            )
        return name

    def map_column_type(self, column_name: str, source_type: str, nullable: bool) -> str:
        target_type = self.mapper.map_type(source_type, nullable)
        if not self.mapper.is_mapped(source_type):
            self.diagnostics.append(
                warning(
                    DiagnosticKind.UNMAPPED_TYPE,
                    f"source type '{source_type}' has no mapping, using '{target_type}'",
                    table=self.table.name,
                    column=column_name,
                )
            )
        self.add_import(self.mapper.required_import(source_type, nullable))
        return target_type

    def module_stem(self, entity_name: str) -> str:
        """snake_case module name, suffixed when it is a target keyword (class -> class_)."""
        return self.mapper.escape_identifier(to_snake_case(entity_name))

    @staticmethod
    def inverse_collection_base(source: Table, fk: ForeignKey) -> str:
        """
        Raw name of the collection a referenced entity holds for rows of ``source``.

        When ``source`` references the same table through several foreign keys,
        the collection is prefixed with the key's property (senderMessages,
        recipientMessages) so each inverse pairs with its own owning side.
        """
        plural = to_plural(source.entity_variable_name)
        siblings = [
            other
            for other in source.foreign_keys
            if other.referenced_table.lower() == fk.referenced_table.lower()
        ]
        if len(siblings) > 1:
            return f"{fk.property_name}_{plural}"
        return plural

    def inverse_collection_name(self, source: Table, fk: ForeignKey) -> str:
        return self.mapper.escape_identifier(
            convert_case(self.inverse_collection_base(source, fk), self.case)
        )

    def add_import(self, import_ref: Optional[str]):
        if import_ref and import_ref not in self.imports:
            self.imports.append(import_ref)

    def build_fields(self) -> List[FieldSpec]:
        fields = []
        for column in self.table.business_columns:
            target_type = self.map_column_type(
                column.name, column.source_type, column.nullable
            )
            fields.append(
                FieldSpec(
                    name=self.member_name(column.name),
                    column_name=column.name,
                    source_type=column.source_type,
                    target_type=target_type,
                    nullable=column.nullable,
                    unique=column.unique,
                    length=column.length,
                    default_value=self.mapper.default_value_for(target_type),
                    import_ref=self.mapper.required_import(
                        column.source_type, column.nullable
                    ),
                )
            )
        return fields

    def build_outgoing(self, relationships: Sequence[TableRelationship]) -> List[RelationFieldSpec]:
        relations = []
        for relationship in relationships:
            fk = relationship.foreign_key
            target = relationship.target_table
            column = self.table.get_column(fk.column)
            nullable = column.nullable if column is not None else True

            if column is not None:
                join_type = self.map_column_type(column.name, column.source_type, nullable)
            else:
                join_type = self.mapper.primary_key_type()
                if nullable:
                    join_type = self.mapper.nullable_type(join_type)

            one_to_one = relationship.relation_type == RelationType.ONE_TO_ONE
            relations.append(
                RelationFieldSpec(
                    kind=RelationKind.ONE_TO_ONE if one_to_one else RelationKind.MANY_TO_ONE,
                    name=self.member_name(fk.property_name),
                    target_entity=target.entity_name,
                    target_table=target.name,
                    target_variable=target.entity_variable_name,
                    target_type=self.mapper.reference_type(target.entity_name, nullable),
                    target_kebab=to_kebab_case(target.entity_name),
                    target_snake=self.module_stem(target.entity_name),
                    nullable=nullable,
                    unique=one_to_one,
                    join_column=fk.column,
                    join_field=self.member_name(fk.column),
                    join_field_type=join_type,
                    referenced_column=fk.referenced_column,
                    back_reference=self.inverse_collection_name(self.table, fk),
                )
            )
        return relations

    def build_inverse(self, relationships: Sequence[TableRelationship]) -> List[RelationFieldSpec]:
        relations = []
        for relationship in relationships:
            source = relationship.source_table
            fk = relationship.foreign_key
            mapped_by = self.mapper.escape_identifier(
                convert_case(fk.property_name, self.case)
            )
            relations.append(
                RelationFieldSpec(
                    kind=RelationKind.ONE_TO_MANY,
                    name=self.member_name(self.inverse_collection_base(source, fk)),
                    target_entity=source.entity_name,
                    target_table=source.name,
                    target_variable=source.entity_variable_name,
                    target_type=self.mapper.collection_type(source.entity_name),
                    target_kebab=to_kebab_case(source.entity_name),
                    target_snake=self.module_stem(source.entity_name),
                    join_column=fk.column,
                    mapped_by=mapped_by,
                    back_reference=mapped_by,
                    cascade=ADDITIVE_CASCADES,
                )
            )
        return relations

    def build_many_to_many(self, relations_in: Sequence[ManyToManyRelation]) -> List[RelationFieldSpec]:
        relations = []
        for relation in relations_in:
            other = relation.other_table
            relations.append(
                RelationFieldSpec(
                    kind=RelationKind.MANY_TO_MANY,
                    name=self.member_name(to_plural(other.entity_variable_name)),
                    target_entity=other.entity_name,
                    target_table=other.name,
                    target_variable=other.entity_variable_name,
                    target_type=self.mapper.collection_type(other.entity_name),
                    target_kebab=to_kebab_case(other.entity_name),
                    target_snake=self.module_stem(other.entity_name),
                    join_table=relation.junction_table_name,
                    join_column=relation.source_column,
                    inverse_join_column=relation.target_column,
                    back_reference=self.mapper.escape_identifier(
                        convert_case(to_plural(self.table.entity_variable_name), self.case)
                    ),
                )
            )
        return relations

    def build_indexes(self) -> List[IndexSpec]:
        return [
            IndexSpec(
                name=index.resolved_name(self.table.name),
                columns=tuple(index.columns),
                unique=index.unique,
            )
            for index in self.table.indexes
        ]

    def build_functions(self, functions: Sequence[StoredFunction]) -> List[FunctionSpec]:
        specs = []
        method_namer = self.mapper.create_sanitizer()
        for function in functions:
            param_namer = self.mapper.create_sanitizer()
            parameters = tuple(
                (
                    param_namer.sanitize_name(name, self.case, self.mapper.KEYWORD_SUFFIX),
                    self.map_column_type(name, source_type, False),
                )
                for name, source_type in function.parameters
            )
            return_type = None
            if function.return_type:
                return_type = self.map_column_type(
                    function.name, function.return_type, True
                )
            specs.append(
                FunctionSpec(
                    name=function.name,
                    method_name=method_namer.sanitize_name(
                        function.name, self.case, self.mapper.KEYWORD_SUFFIX
                    ),
                    parameters=parameters,
                    return_type=return_type,
                )
            )
        return specs


def build_entity_model(
    table: Table,
    outgoing: Sequence[TableRelationship],
    incoming: Sequence[TableRelationship],
    many_to_many: Sequence[ManyToManyRelation],
    type_mapper: TypeMapper,
    functions: Sequence[StoredFunction] = (),
) -> EntityModel:
    """
    Decide the content of every artifact generated for one table.

    Args:
        table: Entity table
        outgoing: Relationships owned by the table
        incoming: Inverse relationships from non-junction tables
        many_to_many: Relations through junction tables
        type_mapper: Target type mapper
        functions: Stored functions attached to the table

    Returns:
        EntityModel with fields, relations, indexes, imports and diagnostics
    """
    builder = _ModelBuilder(table, type_mapper)

    primary_key = table.primary_key
    primary_key_name = builder.member_name(primary_key.name if primary_key else "id")

    fields = builder.build_fields()
    relations = builder.build_outgoing(outgoing)
    relations += builder.build_inverse(incoming)
    relations += builder.build_many_to_many(many_to_many)
    indexes = builder.build_indexes()
    function_specs = builder.build_functions(functions)

    return EntityModel(
        table=table,
        entity_name=type_mapper.escape_identifier(table.entity_name),
        variable_name=type_mapper.escape_identifier(table.entity_variable_name),
        primary_key_name=primary_key_name,
        primary_key_type=type_mapper.primary_key_type(),
        fields=fields,
        relations=relations,
        indexes=indexes,
        functions=function_specs,
        imports=sorted(builder.imports),
        diagnostics=builder.diagnostics,
        snake_name=builder.module_stem(table.entity_name),
    )
