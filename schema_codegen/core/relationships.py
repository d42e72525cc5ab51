"""
Relationship resolution from foreign-key topology.

Builds, once per schema, the index of outgoing relationships, the inverse
(one-to-many) view and the many-to-many relations implied by junction
tables. Lookups never raise; anything that cannot be resolved is skipped
and reported through `diagnostics`.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from ..logging_config import get_logger
from .diagnostics import Diagnostic, DiagnosticKind, warning
from .schema import ForeignKey, SchemaModel, Table

logger = get_logger(__name__)


class RelationType(Enum):
    """Cardinality of a foreign key seen from its owning table."""

    ONE_TO_ONE = "one_to_one"
    MANY_TO_ONE = "many_to_one"


@dataclass(frozen=True)
class TableRelationship:
    """Relationship derived from one foreign key."""

    source_table: Table
    target_table: Table
    foreign_key: ForeignKey
    relation_type: RelationType

    @property
    def is_one_to_one(self) -> bool:
        return self.relation_type == RelationType.ONE_TO_ONE


@dataclass(frozen=True)
class ManyToManyRelation:
    """Many-to-many link through a junction table, seen from one side."""

    junction_table_name: str
    source_column: str
    target_column: str
    other_table: Table


def infer_relation_type(table: Table, foreign_key: ForeignKey) -> RelationType:
    """ONE_TO_ONE when the owning column is unique, MANY_TO_ONE otherwise."""
    if table.is_unique_column(foreign_key.column):
        return RelationType.ONE_TO_ONE
    return RelationType.MANY_TO_ONE


class RelationshipResolver:
    """
    Read-only relationship index for one schema.

    The index is fully built in the constructor, so a resolver can be shared
    by worker threads generating different tables.
    """

    def __init__(self, schema: SchemaModel):
        self.schema = schema
        self._diagnostics: List[Diagnostic] = []

        relationships = self._build_relationships()
        self._relationships: Tuple[TableRelationship, ...] = tuple(relationships)
        self._by_source = self._index_by_source(relationships)
        self._many_to_many = self._build_many_to_many()

        logger.debug(
            "Resolved %d relationships across %d tables",
            len(self._relationships),
            len(schema.tables),
        )

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Warnings for relations that were skipped while building the index."""
        return list(self._diagnostics)

    def _build_relationships(self) -> List[TableRelationship]:
        """Every resolvable foreign key, in table order then key order."""
        relationships = []
        for table in self.schema.tables:
            for fk in table.foreign_keys:
                target = self.schema.get_table(fk.referenced_table)
                if target is None:
                    logger.debug(
                        "Skipping dangling foreign key %s.%s -> %s",
                        table.name,
                        fk.column,
                        fk.referenced_table,
                    )
                    self._diagnostics.append(
                        warning(
                            DiagnosticKind.DANGLING_FOREIGN_KEY,
                            f"relation to unknown table '{fk.referenced_table}' skipped",
                            table=table.name,
                            column=fk.column,
                        )
                    )
                    continue
                relationships.append(
                    TableRelationship(
                        source_table=table,
                        target_table=target,
                        foreign_key=fk,
                        relation_type=infer_relation_type(table, fk),
                    )
                )
        return relationships

    @staticmethod
    def _index_by_source(
        relationships: List[TableRelationship],
    ) -> Mapping[str, Tuple[TableRelationship, ...]]:
        grouped: Dict[str, List[TableRelationship]] = {}
        for relationship in relationships:
            grouped.setdefault(relationship.source_table.name, []).append(relationship)
        return MappingProxyType({name: tuple(rels) for name, rels in grouped.items()})

    def _build_many_to_many(self) -> Mapping[str, Tuple[ManyToManyRelation, ...]]:
        for junction in self.schema.junction_tables():
            if len(junction.foreign_keys) != 2:
                self._diagnostics.append(
                    warning(
                        DiagnosticKind.MALFORMED_JUNCTION,
                        f"junction table has {len(junction.foreign_keys)} foreign keys, "
                        "expected 2; no many-to-many relation generated",
                        table=junction.name,
                    )
                )

        return MappingProxyType(
            {
                table.name: tuple(self._resolve_many_to_many(table))
                for table in self.schema.tables
            }
        )

    def _resolve_many_to_many(self, table: Table) -> List[ManyToManyRelation]:
        relations = []
        for junction in self.schema.junction_tables():
            if len(junction.foreign_keys) != 2:
                continue

            first, second = junction.foreign_keys
            # On a self-referencing junction the first key is this side
            if first.references(table.name):
                this_fk, other_fk = first, second
            elif second.references(table.name):
                this_fk, other_fk = second, first
            else:
                continue

            other_table = self.schema.get_table(other_fk.referenced_table)
            if other_table is None:
                continue

            relations.append(
                ManyToManyRelation(
                    junction_table_name=junction.name,
                    source_column=this_fk.column,
                    target_column=other_fk.column,
                    other_table=other_table,
                )
            )
        return relations

    def all_relationships(self) -> List[TableRelationship]:
        return list(self._relationships)

    def relationships_by_source(self) -> Mapping[str, Tuple[TableRelationship, ...]]:
        """Read-only index of relationships keyed by source table name."""
        return self._by_source

    def outgoing(self, table: Table) -> List[TableRelationship]:
        return list(self._by_source.get(table.name, ()))

    def inverse_relationships(self, table: Table) -> List[TableRelationship]:
        """Incoming relationships whose source is a real entity, not a junction."""
        return [
            relationship
            for relationship in self._relationships
            if relationship.target_table.name == table.name
            and not relationship.source_table.is_junction_table
        ]

    def many_to_many(self, table: Table) -> List[ManyToManyRelation]:
        cached = self._many_to_many.get(table.name)
        if cached is not None:
            return list(cached)
        return self._resolve_many_to_many(table)

    def relations_for(
        self, table: Table
    ) -> Tuple[
        List[TableRelationship], List[TableRelationship], List[ManyToManyRelation]
    ]:
        """Outgoing, inverse and many-to-many relations for one table."""
        return (
            self.outgoing(table),
            self.inverse_relationships(table),
            self.many_to_many(table),
        )
