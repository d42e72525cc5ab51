"""
Python code generator implementation.

Generates a FastAPI project: SQLAlchemy 2.0 models, Pydantic schemas,
repositories, services, routers and pytest API tests.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...core.config import GeneratorConfig
from ...core.generator import ArtifactKind, ArtifactSpec, TargetGenerator
from ...core.model import EntityModel
from ...core.types import normalize_source_type
from .types import PythonTypeMapper

# Column types for mapped_column()
SQLALCHEMY_TYPES = {
    "String": "String",
    "Character": "String",
    "Integer": "Integer",
    "Long": "BigInteger",
    "Short": "SmallInteger",
    "Byte": "SmallInteger",
    "Double": "Float",
    "Float": "Float",
    "BigDecimal": "Numeric",
    "Boolean": "Boolean",
    "LocalDate": "Date",
    "LocalDateTime": "DateTime",
    "LocalTime": "Time",
    "Instant": "DateTime",
    "ZonedDateTime": "DateTime",
    "UUID": "Uuid",
    "byte[]": "LargeBinary",
}

# JSON literals used by generated API tests
SAMPLE_VALUES = {
    "String": '"sample"',
    "Character": '"a"',
    "Integer": "1",
    "Long": "1",
    "Short": "1",
    "Byte": "1",
    "Double": "1.5",
    "Float": "1.5",
    "BigDecimal": '"10.00"',
    "Boolean": "True",
    "LocalDate": '"2024-01-01"',
    "LocalDateTime": '"2024-01-01T00:00:00"',
    "LocalTime": '"12:00:00"',
    "Instant": '"2024-01-01T00:00:00Z"',
    "ZonedDateTime": '"2024-01-01T00:00:00Z"',
    "UUID": '"00000000-0000-0000-0000-000000000001"',
}


class PythonFastApiGenerator(TargetGenerator):
    """Code generator for FastAPI + SQLAlchemy projects."""

    artifacts = (
        ArtifactSpec(ArtifactKind.ENTITY, "entity.py.j2", "app/models/{snake}.py"),
        ArtifactSpec(ArtifactKind.DTO, "schemas.py.j2", "app/schemas/{snake}.py"),
        ArtifactSpec(
            ArtifactKind.REPOSITORY,
            "repository.py.j2",
            "app/repositories/{snake}_repository.py",
        ),
        ArtifactSpec(
            ArtifactKind.SERVICE, "service.py.j2", "app/services/{snake}_service.py"
        ),
        ArtifactSpec(
            ArtifactKind.CONTROLLER, "router.py.j2", "app/routers/{snake}_router.py"
        ),
        ArtifactSpec(ArtifactKind.TEST, "test_api.py.j2", "tests/test_{snake}_api.py"),
    )

    scaffold = (
        ("app/__init__.py", "package_init.py.j2"),
        ("app/core/database.py", "database.py.j2"),
        ("app/models/base.py", "base.py.j2"),
        ("app/models/associations.py", "associations.py.j2"),
        ("app/models/__init__.py", "models_init.py.j2"),
        ("app/main.py", "main.py.j2"),
        ("tests/conftest.py", "conftest.py.j2"),
    )

    feature_layout = {
        "social_login": {
            "config": ("app/core/oauth_config.py", "features/oauth_config.py.j2"),
            "service": (
                "app/services/social_auth_service.py",
                "features/social_auth_service.py.j2",
            ),
        },
        "mail": {
            "service": ("app/services/mail_service.py", "features/mail_service.py.j2"),
            "body": ("app/templates/email/{name}.html", "mail/{name}.html.j2"),
        },
        "file_storage": {
            "service": (
                "app/services/file_storage_service.py",
                "features/file_storage_service.py.j2",
            ),
            "backend": (
                "app/services/storage/{backend}_storage.py",
                "features/storage_backend.py.j2",
            ),
        },
        "password_reset": {
            "service": (
                "app/services/password_reset_service.py",
                "features/password_reset_service.py.j2",
            ),
            "model": (
                "app/models/password_reset_token.py",
                "features/password_reset_token.py.j2",
            ),
        },
    }

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    @property
    def target_name(self) -> str:
        return "python-fastapi"

    @property
    def language(self) -> str:
        return "python"

    @property
    def framework(self) -> str:
        return "fastapi"

    @property
    def file_extension(self) -> str:
        return ".py"

    def create_type_mapper(self) -> PythonTypeMapper:
        return PythonTypeMapper()

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        samples = self._sample_values(model)
        return {
            "columns": self._column_types(model),
            "samples": samples,
            "create_testable": all(
                field.nullable or field.name in samples for field in model.fields
            )
            and not model.owning_relations,
            "related": self._related_entities(model),
            "sqlalchemy_imports": self._sqlalchemy_imports(model),
        }

    def scaffold_context(self, models: Sequence[EntityModel]) -> Dict[str, Any]:
        return {"junctions": self._collect_junctions(models)}

    @staticmethod
    def _collect_junctions(models: Sequence[EntityModel]) -> List[Dict[str, str]]:
        """Each junction table once, seen from the first entity that uses it."""
        junctions = []
        seen = set()
        for model in models:
            for relation in model.collection_relations:
                if not relation.join_table or relation.join_table in seen:
                    continue
                seen.add(relation.join_table)
                junctions.append(
                    {
                        "name": relation.join_table,
                        "source_column": relation.join_column,
                        "source_table": model.table_name,
                        "target_column": relation.inverse_join_column,
                        "target_table": relation.target_table,
                    }
                )
        return junctions

    def _column_types(self, model: EntityModel) -> Dict[str, str]:
        """SQLAlchemy column type expression per field."""
        columns = {}
        for field in model.fields:
            source = normalize_source_type(field.source_type)
            column_type = SQLALCHEMY_TYPES.get(source, "JSON")
            if column_type == "String":
                column_type = f"String({field.length or (1 if source == 'Character' else 255)})"
            elif column_type == "Numeric":
                column_type = "Numeric(19, 2)"
            elif source in ("Instant", "ZonedDateTime"):
                column_type = "DateTime(timezone=True)"
            columns[field.name] = column_type
        return columns

    def _sqlalchemy_imports(self, model: EntityModel) -> List[str]:
        names = {"BigInteger"}
        for expression in self._column_types(model).values():
            names.add(expression.split("(")[0])
        if model.owning_relations:
            names.add("ForeignKey")
        if model.has_indexes:
            names.add("Index")
        return sorted(names)

    def _sample_values(self, model: EntityModel) -> Dict[str, str]:
        samples = {}
        for field in model.fields:
            source = normalize_source_type(field.source_type)
            value = SAMPLE_VALUES.get(source)
            if value is None:
                continue
            if source == "String" and field.length and field.length < 6:
                value = '"' + "s" * field.length + '"'
            samples[field.name] = value
        return samples

    @staticmethod
    def _related_entities(model: EntityModel) -> List[Dict[str, str]]:
        related = []
        seen = {model.entity_name}
        for relation in model.relations:
            if relation.target_entity in seen:
                continue
            seen.add(relation.target_entity)
            related.append({"entity": relation.target_entity, "module": relation.target_snake})
        return related


def create_python_generator(config: Optional[GeneratorConfig] = None) -> PythonFastApiGenerator:
    """
    Create a FastAPI generator.

    Args:
        config: Optional configuration; defaults for python-fastapi otherwise

    Returns:
        Configured PythonFastApiGenerator instance
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("python-fastapi")
    return PythonFastApiGenerator(config)
