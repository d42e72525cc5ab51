"""
Rust code generator implementation.

Generates an Axum + sqlx service: row structs, request DTOs,
repositories, services, handlers and integration tests.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...core.config import GeneratorConfig
from ...core.generator import ArtifactKind, ArtifactSpec, TargetGenerator
from ...core.model import EntityModel
from .types import RustTypeMapper


class RustAxumGenerator(TargetGenerator):
    """Code generator for Rust Axum + sqlx projects."""

    artifacts = (
        ArtifactSpec(ArtifactKind.ENTITY, "model.rs.j2", "src/models/{snake}.rs"),
        ArtifactSpec(ArtifactKind.DTO, "dto.rs.j2", "src/dto/{snake}_dto.rs"),
        ArtifactSpec(
            ArtifactKind.REPOSITORY,
            "repository.rs.j2",
            "src/repository/{snake}_repository.rs",
        ),
        ArtifactSpec(
            ArtifactKind.SERVICE, "service.rs.j2", "src/service/{snake}_service.rs"
        ),
        ArtifactSpec(
            ArtifactKind.CONTROLLER, "handler.rs.j2", "src/handlers/{snake}_handler.rs"
        ),
        ArtifactSpec(ArtifactKind.TEST, "test.rs.j2", "tests/{snake}_test.rs"),
    )

    scaffold = (
        ("src/models/mod.rs", "models_mod.rs.j2"),
        ("src/dto/mod.rs", "dto_mod.rs.j2"),
        ("src/repository/mod.rs", "repository_mod.rs.j2"),
        ("src/service/mod.rs", "service_mod.rs.j2"),
        ("src/handlers/mod.rs", "handlers_mod.rs.j2"),
        ("src/error.rs", "error.rs.j2"),
        ("src/lib.rs", "lib.rs.j2"),
        ("src/main.rs", "main.rs.j2"),
    )

    feature_layout = {
        "social_login": {
            "config": ("src/auth/oauth_config.rs", "features/oauth_config.rs.j2"),
            "service": ("src/auth/social_auth.rs", "features/social_auth.rs.j2"),
        },
        "mail": {
            "service": ("src/mail/mail_service.rs", "features/mail_service.rs.j2"),
            "body": ("templates/email/{name}.html", "mail/{name}.html.j2"),
        },
        "file_storage": {
            "service": (
                "src/storage/storage_service.rs",
                "features/storage_service.rs.j2",
            ),
            "backend": (
                "src/storage/{backend}_storage.rs",
                "features/storage_backend.rs.j2",
            ),
        },
        "password_reset": {
            "service": ("src/auth/password_reset.rs", "features/password_reset.rs.j2"),
            "model": (
                "src/models/password_reset_token.rs",
                "features/password_reset_token.rs.j2",
            ),
        },
    }

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    @property
    def target_name(self) -> str:
        return "rust-axum"

    @property
    def language(self) -> str:
        return "rust"

    @property
    def framework(self) -> str:
        return "axum"

    @property
    def file_extension(self) -> str:
        return ".rs"

    def create_type_mapper(self) -> RustTypeMapper:
        return RustTypeMapper()

    def get_template_directory(self) -> Path:
        """Return the Rust templates directory."""
        return Path(__file__).parent / "templates"

    def base_context(self) -> Dict[str, Any]:
        context = super().base_context()
        context["crate_name"] = self.crate_name
        return context

    @property
    def crate_name(self) -> str:
        """Crate name used by integration tests and main.rs."""
        return self.project_path_context()["project"].replace("-", "_")

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        columns = self._writable_columns(model)
        return {
            "writable_columns": columns,
            "select_list": ", ".join(self._select_columns(model)),
            "related_modules": self._related_modules(model),
        }

    @staticmethod
    def _writable_columns(model: EntityModel) -> List[Tuple[str, str]]:
        """(column, member) pairs written by INSERT and UPDATE, in struct order."""
        columns = [(field.column_name, field.name) for field in model.fields]
        columns += [
            (relation.join_column, relation.join_field)
            for relation in model.owning_relations
        ]
        return columns

    @staticmethod
    def _select_columns(model: EntityModel) -> List[str]:
        primary_key = model.table.primary_key
        columns = [primary_key.name if primary_key else "id"]
        columns += [field.column_name for field in model.fields]
        columns += [relation.join_column for relation in model.owning_relations]
        return columns

    @staticmethod
    def _related_modules(model: EntityModel) -> List[Tuple[str, str]]:
        seen = {model.entity_name}
        modules = []
        for relation in model.relations:
            if relation.target_entity not in seen:
                seen.add(relation.target_entity)
                modules.append((relation.target_snake, relation.target_entity))
        return modules


def create_rust_generator(config: Optional[GeneratorConfig] = None) -> RustAxumGenerator:
    """
    Create an Axum generator.

    Args:
        config: Optional configuration; defaults for rust-axum otherwise

    Returns:
        Configured RustAxumGenerator instance
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("rust-axum")
    return RustAxumGenerator(config)
