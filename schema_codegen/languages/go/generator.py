"""
Go code generator implementation.

Generates a Gin + GORM service: models, request/response DTOs,
repositories, services, HTTP handlers and handler tests.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import GeneratorConfig
from ...core.generator import ArtifactKind, ArtifactSpec, TargetGenerator
from ...core.model import EntityModel
from .types import GoTypeMapper


class GoGinGenerator(TargetGenerator):
    """Code generator for Go Gin + GORM projects."""

    artifacts = (
        ArtifactSpec(ArtifactKind.ENTITY, "model.go.j2", "internal/models/{snake}.go"),
        ArtifactSpec(ArtifactKind.DTO, "dto.go.j2", "internal/dto/{snake}_dto.go"),
        ArtifactSpec(
            ArtifactKind.REPOSITORY,
            "repository.go.j2",
            "internal/repository/{snake}_repository.go",
        ),
        ArtifactSpec(
            ArtifactKind.SERVICE, "service.go.j2", "internal/service/{snake}_service.go"
        ),
        ArtifactSpec(
            ArtifactKind.CONTROLLER, "handler.go.j2", "internal/handler/{snake}_handler.go"
        ),
        ArtifactSpec(
            ArtifactKind.TEST,
            "handler_test.go.j2",
            "internal/handler/{snake}_handler_test.go",
        ),
    )

    scaffold = (
        ("internal/models/base_model.go", "base_model.go.j2"),
        ("internal/database/database.go", "database.go.j2"),
        ("internal/handler/params.go", "params.go.j2"),
        ("cmd/server/main.go", "main.go.j2"),
    )

    placeholder_format = "{{{{ .{name} }}}}"

    feature_layout = {
        "social_login": {
            "config": ("internal/auth/oauth_config.go", "features/oauth_config.go.j2"),
            "service": (
                "internal/auth/social_auth_service.go",
                "features/social_auth_service.go.j2",
            ),
        },
        "mail": {
            "service": ("internal/mail/mail_service.go", "features/mail_service.go.j2"),
            "body": ("internal/mail/templates/{name}.html", "mail/{name}.html.j2"),
        },
        "file_storage": {
            "service": (
                "internal/storage/storage_service.go",
                "features/storage_service.go.j2",
            ),
            "backend": (
                "internal/storage/{backend}_storage.go",
                "features/storage_backend.go.j2",
            ),
        },
        "password_reset": {
            "service": (
                "internal/auth/password_reset_service.go",
                "features/password_reset_service.go.j2",
            ),
            "model": (
                "internal/models/password_reset_token.go",
                "features/password_reset_token.go.j2",
            ),
        },
    }

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    @property
    def target_name(self) -> str:
        return "go-gin"

    @property
    def language(self) -> str:
        return "go"

    @property
    def framework(self) -> str:
        return "gin"

    @property
    def file_extension(self) -> str:
        return ".go"

    def create_type_mapper(self) -> GoTypeMapper:
        return GoTypeMapper()

    def get_template_directory(self) -> Path:
        """Return the Go templates directory."""
        return Path(__file__).parent / "templates"

    def base_context(self) -> Dict[str, Any]:
        context = super().base_context()
        context["module_path"] = self.config.base_package
        return context

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        return {
            "index_tags": self._index_tags(model),
            "dto_imports": self._dto_imports(model),
            "function_imports": self._function_imports(model),
        }

    @staticmethod
    def _index_tags(model: EntityModel) -> Dict[str, str]:
        """GORM index tag fragments keyed by column name."""
        tags: Dict[str, List[str]] = {}
        for index in model.indexes:
            kind = "uniqueIndex" if index.unique else "index"
            for column in index.columns:
                tags.setdefault(column.lower(), []).append(f"{kind}:{index.name}")
        return {column: ";" + ";".join(parts) for column, parts in tags.items()}

    @staticmethod
    def _function_imports(model: EntityModel) -> List[str]:
        """Import paths referenced by stored-function signatures."""
        types = []
        for function in model.functions:
            types.extend(type_ for _, type_ in function.parameters)
            if function.return_type:
                types.append(function.return_type)
        return [
            path
            for path in model.imports
            if any(f"{path.rsplit('/', 1)[-1]}." in type_ for type_ in types)
        ]

    @staticmethod
    def _dto_imports(model: EntityModel) -> List[str]:
        imports = set(model.imports)
        if model.extends_base:
            imports.add("time")
        return sorted(imports)


def create_go_generator(config: Optional[GeneratorConfig] = None) -> GoGinGenerator:
    """
    Create a Gin generator.

    Args:
        config: Optional configuration; defaults for go-gin otherwise

    Returns:
        Configured GoGinGenerator instance
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("go-gin")
    return GoGinGenerator(config)
