"""
C# code generator implementation.

Generates an ASP.NET Core Web API: EF Core entities, record DTOs,
repositories, services, controllers and xUnit service tests.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...core.config import GeneratorConfig
from ...core.generator import ArtifactKind, ArtifactSpec, TargetGenerator
from ...core.model import EntityModel, RelationKind
from ...core.naming import to_pascal_case
from .types import CSharpTypeMapper


class CSharpAspNetGenerator(TargetGenerator):
    """Code generator for ASP.NET Core + EF Core projects."""

    artifacts = (
        ArtifactSpec(ArtifactKind.ENTITY, "entity.cs.j2", "Domain/Entities/{entity}.cs"),
        ArtifactSpec(ArtifactKind.DTO, "dto.cs.j2", "Application/DTOs/{entity}Dto.cs"),
        ArtifactSpec(
            ArtifactKind.REPOSITORY,
            "repository.cs.j2",
            "Infrastructure/Repositories/{entity}Repository.cs",
        ),
        ArtifactSpec(
            ArtifactKind.SERVICE, "service.cs.j2", "Application/Services/{entity}Service.cs"
        ),
        ArtifactSpec(
            ArtifactKind.CONTROLLER, "controller.cs.j2", "Api/Controllers/{plural}Controller.cs"
        ),
        ArtifactSpec(ArtifactKind.TEST, "service_tests.cs.j2", "Tests/{entity}ServiceTests.cs"),
    )

    scaffold = (
        ("Domain/Entities/BaseEntity.cs", "base_entity.cs.j2"),
        ("Infrastructure/Data/AppDbContext.cs", "app_db_context.cs.j2"),
        ("Program.cs", "program.cs.j2"),
    )

    feature_layout = {
        "social_login": {
            "config": ("Infrastructure/Auth/OAuthOptions.cs", "features/oauth_options.cs.j2"),
            "service": (
                "Application/Services/SocialAuthService.cs",
                "features/social_auth_service.cs.j2",
            ),
        },
        "mail": {
            "service": ("Application/Services/MailService.cs", "features/mail_service.cs.j2"),
            "body": ("Templates/Email/{name}.html", "mail/{name}.html.j2"),
        },
        "file_storage": {
            "service": (
                "Application/Services/FileStorageService.cs",
                "features/file_storage_service.cs.j2",
            ),
            "backend": (
                "Infrastructure/Storage/{backend_class}FileStorage.cs",
                "features/file_storage_backend.cs.j2",
            ),
        },
        "password_reset": {
            "service": (
                "Application/Services/PasswordResetService.cs",
                "features/password_reset_service.cs.j2",
            ),
            "model": (
                "Domain/Entities/PasswordResetToken.cs",
                "features/password_reset_token.cs.j2",
            ),
        },
    }

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    @property
    def target_name(self) -> str:
        return "csharp-aspnet"

    @property
    def language(self) -> str:
        return "csharp"

    @property
    def framework(self) -> str:
        return "aspnet"

    @property
    def file_extension(self) -> str:
        return ".cs"

    def create_type_mapper(self) -> CSharpTypeMapper:
        return CSharpTypeMapper()

    def get_template_directory(self) -> Path:
        """Return the C# templates directory."""
        return Path(__file__).parent / "templates"

    def base_context(self) -> Dict[str, Any]:
        context = super().base_context()
        context["namespace"] = self.config.base_package
        return context

    def project_path_context(self) -> Dict[str, str]:
        context = super().project_path_context()
        # Backend names become class-style file names, e.g. S3FileStorage.cs
        context["backend_class"] = to_pascal_case(self.config.storage_backend or "local")
        return context

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        return {"index_members": self._index_members(model)}

    @staticmethod
    def _index_members(model: EntityModel) -> Dict[str, List[str]]:
        """Property names covered by each index, for [Index(...)]."""
        members = {field.column_name.lower(): field.name for field in model.fields}
        for relation in model.owning_relations:
            members[relation.join_column.lower()] = relation.join_field
        return {
            index.name: [
                members.get(column.lower(), to_pascal_case(column))
                for column in index.columns
            ]
            for index in model.indexes
        }

    def scaffold_context(self, models: Sequence[EntityModel]) -> Dict[str, Any]:
        junctions = []
        seen = set()
        for model in models:
            for relation in model.relations:
                if relation.kind != RelationKind.MANY_TO_MANY:
                    continue
                if relation.join_table in seen:
                    continue
                seen.add(relation.join_table)
                junctions.append({"model": model, "relation": relation})
        return {"junctions": junctions}


def create_csharp_generator(
    config: Optional[GeneratorConfig] = None,
) -> CSharpAspNetGenerator:
    """
    Create an ASP.NET Core generator.

    Args:
        config: Optional configuration; defaults for csharp-aspnet otherwise

    Returns:
        Configured CSharpAspNetGenerator instance
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("csharp-aspnet")
    return CSharpAspNetGenerator(config)
