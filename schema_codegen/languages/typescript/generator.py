"""
TypeScript code generator implementation.

Generates a NestJS project: TypeORM entities, class-validator DTOs,
repositories, services, controllers and Jest service specs.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import GeneratorConfig
from ...core.generator import ArtifactKind, ArtifactSpec, TargetGenerator
from ...core.model import EntityModel
from ...core.types import normalize_source_type
from .types import TypeScriptTypeMapper

# TypeORM column types (PostgreSQL flavour)
TYPEORM_COLUMN_TYPES = {
    "String": "varchar",
    "Character": "char",
    "Integer": "int",
    "Long": "bigint",
    "Short": "smallint",
    "Byte": "smallint",
    "Double": "double precision",
    "Float": "real",
    "BigDecimal": "decimal",
    "Boolean": "boolean",
    "LocalDate": "date",
    "LocalDateTime": "timestamp",
    "LocalTime": "time",
    "Instant": "timestamptz",
    "ZonedDateTime": "timestamptz",
    "UUID": "uuid",
    "byte[]": "bytea",
}

# class-validator decorator per source type
VALIDATORS = {
    "String": "IsString",
    "Character": "IsString",
    "Integer": "IsInt",
    "Long": "IsInt",
    "Short": "IsInt",
    "Byte": "IsInt",
    "Double": "IsNumber",
    "Float": "IsNumber",
    "BigDecimal": "IsNumberString",
    "Boolean": "IsBoolean",
    "LocalDate": "IsDateString",
    "LocalDateTime": "IsDate",
    "LocalTime": "IsString",
    "Instant": "IsDate",
    "ZonedDateTime": "IsDate",
    "UUID": "IsUUID",
}


class TypeScriptNestGenerator(TargetGenerator):
    """Code generator for NestJS + TypeORM projects."""

    artifacts = (
        ArtifactSpec(
            ArtifactKind.ENTITY, "entity.ts.j2", "src/{kebab}/entities/{kebab}.entity.ts"
        ),
        ArtifactSpec(ArtifactKind.DTO, "dto.ts.j2", "src/{kebab}/dto/{kebab}.dto.ts"),
        ArtifactSpec(
            ArtifactKind.REPOSITORY, "repository.ts.j2", "src/{kebab}/{kebab}.repository.ts"
        ),
        ArtifactSpec(ArtifactKind.SERVICE, "service.ts.j2", "src/{kebab}/{kebab}.service.ts"),
        ArtifactSpec(
            ArtifactKind.CONTROLLER, "controller.ts.j2", "src/{kebab}/{kebab}.controller.ts"
        ),
        ArtifactSpec(
            ArtifactKind.TEST, "service.spec.ts.j2", "src/{kebab}/{kebab}.service.spec.ts"
        ),
    )

    scaffold = (
        ("src/common/base.entity.ts", "base.entity.ts.j2"),
        ("src/app.module.ts", "app.module.ts.j2"),
        ("src/main.ts", "main.ts.j2"),
    )

    feature_layout = {
        "social_login": {
            "config": ("src/auth/oauth.config.ts", "features/oauth.config.ts.j2"),
            "service": (
                "src/auth/social-auth.service.ts",
                "features/social-auth.service.ts.j2",
            ),
        },
        "mail": {
            "service": ("src/mail/mail.service.ts", "features/mail.service.ts.j2"),
            "body": ("src/mail/templates/{name}.html", "mail/{name}.html.j2"),
        },
        "file_storage": {
            "service": (
                "src/storage/file-storage.service.ts",
                "features/file-storage.service.ts.j2",
            ),
            "backend": ("src/storage/{backend}.storage.ts", "features/storage.ts.j2"),
        },
        "password_reset": {
            "service": (
                "src/auth/password-reset.service.ts",
                "features/password-reset.service.ts.j2",
            ),
            "model": (
                "src/auth/password-reset-token.entity.ts",
                "features/password-reset-token.entity.ts.j2",
            ),
        },
    }

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)

    @property
    def target_name(self) -> str:
        return "typescript-nestjs"

    @property
    def language(self) -> str:
        return "typescript"

    @property
    def framework(self) -> str:
        return "nestjs"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def create_type_mapper(self) -> TypeScriptTypeMapper:
        return TypeScriptTypeMapper()

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        validators = self._validators(model)
        return {
            "column_types": {
                field.name: TYPEORM_COLUMN_TYPES.get(
                    normalize_source_type(field.source_type), "jsonb"
                )
                for field in model.fields
            },
            "validators": validators,
            "validator_imports": sorted(
                {name for names in validators.values() for name in names}
                | {"IsOptional"}
            ),
            "needs_date_transform": any(
                "IsDate" in names for names in validators.values()
            ),
            "typeorm_imports": self._typeorm_imports(model),
        }

    @staticmethod
    def _validators(model: EntityModel) -> Dict[str, List[str]]:
        validators = {}
        for field in model.fields:
            names = []
            validator = VALIDATORS.get(normalize_source_type(field.source_type))
            if validator:
                names.append(validator)
            if field.length and validator == "IsString":
                names.append("MaxLength")
            validators[field.name] = names
        for relation in model.owning_relations:
            validators[relation.join_field] = ["IsInt"]
        return validators

    @staticmethod
    def _typeorm_imports(model: EntityModel) -> List[str]:
        names = {"Column", "Entity", "PrimaryGeneratedColumn"}
        for relation in model.relations:
            kind = relation.kind.value
            if kind == "one_to_one":
                names.update(("OneToOne", "JoinColumn"))
            elif kind == "many_to_one":
                names.update(("ManyToOne", "JoinColumn"))
            elif kind == "one_to_many":
                names.add("OneToMany")
            else:
                names.update(("ManyToMany", "JoinTable"))
        if model.has_indexes:
            names.add("Index")
        return sorted(names)


def create_typescript_generator(
    config: Optional[GeneratorConfig] = None,
) -> TypeScriptNestGenerator:
    """
    Create a NestJS generator.

    Args:
        config: Optional configuration; defaults for typescript-nestjs otherwise

    Returns:
        Configured TypeScriptNestGenerator instance
    """
    if config is None:
        from ...core.config import load_config

        config = load_config("typescript-nestjs")
    return TypeScriptNestGenerator(config)
