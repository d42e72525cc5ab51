"""
Core code generation components.

Provides the schema model, relationship resolution, naming, type mapping
contract and base generator classes used by all target ecosystems.
"""

from .config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .diagnostics import Diagnostic, DiagnosticKind, Severity
from .generator import (
    ArtifactGenerator,
    ArtifactKind,
    ArtifactSpec,
    GenerationResult,
    GeneratorError,
    TableOutput,
    TargetGenerator,
)
from .model import (
    EntityModel,
    FieldSpec,
    FunctionSpec,
    IndexSpec,
    RelationFieldSpec,
    RelationKind,
    build_entity_model,
)
from .naming import NameSanitizer, NamingCase
from .relationships import (
    ManyToManyRelation,
    RelationshipResolver,
    RelationType,
    TableRelationship,
)
from .schema import (
    Column,
    ForeignKey,
    Index,
    SchemaError,
    SchemaModel,
    StoredFunction,
    Table,
    schema_from_dict,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import SOURCE_TYPES, TypeMapper, normalize_source_type

__all__ = [
    # Schema model
    "Column",
    "ForeignKey",
    "Index",
    "StoredFunction",
    "Table",
    "SchemaModel",
    "SchemaError",
    "schema_from_dict",
    # Relationships
    "RelationType",
    "TableRelationship",
    "ManyToManyRelation",
    "RelationshipResolver",
    # Naming utilities - target-agnostic
    "NameSanitizer",
    "NamingCase",
    # Type mapping contract
    "TypeMapper",
    "SOURCE_TYPES",
    "normalize_source_type",
    # Emission model
    "EntityModel",
    "FieldSpec",
    "FunctionSpec",
    "IndexSpec",
    "RelationFieldSpec",
    "RelationKind",
    "build_entity_model",
    # Base generator interface
    "TargetGenerator",
    "ArtifactGenerator",
    "ArtifactKind",
    "ArtifactSpec",
    "TableOutput",
    "GenerationResult",
    "GeneratorError",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "get_config_manager",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
