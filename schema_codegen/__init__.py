"""
Schema Codegen

Generates backend projects (entities, DTOs, repositories, services,
controllers and tests) from a relational schema model for several target
ecosystems.
"""

__version__ = "0.1.0"

from .assembler import ProjectAssembler, generate_project
from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.diagnostics import Diagnostic, DiagnosticKind, Severity
from .core.generator import GenerationResult, GeneratorError, TargetGenerator
from .core.schema import SchemaError, SchemaModel, schema_from_dict
from .features import FeaturePack, FeaturePackAssembler
from .registry import (
    RegistryError,
    TargetRegistry,
    get_generator,
    get_registry,
    get_target_info,
    list_supported_targets,
)
from .utils import SchemaLoaderError, load_schema


def generate(schema_data, target="python-fastapi", config=None):
    """
    Generate a project from a schema document.

    Args:
        schema_data: Schema JSON document (dict) or SchemaModel
        target: Target id or alias
        config: GeneratorConfig, dict of overrides or configuration file path

    Returns:
        GenerationResult with the ordered file map
    """
    if isinstance(schema_data, SchemaModel):
        schema = schema_data
    else:
        schema = schema_from_dict(schema_data)

    generator = get_generator(target, config)
    return generate_project(generator, schema)


# Export main interfaces
__all__ = [
    "__version__",
    "generate",
    "generate_project",
    "ProjectAssembler",
    "TargetGenerator",
    "TargetRegistry",
    "RegistryError",
    "GenerationResult",
    "GeneratorError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "SchemaModel",
    "SchemaError",
    "schema_from_dict",
    "SchemaLoaderError",
    "load_schema",
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "FeaturePack",
    "FeaturePackAssembler",
    "get_generator",
    "get_registry",
    "get_target_info",
    "list_supported_targets",
]
