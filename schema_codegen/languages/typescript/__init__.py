"""
TypeScript code generator module.

Generates NestJS applications with TypeORM entities.
"""

from .generator import TypeScriptNestGenerator, create_typescript_generator
from .naming import create_typescript_sanitizer
from .types import TypeScriptTypeMapper

__all__ = [
    "TypeScriptNestGenerator",
    "TypeScriptTypeMapper",
    "create_typescript_sanitizer",
    "create_generator",
    "create_typescript_generator",
]


def create_generator(config=None):
    """Create a NestJS generator."""
    return create_typescript_generator(config)
