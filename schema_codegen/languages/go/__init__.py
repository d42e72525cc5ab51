"""
Go code generator module.

Generates Gin services with GORM models from a relational schema.
"""

from .generator import GoGinGenerator, create_go_generator
from .naming import create_go_sanitizer
from .types import GoTypeMapper

__all__ = [
    "GoGinGenerator",
    "GoTypeMapper",
    "create_go_sanitizer",
    "create_generator",
    "create_go_generator",
]


def create_generator(config=None):
    """
    Create a Gin generator.

    Args:
        config: Optional GeneratorConfig

    Returns:
        Configured GoGinGenerator instance
    """
    return create_go_generator(config)
