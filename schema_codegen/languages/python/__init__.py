"""
Python code generator module.

Generates FastAPI projects with SQLAlchemy 2.0 models and Pydantic schemas.
"""

from .generator import PythonFastApiGenerator, create_python_generator
from .naming import create_python_sanitizer
from .types import PythonTypeMapper

__all__ = [
    "PythonFastApiGenerator",
    "PythonTypeMapper",
    "create_python_sanitizer",
    "create_generator",
    "create_python_generator",
]


def create_generator(config=None):
    """
    Create a FastAPI generator.

    Args:
        config: Optional GeneratorConfig

    Returns:
        Configured PythonFastApiGenerator instance
    """
    return create_python_generator(config)
