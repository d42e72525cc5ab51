"""
Rust code generator module.

Generates Axum services backed by sqlx.
"""

from .generator import RustAxumGenerator, create_rust_generator
from .naming import create_rust_sanitizer
from .types import RustTypeMapper

__all__ = [
    "RustAxumGenerator",
    "RustTypeMapper",
    "create_rust_sanitizer",
    "create_generator",
    "create_rust_generator",
]


def create_generator(config=None):
    """Create an Axum generator."""
    return create_rust_generator(config)
