"""
C# code generator module.

Generates ASP.NET Core Web APIs backed by Entity Framework Core.
"""

from .generator import CSharpAspNetGenerator, create_csharp_generator
from .naming import create_csharp_sanitizer
from .types import CSharpTypeMapper

__all__ = [
    "CSharpAspNetGenerator",
    "CSharpTypeMapper",
    "create_csharp_sanitizer",
    "create_generator",
    "create_csharp_generator",
]


def create_generator(config=None):
    """Create an ASP.NET Core generator."""
    return create_csharp_generator(config)
