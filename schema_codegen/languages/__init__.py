"""
Target ecosystem generators.

One subpackage per target; each exports its TargetGenerator subclass and a
create_generator factory.
"""

from .csharp import CSharpAspNetGenerator, create_csharp_generator
from .go import GoGinGenerator, create_go_generator
from .python import PythonFastApiGenerator, create_python_generator
from .rust import RustAxumGenerator, create_rust_generator
from .typescript import TypeScriptNestGenerator, create_typescript_generator

__all__ = [
    "PythonFastApiGenerator",
    "GoGinGenerator",
    "TypeScriptNestGenerator",
    "RustAxumGenerator",
    "CSharpAspNetGenerator",
    "create_python_generator",
    "create_go_generator",
    "create_typescript_generator",
    "create_rust_generator",
    "create_csharp_generator",
]
