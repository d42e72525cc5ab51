"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with naming filters shared by every target.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    select_autoescape,
)

from .naming import (
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_plural,
    to_snake_case,
)

# Shared templates (mail bodies) live next to the package
SHARED_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dirs: Optional[Union[Path, Iterable[Path]]] = None):
        """
        Initialize template engine.

        Args:
            template_dirs: Directory or directories searched in order
        """
        if isinstance(template_dirs, (str, Path)):
            template_dirs = [Path(template_dirs)]
        self.template_dirs = [Path(d) for d in (template_dirs or []) if Path(d).exists()]
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # In-memory templates take precedence over files
        self._memory_loader = DictLoader({})
        loaders = [self._memory_loader]
        if self.template_dirs:
            loaders.append(FileSystemLoader([str(d) for d in self.template_dirs]))
        loader = ChoiceLoader(loaders)

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["snake_case"] = to_snake_case
        self._env.filters["camel_case"] = to_camel_case
        self._env.filters["pascal_case"] = to_pascal_case
        self._env.filters["kebab_case"] = to_kebab_case
        self._env.filters["plural"] = to_plural
        self._env.filters["indent_code"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def add_template(self, name: str, content: str):
        """Add an in-memory template, shadowing any file with the same name."""
        self._memory_loader.mapping[name] = content
        if self._env.cache is not None:
            self._env.cache.clear()

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all non-blank lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine(
    template_dir: Optional[Path] = None, include_shared: bool = True
) -> TemplateEngine:
    """Create an engine searching the target directory, then shared templates."""
    dirs = []
    if template_dir:
        dirs.append(template_dir)
    if include_shared:
        dirs.append(SHARED_TEMPLATE_DIR)
    return TemplateEngine(dirs)
