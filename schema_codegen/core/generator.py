"""
Base generator interface for all target ecosystems.

A TargetGenerator owns one TypeMapper, one template engine and the ordered
list of artifacts (entity, DTO, repository, service, controller, test)
rendered for every entity table.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..logging_config import get_logger
from .config import GeneratorConfig
from .diagnostics import Diagnostic, Severity
from .model import EntityModel, build_entity_model
from .naming import to_kebab_case, to_plural, to_snake_case
from .relationships import ManyToManyRelation, TableRelationship
from .schema import StoredFunction, Table
from .templates import TemplateEngine, create_template_engine
from .types import TypeMapper

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ArtifactKind(Enum):
    """Kinds of per-table artifacts."""

    ENTITY = "entity"
    DTO = "dto"
    REPOSITORY = "repository"
    SERVICE = "service"
    CONTROLLER = "controller"
    TEST = "test"


@dataclass(frozen=True)
class ArtifactSpec:
    """
    One per-table output file.

    `path` is a format string; see TargetGenerator.path_context for the
    available placeholders.
    """

    kind: ArtifactKind
    template: str
    path: str


@dataclass
class TableOutput:
    """Files generated for one table plus what the model builder reported."""

    model: EntityModel
    files: Dict[str, str] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class ArtifactGenerator:
    """Renders one artifact kind of one target."""

    def __init__(self, target: "TargetGenerator", spec: ArtifactSpec):
        self.target = target
        self.spec = spec

    @property
    def kind(self) -> ArtifactKind:
        return self.spec.kind

    def generate(
        self,
        table: Table,
        outgoing: Sequence[TableRelationship],
        incoming: Sequence[TableRelationship],
        many_to_many: Sequence[ManyToManyRelation],
        type_mapper: Optional[TypeMapper] = None,
    ) -> Dict[str, str]:
        """
        Generate this artifact for one table.

        Returns:
            Ordered mapping of relative path to file content
        """
        model = build_entity_model(
            table, outgoing, incoming, many_to_many, type_mapper or self.target.type_mapper
        )
        return self.render(model)

    def render(self, model: EntityModel) -> Dict[str, str]:
        """Render an already-built model."""
        path = self.spec.path.format(**self.target.path_context(model))
        context = self.target.build_context(model)
        context["artifact"] = self.spec.kind.value
        content = self.target.render_template(self.spec.template, context)
        return {path: self.target.format_code(content)}


class TargetGenerator(ABC):
    """Abstract base class for all target ecosystem generators."""

    # Per-table artifacts in output order
    artifacts: Tuple[ArtifactSpec, ...] = ()
    # (path, template) rendered once per project with every entity model
    scaffold: Tuple[Tuple[str, str], ...] = ()
    # pack name -> logical file key -> (path format, template)
    feature_layout: Dict[str, Dict[str, Tuple[str, str]]] = {}
    # Runtime placeholder syntax of the generated project's HTML templates
    placeholder_format = "{{{{ {name} }}}}"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig(target=self.target_name)
        self.type_mapper = self.create_type_mapper()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Registry identifier (e.g., 'python-fastapi')."""
        pass

    @property
    @abstractmethod
    def language(self) -> str:
        pass

    @property
    @abstractmethod
    def framework(self) -> str:
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated source files (e.g., '.go')."""
        pass

    @abstractmethod
    def create_type_mapper(self) -> TypeMapper:
        """Return the type mapper for this target."""
        pass

    @property
    def display_name(self) -> str:
        return f"{self.language} / {self.framework}"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses override this to provide their template directory.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def artifact_generators(self) -> List[ArtifactGenerator]:
        """Artifact generators enabled by the configuration, in output order."""
        generators = []
        for spec in self.artifacts:
            if spec.kind == ArtifactKind.TEST and not self.config.generate_tests:
                continue
            generators.append(ArtifactGenerator(self, spec))
        return generators

    def build_model(
        self,
        table: Table,
        outgoing: Sequence[TableRelationship],
        incoming: Sequence[TableRelationship],
        many_to_many: Sequence[ManyToManyRelation],
        functions: Sequence[StoredFunction] = (),
    ) -> EntityModel:
        return build_entity_model(
            table, outgoing, incoming, many_to_many, self.type_mapper, functions
        )

    def generate_table(
        self,
        table: Table,
        outgoing: Sequence[TableRelationship],
        incoming: Sequence[TableRelationship],
        many_to_many: Sequence[ManyToManyRelation],
        functions: Sequence[StoredFunction] = (),
    ) -> TableOutput:
        """
        Generate every artifact for one entity table.

        Stateless: the model is built fresh and nothing is retained between
        calls, so tables may be generated concurrently.
        """
        model = self.build_model(table, outgoing, incoming, many_to_many, functions)
        output = TableOutput(model=model, diagnostics=list(model.diagnostics))

        for generator in self.artifact_generators():
            output.files.update(generator.render(model))

        logger.debug(
            "Generated %d files for table %s (%s)",
            len(output.files),
            table.name,
            self.target_name,
        )
        return output

    def generate_scaffold(self, models: Sequence[EntityModel]) -> Dict[str, str]:
        """Project-level files that depend on the full entity list."""
        files: Dict[str, str] = {}
        context = self.base_context()
        context["models"] = list(models)
        context.update(self.scaffold_context(models))
        for path, template in self.scaffold:
            rendered_path = path.format(**self.project_path_context())
            files[rendered_path] = self.format_code(
                self.render_template(template, context)
            )
        return files

    def scaffold_context(self, models: Sequence[EntityModel]) -> Dict[str, Any]:
        """Target-specific template variables for scaffold files."""
        return {}

    def base_context(self) -> Dict[str, Any]:
        """Template variables shared by every file of the project."""
        return {
            "config": self.config,
            "project_name": self.config.project_name,
            "base_package": self.config.base_package,
            "package_path": self.config.base_package.replace(".", "/"),
            "mapper": self.type_mapper,
            "target": self.target_name,
            "features": self.config.enabled_features,
            "placeholder": self.placeholder,
        }

    def placeholder(self, name: str) -> str:
        """Runtime template variable reference, e.g. {{ token }}."""
        return self.placeholder_format.format(name=name)

    def build_context(self, model: EntityModel) -> Dict[str, Any]:
        context = self.base_context()
        context["model"] = model
        context.update(self.template_context(model))
        return context

    def template_context(self, model: EntityModel) -> Dict[str, Any]:
        """Target-specific template variables for one entity."""
        return {}

    def project_path_context(self) -> Dict[str, str]:
        return {
            "package_path": self.config.base_package.replace(".", "/"),
            "project": to_kebab_case(self.config.project_name) or "app",
        }

    def path_context(self, model: EntityModel) -> Dict[str, str]:
        """Placeholders for artifact path formats."""
        context = self.project_path_context()
        context.update(
            {
                "entity": model.entity_name,
                "plural": model.plural_name,
                "snake": model.snake_name,
                "plural_snake": to_snake_case(model.plural_name),
                "kebab": model.kebab_name,
                "plural_kebab": to_kebab_case(model.plural_name),
                "module": self.type_mapper.escape_identifier(model.module_name),
                "variable": model.variable_name,
                "plural_variable": to_plural(model.variable_name),
            }
        )
        return context

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, allows at most two consecutive blank
        lines and ends the file with exactly one newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)

    def get_info(self) -> Dict[str, Any]:
        return {
            "name": self.target_name,
            "language": self.language,
            "framework": self.framework,
            "file_extension": self.file_extension,
            "class": type(self).__name__,
            "module": type(self).__module__,
            "artifacts": [spec.kind.value for spec in self.artifacts],
            "feature_packs": sorted(self.feature_layout),
        }


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str] = None,
        diagnostics: List[Diagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Ordered mapping of relative path to content
            diagnostics: Warnings and notes from generation
            metadata: Counts and identifiers for reporting
        """
        self.files = files if files is not None else {}
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @property
    def warnings(self) -> List[str]:
        return [str(d) for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def file_count(self) -> int:
        return len(self.files)

    def write_files(self, output_dir: Path) -> List[Path]:
        """
        Write every generated file below output_dir.

        Raises:
            GeneratorError: If the result failed or a path escapes output_dir
        """
        if not self.success:
            raise GeneratorError(f"Cannot write failed generation: {self.error_message}")

        root = Path(output_dir).resolve()
        written = []
        for relative, content in self.files.items():
            target = (root / relative).resolve()
            if root != target and root not in target.parents:
                raise GeneratorError(f"Refusing to write outside output dir: {relative}")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            written.append(target)

        logger.info("Wrote %d files to %s", len(written), root)
        return written
