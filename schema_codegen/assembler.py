"""
Project assembly.

Runs one target generator over every entity table of a schema, merges the
per-table file maps in table order, adds scaffold and feature-pack files
and returns everything as a GenerationResult.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from .core.config import GeneratorConfig
from .core.diagnostics import Diagnostic
from .core.generator import GenerationResult, TableOutput, TargetGenerator
from .core.relationships import RelationshipResolver
from .core.schema import SchemaModel, Table
from .features import FeaturePackAssembler, merge_files
from .logging_config import get_logger

logger = get_logger(__name__)


def _deduplicate(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    """Drop repeated reports of the same problem, keeping first-seen order."""
    seen = set()
    unique = []
    for diagnostic in diagnostics:
        if diagnostic.table:
            key = (diagnostic.kind, diagnostic.table, diagnostic.column)
        else:
            key = (diagnostic.kind, diagnostic.message)
        if key in seen:
            continue
        seen.add(key)
        unique.append(diagnostic)
    return unique


class ProjectAssembler:
    """Generates a whole project for one target."""

    def __init__(
        self,
        generator: TargetGenerator,
        config: Optional[GeneratorConfig] = None,
        feature_assembler: Optional[FeaturePackAssembler] = None,
    ):
        self.generator = generator
        self.config = config or generator.config
        self.feature_assembler = feature_assembler or FeaturePackAssembler()

    def _generate_tables(
        self, schema: SchemaModel, resolver: RelationshipResolver, tables: List[Table]
    ) -> List[TableOutput]:
        functions = schema.functions_by_table()

        def generate(table: Table) -> TableOutput:
            outgoing, incoming, many_to_many = resolver.relations_for(table)
            return self.generator.generate_table(
                table, outgoing, incoming, many_to_many, functions.get(table.name, ())
            )

        if self.config.parallel and len(tables) > 1:
            logger.debug(
                "Generating %d tables in parallel (max_workers=%s)",
                len(tables),
                self.config.max_workers,
            )
            # map() yields results in submission order
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(generate, tables))

        return [generate(table) for table in tables]

    def assemble(self, schema: SchemaModel) -> GenerationResult:
        """
        Generate every file for the schema.

        Args:
            schema: Immutable schema model

        Returns:
            GenerationResult with ordered files, diagnostics and counts
        """
        diagnostics: List[Diagnostic] = list(schema.validate())

        resolver = RelationshipResolver(schema)
        diagnostics.extend(resolver.diagnostics)

        tables = schema.entity_tables()
        outputs = self._generate_tables(schema, resolver, tables)
        models = [output.model for output in outputs]

        files: Dict[str, str] = {}
        merge_files(
            files, self.generator.generate_scaffold(models), diagnostics, "scaffold"
        )
        for output in outputs:
            diagnostics.extend(output.diagnostics)
            merge_files(files, output.files, diagnostics, f"table '{output.model.table_name}'")

        feature_files, feature_diagnostics = self.feature_assembler.assemble(
            self.generator, self.config
        )
        diagnostics.extend(feature_diagnostics)
        merge_files(files, feature_files, diagnostics, "feature packs")

        metadata = {
            "target": self.generator.target_name,
            "language": self.generator.language,
            "framework": self.generator.framework,
            "entity_count": len(tables),
            "junction_count": len(schema.junction_tables()),
            "relationship_count": len(resolver.all_relationships()),
            "file_count": len(files),
            "features": self.config.enabled_features,
        }

        logger.info(
            "Generated %d files for %d entities (%s)",
            len(files),
            len(tables),
            self.generator.target_name,
        )
        return GenerationResult(files, _deduplicate(diagnostics), metadata)


def generate_project(
    generator: TargetGenerator,
    schema: SchemaModel,
    feature_assembler: Optional[FeaturePackAssembler] = None,
) -> GenerationResult:
    """
    Generate a project with error handling.

    Args:
        generator: Configured target generator
        schema: Schema to generate code for
        feature_assembler: Optional custom feature pack set

    Returns:
        GenerationResult; failed results carry error_message and exception
    """
    try:
        assembler = ProjectAssembler(generator, feature_assembler=feature_assembler)
        return assembler.assemble(schema)
    except Exception as e:
        logger.error("Project generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
