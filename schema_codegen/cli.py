"""
Command-line interface for schema-codegen.

Provides the `generate`, `targets` and `target-info` subcommands.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .assembler import generate_project
from .core.config import (
    FEATURE_SWITCHES,
    SOCIAL_PROVIDERS,
    STORAGE_BACKENDS,
    ConfigError,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .core.diagnostics import Diagnostic, Severity
from .core.generator import GenerationResult, GeneratorError
from .core.schema import SchemaModel
from .logging_config import configure_logging, get_logger
from .registry import RegistryError, get_registry
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="schema-codegen",
        description="Generate backend projects from a relational schema model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-codegen generate schema.json --target python-fastapi -o out/
  schema-codegen generate --url https://example.com/schema.json -t go --feature mail
  schema-codegen targets
  schema-codegen target-info rust
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Shared by every subcommand so the flags can follow it
    common = argparse.ArgumentParser(add_help=False)
    verbosity = common.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging and metadata"
    )
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Only show warnings and errors"
    )

    subparsers = parser.add_subparsers(dest="command")

    _add_generate_parser(subparsers, common)

    targets_parser = subparsers.add_parser(
        "targets", parents=[common], help="List supported targets"
    )
    targets_parser.set_defaults(func=_handle_targets)

    info_parser = subparsers.add_parser(
        "target-info", parents=[common], help="Show detailed information about a target"
    )
    info_parser.add_argument("target", help="Target id or alias")
    info_parser.set_defaults(func=_handle_target_info)

    return parser


def _add_generate_parser(subparsers, common: argparse.ArgumentParser):
    parser = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate a project from a schema document",
        description="Generate entities, DTOs, repositories, services, "
        "controllers and tests for every entity table",
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("schema", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema JSON from")

    parser.add_argument(
        "--target", "-t", required=True, help="Target ecosystem id or alias"
    )
    parser.add_argument(
        "--output",
        "-o",
        default="generated",
        help="Output directory (default: ./generated)",
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument("--package", help="Base package/namespace of generated code")
    parser.add_argument("--project-name", help="Name of the generated project")

    features_group = parser.add_argument_group("feature packs")
    features_group.add_argument(
        "--feature",
        "-f",
        action="append",
        choices=FEATURE_SWITCHES,
        default=[],
        help="Enable a feature pack (repeatable)",
    )
    features_group.add_argument(
        "--storage-backend",
        choices=STORAGE_BACKENDS,
        help="Backend for the file_storage pack",
    )
    features_group.add_argument(
        "--provider",
        action="append",
        choices=SOCIAL_PROVIDERS,
        default=[],
        help="Social login provider (repeatable)",
    )

    run_group = parser.add_argument_group("generation")
    run_group.add_argument(
        "--parallel", action="store_true", help="Generate tables concurrently"
    )
    run_group.add_argument(
        "--no-tests", action="store_true", help="Skip generated test files"
    )
    run_group.add_argument(
        "--dry-run", action="store_true", help="List files without writing them"
    )

    parser.set_defaults(func=_handle_generate)


def _build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Configuration overrides from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.package:
        overrides["base_package"] = args.package
    if args.project_name:
        overrides["project_name"] = args.project_name
    if args.feature:
        overrides["features"] = {name: True for name in args.feature}
    if args.storage_backend:
        overrides["storage_backend"] = args.storage_backend
    if args.provider:
        overrides["social_providers"] = list(dict.fromkeys(args.provider))
    if args.parallel:
        overrides["parallel"] = True
    if args.no_tests:
        overrides["generate_tests"] = False

    return overrides


def _build_config(args: argparse.Namespace, target: str) -> GeneratorConfig:
    try:
        config = load_config(target, _build_overrides(args), args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for message in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {message}[/yellow]")
        logger.warning("Configuration: %s", message)

    return config


def _load_schema(args: argparse.Namespace) -> SchemaModel:
    try:
        source, schema = load_schema(file_path=args.schema, url=args.url)
    except FileNotFoundError as e:
        raise CLIError(str(e)) from e
    except SchemaLoaderError as e:
        raise CLIError(str(e)) from e

    if not schema.entity_tables():
        raise CLIError(f"Schema {source} contains no entity tables")

    logger.info("Loaded %d tables from %s", len(schema.tables), source)
    return schema


def _handle_generate(args: argparse.Namespace) -> int:
    registry = get_registry()
    target = registry.resolve(args.target)
    if target is None:
        raise CLIError(
            f"Unsupported target '{args.target}'. "
            f"Supported targets: {', '.join(registry.list_targets())}"
        )

    schema = _load_schema(args)
    config = _build_config(args, target)
    generator = registry.create_generator(target, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[green]Generating {generator.display_name} project...", total=None)
        result = generate_project(generator, schema)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    _print_diagnostics(result.diagnostics)

    if args.dry_run:
        _print_file_list(result)
    else:
        written = result.write_files(Path(args.output))
        console.print(
            f"[green]✓[/green] Wrote {len(written)} files to [cyan]{Path(args.output)}[/cyan]"
        )

    if args.verbose and result.metadata:
        _print_metadata(result)

    return 0


def _print_file_list(result: GenerationResult):
    table = Table(title="📄 Generated Files", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Path", style="cyan")
    table.add_column("Lines", justify="right", style="green")

    for path, content in result.files.items():
        table.add_row(path, str(content.count("\n")))

    console.print(table)


def _print_metadata(result: GenerationResult):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


def _print_diagnostics(diagnostics: List[Diagnostic]):
    if not diagnostics:
        return

    table = Table(title="⚠️  Diagnostics", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Kind", style="bold")
    table.add_column("Location", style="cyan")
    table.add_column("Message")

    for diagnostic in diagnostics:
        style = "yellow" if diagnostic.severity == Severity.WARNING else "dim"
        location = diagnostic.table or ""
        if diagnostic.column:
            location = f"{location}.{diagnostic.column}"
        table.add_row(
            f"[{style}]{diagnostic.severity.value}[/{style}]",
            diagnostic.kind.value,
            location,
            diagnostic.message,
        )

    console.print(table)


def _handle_targets(args: argparse.Namespace) -> int:
    registry = get_registry()

    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Language", style="cyan")
    table.add_column("Framework", style="cyan")
    table.add_column("Aliases", style="blue")

    for target in registry.list_targets():
        info = registry.get_target_info(target)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {target}", info["language"], info["framework"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] schema-codegen generate [dim]schema.json[/dim] --target [cyan]TARGET[/cyan]\n"
            "[bold]Info:[/bold] schema-codegen target-info [cyan]TARGET[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _handle_target_info(args: argparse.Namespace) -> int:
    registry = get_registry()
    if not registry.is_supported(args.target):
        raise CLIError(
            f"Target '{args.target}' is not supported. Use 'schema-codegen targets' to see options"
        )

    info = registry.get_target_info(args.target)

    info_text = f"""[bold]Target:[/bold] {info['name']}
[bold]Language:[/bold] {info['language']}
[bold]Framework:[/bold] {info['framework']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Artifacts:[/bold] {', '.join(info['artifacts'])}
[bold]Feature Packs:[/bold] {', '.join(info['feature_packs']) or 'none'}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"🔧 {info['name']}", border_style="green"))

    defaults = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    defaults.add_column("Setting", style="bold")
    defaults.add_column("Value", style="green")
    for key, value in info["defaults"].items():
        defaults.add_row(key, str(value))

    console.print()
    console.print(defaults)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Exit code (0 for success, 1 for any error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        configure_logging(logging.DEBUG)
    elif getattr(args, "quiet", False):
        configure_logging(logging.WARNING)
    else:
        configure_logging(logging.INFO)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (CLIError, RegistryError, GeneratorError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
