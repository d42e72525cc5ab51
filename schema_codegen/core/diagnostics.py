"""
Structured diagnostics emitted alongside generated files.

The naming, relationship and type-mapping layers never raise for a
well-formed schema model. Anything they skip or degrade is reported here
instead so callers can tell under-generated output from complete output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Diagnostic severity."""

    INFO = "info"
    WARNING = "warning"


class DiagnosticKind(Enum):
    """What was skipped, degraded or renamed."""

    DANGLING_FOREIGN_KEY = "dangling_foreign_key"
    MALFORMED_JUNCTION = "malformed_junction"
    UNMAPPED_TYPE = "unmapped_type"
    KEYWORD_ESCAPED = "keyword_escaped"
    NAME_COLLISION = "name_collision"
    MISSING_PRIMARY_KEY = "missing_primary_key"
    DUPLICATE_ENTITY_NAME = "duplicate_entity_name"
    PATH_COLLISION = "path_collision"


@dataclass(frozen=True)
class Diagnostic:
    """A single warning or note about the generation run."""

    kind: DiagnosticKind
    message: str
    table: Optional[str] = None
    column: Optional[str] = None
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.table and self.column:
            location = f"{self.table}.{self.column}: "
        elif self.table:
            location = f"{self.table}: "
        return f"[{self.kind.value}] {location}{self.message}"


def warning(kind: DiagnosticKind, message: str, table: str = None, column: str = None) -> Diagnostic:
    """Shorthand for a WARNING diagnostic."""
    return Diagnostic(kind, message, table, column, Severity.WARNING)


def info(kind: DiagnosticKind, message: str, table: str = None, column: str = None) -> Diagnostic:
    """Shorthand for an INFO diagnostic."""
    return Diagnostic(kind, message, table, column, Severity.INFO)
