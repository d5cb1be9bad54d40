"""Diagnostic model: structured records for budget bookkeeping findings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class DiagnosticKind(Enum):
    """What kind of anomaly a diagnostic describes."""

    CONFIGURATION = "configuration"
    DUPLICATE = "duplicate"
    OVER_BUDGET = "over_budget"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced while tracking placeholder inheritance.

    Attributes:
        kind: Which check produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        placeholder: The placeholder name (without ``%``), if applicable.
        selector: The consuming selector involved, if applicable.
        budget: The budget name involved, if applicable.
        overage: How far over the limit the placeholder is, for over-budget findings.
        limit: The configured limit, for over-budget findings.
    """

    kind: DiagnosticKind
    severity: Severity
    message: str
    placeholder: str | None = None
    selector: str | None = None
    budget: str | None = None
    overage: int | None = None
    limit: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [%{self.placeholder}]" if self.placeholder else ""
        return f"{self.severity.value}{location}: {self.message}"
