"""extbudget model layer -- public type re-exports."""

from extbudget.model.diagnostic import Diagnostic, DiagnosticKind, Severity

__all__ = [
    "Severity",
    "DiagnosticKind",
    "Diagnostic",
]
