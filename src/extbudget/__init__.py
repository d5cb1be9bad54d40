"""extbudget - track @extend usage against per-placeholder budgets."""

__version__ = "0.1.0"

from extbudget.compiler import CompileResult, compile_file, compile_string
from extbudget.config import ExtConfig, ExtOptions
from extbudget.errors import (
    BudgetExceededError,
    BudgetLookupError,
    CompileError,
    ConfigurationError,
    ContextError,
    DuplicateSelectorError,
    ExtBudgetError,
    ParseError,
    UndefinedPlaceholderError,
)
from extbudget.model.diagnostic import Diagnostic, DiagnosticKind, Severity
from extbudget.tracking.session import ExtSession

__all__ = [
    "__version__",
    # compiler
    "compile_string",
    "compile_file",
    "CompileResult",
    # configuration
    "ExtConfig",
    "ExtOptions",
    # tracking
    "ExtSession",
    # diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    # errors
    "ExtBudgetError",
    "ConfigurationError",
    "ContextError",
    "UndefinedPlaceholderError",
    "DuplicateSelectorError",
    "BudgetExceededError",
    "BudgetLookupError",
    "CompileError",
    "ParseError",
]
