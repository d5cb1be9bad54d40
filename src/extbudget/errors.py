"""Error hierarchy for extend-budget tracking and stylesheet compilation."""
from __future__ import annotations

from typing import Any

from extbudget.model.diagnostic import Diagnostic


class ExtBudgetError(Exception):
    """Base error for all extbudget errors."""

    def __init__(self, message: str, *, diagnostic: Diagnostic | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


class ConfigurationError(ExtBudgetError):
    """The budget table or options table is missing or malformed."""


class ContextError(ExtBudgetError):
    """An ``ext`` directive was used outside any selector."""


class UndefinedPlaceholderError(ExtBudgetError):
    """A rule tried to inherit from a placeholder that was never declared."""

    def __init__(self, placeholder: str, **kwargs: Any) -> None:
        super().__init__(
            f"The target selector was not found: %{placeholder}. "
            f'Use "@extend %{placeholder} !optional" to avoid this error.',
            **kwargs,
        )
        self.placeholder = placeholder


class DuplicateSelectorError(ExtBudgetError):
    """A selector extended the same placeholder twice within one budget (strict mode)."""


class BudgetExceededError(ExtBudgetError):
    """A placeholder has more consumers than its budget allows (strict mode)."""


class BudgetLookupError(ExtBudgetError, LookupError):
    """A debug report was requested for a budget the registry does not hold."""


class ParseError(ExtBudgetError):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class CompileError(ExtBudgetError):
    """The stylesheet parsed but uses a directive the compiler cannot apply."""
