"""Duplicate filter for consumer selector sequences."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from extbudget.config import ExtOptions
from extbudget.errors import DuplicateSelectorError
from extbudget.model.diagnostic import Diagnostic, DiagnosticKind, Severity

logger = logging.getLogger(__name__)

Emit = Callable[[Diagnostic], None]


def join_selectors(selectors: Iterable[str]) -> str:
    """Render selectors as a comma-separated selector group."""
    return ", ".join(selectors)


def dedupe(
    selectors: Iterable[str],
    placeholder: str,
    options: ExtOptions,
    emit: Emit | None = None,
) -> list[str]:
    """Drop repeated selectors, keeping first occurrences in order.

    Each repeat is an anomaly: it raises :class:`DuplicateSelectorError` under
    ``strict``, is passed to *emit* as a warning under ``warn-duplicates``, and
    is dropped silently otherwise.
    """
    seen: set[str] = set()
    result: list[str] = []
    for selector in selectors:
        if selector not in seen:
            seen.add(selector)
            result.append(selector)
            continue

        message = f"{selector} is already extending %{placeholder}."
        if options.strict:
            diagnostic = Diagnostic(
                kind=DiagnosticKind.DUPLICATE,
                severity=Severity.ERROR,
                message=message,
                placeholder=placeholder,
                selector=selector,
            )
            raise DuplicateSelectorError(message, diagnostic=diagnostic)
        if options.warn_duplicates:
            diagnostic = Diagnostic(
                kind=DiagnosticKind.DUPLICATE,
                severity=Severity.WARNING,
                message=message,
                placeholder=placeholder,
                selector=selector,
            )
            if emit is not None:
                emit(diagnostic)
            else:
                logger.warning("%s", diagnostic)
    return result
