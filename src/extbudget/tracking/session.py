"""Per-compilation session that tracks placeholder inheritance against budgets."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from extbudget.config import TOTAL, ExtConfig
from extbudget.errors import BudgetExceededError, ContextError
from extbudget.model.diagnostic import Diagnostic, DiagnosticKind, Severity
from extbudget.tracking.dedupe import dedupe, join_selectors
from extbudget.tracking.registry import ConsumerMap, UsageRegistry

logger = logging.getLogger(__name__)


class Inheritance(Protocol):
    """The host compiler's placeholder inheritance primitive."""

    def extend(self, placeholder: str, selectors: list[str], flag: str = "") -> None: ...


class ExtSession:
    """Bookkeeping for one compilation unit.

    The constructor takes an already-validated :class:`ExtConfig` and allocates
    the usage registry, so every :meth:`ext` call runs against ready state.
    Non-fatal findings accumulate in :attr:`diagnostics` in emission order.
    """

    def __init__(self, config: ExtConfig, extender: Inheritance | None = None) -> None:
        self.config = config
        self.registry = UsageRegistry()
        self.registry.initialize(config.budgets)
        self.diagnostics: list[Diagnostic] = []
        self._extender = extender
        logger.debug(
            "Extend session started: budgets=%s options=%s", config.budgets, config.options
        )

    def _emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    def ext(
        self,
        placeholder: str,
        budget_name: str = TOTAL,
        flag: str = "",
        selectors: Iterable[str] = (),
    ) -> list[str]:
        """Inherit from ``%placeholder`` and record the current selectors as consumers.

        *selectors* is the selector context of the rule the directive appears
        in. Returns the deduplicated consumers now recorded for the placeholder
        under *budget_name*.
        """
        consumers = [s for s in selectors if s]
        if not consumers:
            raise ContextError("cannot extend outside a selector")

        if self._extender is not None:
            self._extender.extend(placeholder, consumers, flag)

        consumer_map: ConsumerMap
        if budget_name in self.registry:
            consumer_map = self.registry.consumer_map(budget_name)
        else:
            self._emit(
                Diagnostic(
                    kind=DiagnosticKind.CONFIGURATION,
                    severity=Severity.WARNING,
                    message=f"The '{budget_name}' budget is not specified in $ext-budget.",
                    placeholder=placeholder,
                    budget=budget_name,
                )
            )
            consumer_map = {}

        existing = consumer_map.get(placeholder, [])
        recorded = dedupe(existing + consumers, placeholder, self.config.options, self._emit)
        consumer_map[placeholder] = recorded

        # Overwrites rather than unions: the last budget to touch a
        # placeholder name decides what "total" holds for it.
        if budget_name != TOTAL and TOTAL in self.registry:
            self.registry.record(TOTAL, placeholder, recorded)

        self._check_budget(placeholder, budget_name, recorded, consumers)
        return recorded

    def _check_budget(
        self,
        placeholder: str,
        budget_name: str,
        recorded: list[str],
        consumers: list[str],
    ) -> None:
        limit = self.config.limit(budget_name)
        if limit is None or len(recorded) <= limit:
            return
        overage = len(recorded) - limit
        selector = join_selectors(consumers)
        message = (
            f"%{placeholder} is over the '{budget_name}' budget by {overage} "
            f"(limit {limit}) when extended from {selector}."
        )
        options = self.config.options
        if options.strict:
            raise BudgetExceededError(
                message,
                diagnostic=Diagnostic(
                    kind=DiagnosticKind.OVER_BUDGET,
                    severity=Severity.ERROR,
                    message=message,
                    placeholder=placeholder,
                    selector=selector,
                    budget=budget_name,
                    overage=overage,
                    limit=limit,
                ),
            )
        if options.warn_over:
            self._emit(
                Diagnostic(
                    kind=DiagnosticKind.OVER_BUDGET,
                    severity=Severity.WARNING,
                    message=message,
                    placeholder=placeholder,
                    selector=selector,
                    budget=budget_name,
                    overage=overage,
                    limit=limit,
                )
            )

    def render_debug(self, key_filter: str = "all") -> str:
        """Format the usage report for every budget, or only *key_filter*."""
        from extbudget.report.debug import render_debug

        return render_debug(self.registry, self.config, key_filter)
