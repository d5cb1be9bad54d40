"""Usage registry: budget -> placeholder -> ordered consumer selectors."""

from __future__ import annotations

import copy
from collections.abc import Iterable

ConsumerMap = dict[str, list[str]]


class UsageRegistry:
    """Per-compilation record of which selectors inherited from which placeholder.

    Budgets keep the order in which they were first allocated, and consumers
    keep the textual order in which their rules were compiled.
    """

    def __init__(self) -> None:
        self._budgets: dict[str, ConsumerMap] = {}

    def initialize(self, budget_names: Iterable[str]) -> None:
        """Allocate one empty consumer map per budget; no-op once populated."""
        if self._budgets:
            return
        for name in budget_names:
            self._budgets[name] = {}

    # --- read -----------------------------------------------------------------

    def __contains__(self, budget_name: object) -> bool:
        return budget_name in self._budgets

    def budget_names(self) -> list[str]:
        return list(self._budgets)

    def consumer_map(self, budget_name: str) -> ConsumerMap:
        """Return the live consumer map for *budget_name* (raises ``KeyError``)."""
        return self._budgets[budget_name]

    def consumers(self, budget_name: str, placeholder: str) -> tuple[str, ...]:
        """Consumers recorded for a placeholder, or an empty tuple."""
        return tuple(self._budgets.get(budget_name, {}).get(placeholder, ()))

    def snapshot(self) -> dict[str, ConsumerMap]:
        """Return a deep copy of the whole registry."""
        return copy.deepcopy(self._budgets)

    # --- write ----------------------------------------------------------------

    def record(self, budget_name: str, placeholder: str, consumers: list[str]) -> None:
        """Store *consumers* for a placeholder under an existing budget."""
        self._budgets[budget_name][placeholder] = list(consumers)

    def __repr__(self) -> str:
        counts = {b: len(m) for b, m in self._budgets.items()}
        return f"UsageRegistry(placeholders={counts})"
