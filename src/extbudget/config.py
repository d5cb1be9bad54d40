"""Budget and option configuration for a single compilation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from extbudget.errors import ConfigurationError

TOTAL = "total"

# Stylesheet-facing flag names mapped to dataclass field names.
OPTION_NAMES: dict[str, str] = {
    "strict": "strict",
    "warn-over": "warn_over",
    "warn-duplicates": "warn_duplicates",
    "over-only": "over_only",
    "show-all": "show_all",
}


def _field_name(name: str) -> str:
    """Map ``warn-over`` or ``warn_over`` to the dataclass field name."""
    key = name.replace("_", "-")
    if key not in OPTION_NAMES:
        known = ", ".join(OPTION_NAMES)
        raise ConfigurationError(f"Unknown option '{name}'. Known options: {known}.")
    return OPTION_NAMES[key]


def _validated(overrides: object) -> dict[str, bool]:
    """Check a user-supplied options map and key it by field name."""
    if not isinstance(overrides, Mapping):
        raise ConfigurationError(
            f"Options must be a map of flag names to booleans, got {overrides!r}."
        )
    updates: dict[str, bool] = {}
    for name, value in overrides.items():
        field_name = _field_name(str(name))
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Option '{name}' must be true or false, got {value!r}."
            )
        updates[field_name] = value
    return updates


@dataclass(frozen=True)
class ExtOptions:
    """The five boolean flags controlling diagnostics and reporting."""

    strict: bool = False
    warn_over: bool = True
    warn_duplicates: bool = True
    over_only: bool = True
    show_all: bool = True

    @classmethod
    def from_mapping(cls, overrides: object = None) -> ExtOptions:
        """Merge user-supplied flags over the defaults (user wins)."""
        if overrides is None:
            return cls()
        return cls(**_validated(overrides))

    def get(self, name: str) -> bool:
        return getattr(self, _field_name(name))


@dataclass(frozen=True)
class ExtConfig:
    """Resolved configuration: the budget table plus the option flags."""

    budgets: dict[str, int] = field(default_factory=dict)
    options: ExtOptions = field(default_factory=ExtOptions)

    @classmethod
    def resolve(cls, budgets: object, options: object = None) -> ExtConfig:
        """Validate user input and build a ready-to-use configuration.

        Raises :class:`ConfigurationError` when no budget table is given, when it
        is empty or not a map, when a limit is not a positive integer, or when
        the options are malformed.
        """
        if budgets is None:
            raise ConfigurationError(
                "No budget table found. Define $ext-budget, e.g. (total: 15)."
            )
        if not isinstance(budgets, Mapping):
            raise ConfigurationError(
                f"The budget table must be a map of names to limits, got {budgets!r}."
            )
        if not budgets:
            raise ConfigurationError("The budget table is empty. Add at least one budget.")
        table: dict[str, int] = {}
        for name, limit in budgets.items():
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
                raise ConfigurationError(
                    f"Budget '{name}' must be a positive integer, got {limit!r}."
                )
            table[str(name)] = limit
        return cls(budgets=table, options=ExtOptions.from_mapping(options))

    def get_option(self, name: str) -> bool:
        return self.options.get(name)

    def limit(self, budget_name: str) -> int | None:
        return self.budgets.get(budget_name)
