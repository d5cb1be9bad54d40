"""Debug report assembly and the on-page overlay rule that displays it."""

from __future__ import annotations

import logging

from extbudget.config import ExtConfig
from extbudget.errors import BudgetLookupError
from extbudget.report.formatter import format_budget
from extbudget.stylesheet.emitter import format_rule
from extbudget.tracking.registry import UsageRegistry

logger = logging.getLogger(__name__)

REPORT_HEADER = "EXTEND BUDGET REPORT\n\n"
NOTHING_FOUND = (
    "Nothing to see here. Set show-all: true or over-only: false "
    "in $ext-options to list every placeholder.\n"
)
OVERLAY_SELECTOR = "body::before"

# Fixed-position panel; the report itself goes into ``content``.
OVERLAY_DECLARATIONS: list[tuple[str, str]] = [
    ("position", "fixed"),
    ("top", "0"),
    ("right", "0"),
    ("left", "0"),
    ("z-index", "2147483647"),
    ("max-height", "100vh"),
    ("overflow", "auto"),
    ("padding", "1em"),
    ("background", "rgba(255, 255, 255, 0.95)"),
    ("color", "#222"),
    ("font", "12px/1.4 monospace"),
    ("white-space", "pre"),
]


def render_debug(registry: UsageRegistry, config: ExtConfig, key_filter: str = "all") -> str:
    """Assemble the usage report for every budget, or only *key_filter*."""
    result = REPORT_HEADER
    if key_filter != "all":
        if key_filter not in registry:
            raise BudgetLookupError(
                f"No budget named '{key_filter}'. Known budgets: "
                + ", ".join(registry.budget_names())
            )
        result += format_budget(registry.consumer_map(key_filter), key_filter, config)
    else:
        for budget_name in registry.budget_names():
            result += format_budget(registry.consumer_map(budget_name), budget_name, config)

    if result == REPORT_HEADER:
        result += NOTHING_FOUND
    logger.debug("Rendered debug report for %s (%d chars)", key_filter, len(result))
    return result


def css_string(text: str) -> str:
    """Quote *text* as a CSS string literal, turning newlines into ``\\A``."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\A ")
    return f'"{escaped}"'


def debug_rule(report: str) -> str:
    """Render the overlay rule that shows *report* on top of the page."""
    declarations = [("content", css_string(report)), *OVERLAY_DECLARATIONS]
    return format_rule([OVERLAY_SELECTOR], declarations)
