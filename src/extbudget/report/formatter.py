"""Plain-text formatting of per-budget placeholder usage."""

from __future__ import annotations

from extbudget.config import ExtConfig
from extbudget.tracking.dedupe import join_selectors
from extbudget.tracking.registry import ConsumerMap

ALL_GOOD = "All good!"
WARNING_PREFIX = "\u26a0 Check your extends"
OVER_MARKER = "  !! over by {overage}: "
CONSUMER_INDENT = "    "


def format_budget(consumer_map: ConsumerMap, budget_name: str, config: ExtConfig) -> str:
    """Render one budget's consumer map as a headline plus per-placeholder lines.

    Returns an empty string for a budget nothing has extended yet. Placeholders
    within their limit are listed only when ``over-only`` is off; placeholders
    over their limit are always listed with their consumers.
    """
    if not consumer_map:
        return ""

    options = config.options
    limit = config.limit(budget_name) or 0
    lines: list[str] = []
    over_count = 0
    used = 0
    for placeholder, consumers in consumer_map.items():
        used = len(consumers)
        over = used > limit
        if over or not options.over_only:
            lines.append(f"{used}/{limit} - %{placeholder}")
        if over:
            over_count += 1
            lines.append(OVER_MARKER.format(overage=used - limit) + join_selectors(consumers))
        elif not options.over_only:
            lines.append(CONSUMER_INDENT + join_selectors(consumers))

    count = len(consumer_map)
    ratio = limit * count
    prefix = ALL_GOOD if over_count == 0 and options.show_all else WARNING_PREFIX
    # ``used`` is the count of the last placeholder listed.
    headline = f"{prefix} - {over_count} of {count} {budget_name} ({limit}, {used}/{ratio} ratio)"
    return "\n".join([headline, *lines]) + "\n\n"
