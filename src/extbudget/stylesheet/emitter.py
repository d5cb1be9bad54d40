"""CSS text output for compiled rule blocks."""

from __future__ import annotations

INDENT = "  "


def normalize_selector(selector: str) -> str:
    """Collapse runs of whitespace inside a selector."""
    return " ".join(selector.split())


def format_rule(selectors: list[str], declarations: list[tuple[str, str]]) -> str:
    """Render one rule block, one selector per line."""
    head = ",\n".join(selectors)
    body = "".join(f"{INDENT}{name}: {value};\n" for name, value in declarations)
    return f"{head} {{\n{body}}}\n"


def format_stylesheet(blocks: list[str]) -> str:
    return "\n".join(blocks)
