"""Lark-based parser for extend-budget stylesheets."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from extbudget.errors import ParseError
from extbudget.stylesheet.emitter import normalize_selector
from extbudget.stylesheet.model import (
    Declaration,
    Extend,
    Include,
    Rule,
    Statement,
    Stylesheet,
    Variable,
)

__all__ = ["parse_stylesheet"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_KEYWORDS: dict[str, object] = {"true": True, "false": False, "null": None}


def _unquote(raw: str) -> str:
    return raw[1:-1]


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into the stylesheet model."""

    # ---- values ----

    def number(self, items: list[Token]) -> int | float:
        raw = str(items[0])
        return float(raw) if "." in raw else int(raw)

    def string(self, items: list[Token]) -> str:
        return _unquote(str(items[0]))

    def word(self, items: list[Token]) -> object:
        raw = str(items[0])
        return _KEYWORDS.get(raw, raw)

    def pair(self, items: list[object]) -> tuple[str, object]:
        return (str(items[0]), items[1])

    def map(self, items: list[object]) -> dict[str, object]:
        return dict(item for item in items if item is not None)  # type: ignore[misc]

    def variable(self, items: list[object]) -> Variable:
        return Variable(name=str(items[0])[1:], value=items[1])

    # ---- directives ----

    def arg_name(self, items: list[Token]) -> str:
        return str(items[0]).lstrip("%")

    def flag(self, items: list[Token]) -> str:
        return str(items[0])

    def include(self, items: list[object]) -> Include:
        args = [str(item) for item in items[1:] if item is not None]
        return Include(name=str(items[0]), args=args)

    def extend(self, items: list[object]) -> Extend:
        flag = str(items[1]) if len(items) > 1 and items[1] is not None else ""
        return Extend(placeholder=str(items[0])[1:], flag=flag)

    # ---- blocks ----

    def declaration(self, items: list[Token]) -> Declaration:
        raw = str(items[0]).strip().rstrip(";")
        name, _, value = raw.partition(":")
        return Declaration(name=name.strip(), value=value.strip())

    def rule(self, items: list[object]) -> Rule:
        selectors = [
            normalize_selector(part) for part in str(items[0]).split(",") if part.strip()
        ]
        children: list[Statement] = list(items[1:])  # type: ignore[arg-type]
        return Rule(selectors=selectors, children=children)

    def start(self, items: list[Statement]) -> Stylesheet:
        return Stylesheet(statements=list(items))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse stylesheet source into a :class:`Stylesheet`.

    Raises :class:`ParseError` with the line and column of the first
    unexpected token or character.
    """
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e
    return StylesheetTransformer().transform(tree)
