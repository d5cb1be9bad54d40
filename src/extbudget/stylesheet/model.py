"""Stylesheet model: the parsed statements of one compilation unit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair inside a rule block."""

    name: str
    value: str


@dataclass(frozen=True)
class Include:
    """An ``@include name(args);`` directive."""

    name: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Extend:
    """A plain ``@extend %placeholder [!flag];`` directive."""

    placeholder: str  # without the leading "%"
    flag: str = ""


@dataclass(frozen=True)
class Variable:
    """A top-level ``$name: value;`` assignment (maps become dicts)."""

    name: str  # without the leading "$"
    value: object


@dataclass(frozen=True)
class Rule:
    """A selector list with its block of declarations, directives and nested rules."""

    selectors: list[str]
    children: list[Statement] = field(default_factory=list)

    @property
    def declarations(self) -> list[Declaration]:
        return [c for c in self.children if isinstance(c, Declaration)]


Statement = Union[Declaration, Include, Extend, Variable, Rule]


@dataclass(frozen=True)
class Stylesheet:
    """All statements of a stylesheet in source order."""

    statements: list[Statement]

    @property
    def variables(self) -> dict[str, object]:
        """Top-level variables; a later assignment replaces an earlier one."""
        return {s.name: s.value for s in self.statements if isinstance(s, Variable)}

    def walk(self) -> list[Statement]:
        """Every statement, depth-first, in source order."""
        found: list[Statement] = []
        stack = list(reversed(self.statements))
        while stack:
            stmt = stack.pop()
            found.append(stmt)
            if isinstance(stmt, Rule):
                stack.extend(reversed(stmt.children))
        return found
