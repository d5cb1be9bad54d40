"""Shared click options for commands that compile a stylesheet."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from extbudget.compiler import CompileResult, compile_file
from extbudget.errors import ExtBudgetError, ParseError

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def _split_pair(raw: str, param: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint=param)
    return name.strip(), value.strip()


def parse_budgets(values: tuple[str, ...]) -> dict[str, int] | None:
    if not values:
        return None
    budgets: dict[str, int] = {}
    for raw in values:
        name, value = _split_pair(raw, "--budget")
        try:
            budgets[name] = int(value)
        except ValueError:
            raise click.BadParameter(
                f"limit for '{name}' must be an integer, got {value!r}", param_hint="--budget"
            ) from None
    return budgets


def parse_options(values: tuple[str, ...]) -> dict[str, bool] | None:
    if not values:
        return None
    options: dict[str, bool] = {}
    for raw in values:
        name, value = _split_pair(raw, "--option")
        if value.lower() in _TRUE:
            options[name] = True
        elif value.lower() in _FALSE:
            options[name] = False
        else:
            raise click.BadParameter(
                f"'{name}' must be true or false, got {value!r}", param_hint="--option"
            )
    return options


def compile_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the stylesheet argument plus --budget/--option overrides."""
    func = click.option(
        "--option",
        "option_values",
        multiple=True,
        metavar="NAME=BOOL",
        help="Override an $ext-options flag (repeatable)",
    )(func)
    func = click.option(
        "--budget",
        "budget_values",
        multiple=True,
        metavar="NAME=N",
        help="Override a budget limit (repeatable)",
    )(func)
    return click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))(func)


def run_compile(
    stylesheet: str, budget_values: tuple[str, ...], option_values: tuple[str, ...]
) -> CompileResult:
    """Compile *stylesheet*, exiting with code 1 on parse or fatal errors."""
    path = Path(stylesheet)
    budgets = parse_budgets(budget_values)
    options = parse_options(option_values)
    try:
        return compile_file(path, budgets=budgets, options=options)
    except ParseError as exc:
        location = f"{path.name}:{exc.line}:{exc.column}" if exc.line else path.name
        click.echo(f"Parse error in {location}: {exc}", err=True)
        sys.exit(1)
    except ExtBudgetError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def echo_diagnostics(result: CompileResult) -> None:
    for diag in result.diagnostics:
        click.echo(str(diag), err=True)
