"""CLI command: extbudget report -- show placeholder usage per budget."""

from __future__ import annotations

import json
import sys

import click

from extbudget.cli.options import compile_options, echo_diagnostics, run_compile
from extbudget.errors import BudgetLookupError


@click.command()
@compile_options
@click.option("--only", "key_filter", default="all", help="Report on one budget only")
@click.option("--json", "as_json", is_flag=True, help="Print the raw usage registry as JSON")
def report(
    stylesheet: str,
    budget_values: tuple[str, ...],
    option_values: tuple[str, ...],
    key_filter: str,
    as_json: bool,
) -> None:
    """Compile a stylesheet and print its extend budget report."""
    result = run_compile(stylesheet, budget_values, option_values)
    echo_diagnostics(result)

    if result.session is None:
        click.echo("No ext() directives found; nothing to report.")
        return

    if as_json:
        click.echo(json.dumps(result.session.registry.snapshot(), indent=2))
        return

    try:
        click.echo(result.session.render_debug(key_filter), nl=False)
    except BudgetLookupError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
