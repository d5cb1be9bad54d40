"""CLI command: extbudget compile -- compile a stylesheet to CSS."""

from __future__ import annotations

from pathlib import Path

import click

from extbudget.cli.options import compile_options, echo_diagnostics, run_compile


@click.command("compile")
@compile_options
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write CSS here instead of stdout",
)
def compile_cmd(
    stylesheet: str,
    budget_values: tuple[str, ...],
    option_values: tuple[str, ...],
    output: str | None,
) -> None:
    """Compile a stylesheet, applying and budgeting its extends.

    Warnings are printed to stderr. Exits with code 1 when the stylesheet
    cannot be parsed or a fatal error (e.g. strict mode) stops compilation.
    """
    result = run_compile(stylesheet, budget_values, option_values)
    echo_diagnostics(result)

    if output:
        Path(output).write_text(result.css, encoding="utf-8")
        click.echo(f"Wrote {output} ({len(result.diagnostics)} warning(s))", err=True)
    else:
        click.echo(result.css, nl=False)
