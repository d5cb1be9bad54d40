"""extbudget CLI entry point: Click group with subcommands."""

import logging

import click

from extbudget import __version__


@click.group()
@click.version_option(version=__version__, prog_name="extbudget")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """extbudget - keep @extend usage of placeholders within budget."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from extbudget.cli.compile import compile_cmd  # noqa: E402
from extbudget.cli.report import report  # noqa: E402

cli.add_command(compile_cmd)
cli.add_command(report)
