# ABOUTME: CLI package for sumgate, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from sumgate.cli.commands import verify_cmd

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _configure_logging(verbosity: int) -> None:
    """Send log records to stderr through Rich, more detail per -v."""
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="sumgate")
@click.option(
    "-v",
    "--verbose",
    "verbosity",
    count=True,
    help="Increase log detail (-v for info, -vv for debug).",
)
def cli(verbosity: int) -> None:
    """sumgate - verify files against checksum lists under a memory budget."""
    _configure_logging(verbosity)


cli.add_command(verify_cmd.verify)
