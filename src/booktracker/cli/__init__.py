# ABOUTME: CLI package for Booktracker, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from booktracker.cli.commands import list_cmd, progress_cmd, reading_cmd, search_cmd


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr: DEBUG with --verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; keep it quiet unless asked.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(package_name="booktracker")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Booktracker - track books and reading progress across your booklists."""
    configure_logging(verbose)


cli.add_command(list_cmd.booklist)
cli.add_command(progress_cmd.progress)
cli.add_command(reading_cmd.reading)
cli.add_command(search_cmd.search)
