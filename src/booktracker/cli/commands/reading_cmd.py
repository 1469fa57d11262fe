# ABOUTME: The `booktracker reading` command listing books currently being read.
# ABOUTME: Shows the synthetic "Currently Reading" list built from the catalog.

from pathlib import Path

import click

from booktracker.cli.options import db_option
from booktracker.cli.render import console, print_booklist
from booktracker.cli.services import open_services, reporting_errors


@click.command("reading")
@db_option
def reading(db_path: Path | None) -> None:
    """Show every book flagged as currently reading."""
    with reporting_errors(console), open_services(db_path) as services:
        current = services.search.currently_reading()
    print_booklist(current)
