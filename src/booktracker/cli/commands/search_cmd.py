# ABOUTME: The `booktracker search` command group for token search of booklists and books.
# ABOUTME: Every term must appear (case-sensitively) in one of the searched fields.

from pathlib import Path

import click

from booktracker.cli.options import db_option
from booktracker.cli.render import booklists_table, books_table, console
from booktracker.cli.services import open_services, reporting_errors


@click.group("search")
def search() -> None:
    """Search booklists or books."""


@search.command("lists")
@click.argument("criteria", nargs=-1)
@db_option
def search_lists(criteria: tuple[str, ...], db_path: Path | None) -> None:
    """Find booklists whose name or tags contain every term."""
    with reporting_errors(console), open_services(db_path) as services:
        results = services.search.search_booklists(" ".join(criteria))

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(booklists_table(results))
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")


@search.command("books")
@click.argument("criteria", nargs=-1)
@db_option
def search_books(criteria: tuple[str, ...], db_path: Path | None) -> None:
    """Find cataloged books whose title or asin contain every term."""
    with reporting_errors(console), open_services(db_path) as services:
        results = services.search.search_books(" ".join(criteria))

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(books_table(results))
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
