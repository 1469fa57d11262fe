# ABOUTME: The `booktracker progress` command for updating reading progress on a book.
# ABOUTME: Only the options given are changed; every booklist you own is refreshed to match.

from pathlib import Path

import click
from rich.markup import escape

from booktracker.cli.options import customer_option, db_option
from booktracker.cli.render import books_table, console
from booktracker.cli.services import open_services, reporting_errors
from booktracker.metadata.types import BookUpdate


@click.command("progress")
@click.argument("asin")
@click.option("--rating", type=click.IntRange(min=0), default=None, help="Your rating.")
@click.option(
    "--percent",
    "percent_complete",
    type=click.IntRange(0, 100),
    default=None,
    help="Percent of the book read.",
)
@click.option(
    "--reading/--not-reading",
    "currently_reading",
    default=None,
    help="Mark the book as currently being read, or not.",
)
@click.option(
    "--first-only",
    is_flag=True,
    help="Refresh only the first copy of the book in each list.",
)
@customer_option
@db_option
def progress(
    asin: str,
    rating: int | None,
    percent_complete: int | None,
    currently_reading: bool | None,
    first_only: bool,
    customer_id: str,
    db_path: Path | None,
) -> None:
    """Update rating, percent complete, or currently-reading for a book."""
    with reporting_errors(console), open_services(db_path) as services:
        update = BookUpdate(
            rating=rating,
            currently_reading=currently_reading,
            percent_complete=percent_complete,
        )
        result = services.booklists.update_book(
            asin, customer_id, update, replace_all=not first_only
        )

    if update.is_empty:
        console.print("[yellow]Nothing to update.[/yellow]")
    console.print(books_table([result.book]))
    updated = result.propagation.updated_booklists
    if updated:
        console.print(
            f"Refreshed {len(updated)} booklist(s): [cyan]{escape(', '.join(updated))}[/cyan]"
        )
    else:
        console.print("[dim]No booklists needed refreshing.[/dim]")
