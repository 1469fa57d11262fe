# ABOUTME: The `booktracker list` command group for managing booklists.
# ABOUTME: Provides create, rename, rm, show, ls, add, and remove subcommands.

from pathlib import Path

import click
from rich.markup import escape

from booktracker.cli.options import customer_option, db_option
from booktracker.cli.render import booklists_table, console, print_booklist
from booktracker.cli.services import open_services, reporting_errors


@click.group("list")
def booklist() -> None:
    """Manage booklists."""


@booklist.command("create")
@click.argument("name")
@click.option("--tag", "tags", multiple=True, help="Tag to attach (repeatable).")
@customer_option
@db_option
def list_create(name: str, tags: tuple[str, ...], customer_id: str, db_path: Path | None) -> None:
    """Create an empty booklist."""
    with reporting_errors(console), open_services(db_path) as services:
        created = services.booklists.create_booklist(name, customer_id, tags)
    console.print(
        f"Created [bold]{escape(created.name)}[/bold] with id [cyan]{escape(created.id)}[/cyan]."
    )


@booklist.command("rename")
@click.argument("booklist_id")
@click.argument("name")
@customer_option
@db_option
def list_rename(booklist_id: str, name: str, customer_id: str, db_path: Path | None) -> None:
    """Rename a booklist you own."""
    with reporting_errors(console), open_services(db_path) as services:
        renamed = services.booklists.rename_booklist(booklist_id, customer_id, name)
    console.print(
        f"Renamed [cyan]{escape(renamed.id)}[/cyan] to [bold]{escape(renamed.name)}[/bold]."
    )


@booklist.command("rm")
@click.argument("booklist_id")
@customer_option
@db_option
def list_rm(booklist_id: str, customer_id: str, db_path: Path | None) -> None:
    """Delete a booklist you own."""
    with reporting_errors(console), open_services(db_path) as services:
        removed = services.booklists.delete_booklist(booklist_id, customer_id)
    console.print(
        f"Deleted [bold]{escape(removed.name)}[/bold] ({removed.book_count} book(s))."
    )


@booklist.command("show")
@click.argument("booklist_id")
@db_option
def list_show(booklist_id: str, db_path: Path | None) -> None:
    """Show a booklist and its books."""
    with reporting_errors(console), open_services(db_path) as services:
        found = services.booklists.get_booklist(booklist_id)
    print_booklist(found)


@booklist.command("ls")
@customer_option
@db_option
def list_ls(customer_id: str, db_path: Path | None) -> None:
    """List your booklists."""
    with reporting_errors(console), open_services(db_path) as services:
        owned = services.booklists.list_booklists(customer_id)

    if not owned:
        console.print("[yellow]No booklists yet.[/yellow]")
        return

    console.print(booklists_table(owned))
    console.print(f"\n[dim]{len(owned)} booklist(s)[/dim]")


@booklist.command("add")
@click.argument("booklist_id")
@click.argument("terms", nargs=-1, required=True)
@customer_option
@db_option
def list_add(
    booklist_id: str, terms: tuple[str, ...], customer_id: str, db_path: Path | None
) -> None:
    """Add a book by asin or search terms to the end of a booklist."""
    identifier = " ".join(terms)
    with reporting_errors(console), open_services(db_path, with_lookup=True) as services:
        updated = services.booklists.add_book(booklist_id, customer_id, identifier)
    added = updated.books[-1]
    console.print(
        f"Added [bold]{escape(added.title or added.asin)}[/bold] to "
        f"[cyan]{escape(updated.name)}[/cyan] ({updated.book_count} book(s))."
    )


@booklist.command("remove")
@click.argument("booklist_id")
@click.argument("asin")
@customer_option
@db_option
def list_remove(booklist_id: str, asin: str, customer_id: str, db_path: Path | None) -> None:
    """Remove a book from a booklist."""
    with reporting_errors(console), open_services(db_path) as services:
        updated = services.booklists.remove_book(booklist_id, customer_id, asin)
    console.print(
        f"Removed [cyan]{escape(asin)}[/cyan] from [bold]{escape(updated.name)}[/bold] "
        f"({updated.book_count} book(s) left)."
    )
