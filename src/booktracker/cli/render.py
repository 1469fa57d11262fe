# ABOUTME: Rich table rendering for booklists and books in CLI output.
# ABOUTME: Shared by the list, search, progress, and reading commands.

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from booktracker.db.mapping import Booklist
from booktracker.metadata.types import Book

console = Console()


def _text(value: str | None) -> str:
    return escape(value) if value else "[dim]unknown[/dim]"


def _progress(book: Book) -> str:
    return f"{book.percent_complete}%" if book.percent_complete is not None else ""


def _reading(book: Book) -> str:
    if book.currently_reading is None:
        return ""
    return "yes" if book.currently_reading else "no"


def books_table(books: tuple[Book, ...] | list[Book], *, numbered: bool = False) -> Table:
    table = Table()
    if numbered:
        table.add_column("#", style="dim", justify="right")
    table.add_column("ASIN", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Rating", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Reading")

    for position, book in enumerate(books, start=1):
        cells = [
            escape(book.asin),
            _text(book.title),
            _text(book.author),
            "" if book.rating is None else str(book.rating),
            _progress(book),
            _reading(book),
        ]
        if numbered:
            cells.insert(0, str(position))
        table.add_row(*cells)
    return table


def booklists_table(booklists: list[Booklist]) -> Table:
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Owner", style="dim")
    table.add_column("Books", justify="right")
    table.add_column("Tags")

    for booklist in booklists:
        table.add_row(
            escape(booklist.id),
            escape(booklist.name),
            escape(booklist.customer_id),
            str(booklist.book_count),
            escape(", ".join(sorted(booklist.tags))),
        )
    return table


def print_booklist(booklist: Booklist) -> None:
    """Print a booklist header followed by its books, in list order."""
    header = f"[bold]{escape(booklist.name)}[/bold]"
    if booklist.id:
        header += f" [dim]({escape(booklist.id)})[/dim]"
    console.print(header)
    if booklist.tags:
        console.print(f"Tags: [cyan]{escape(', '.join(sorted(booklist.tags)))}[/cyan]")

    if not booklist.books:
        console.print("[yellow]No books in this list.[/yellow]")
        return

    console.print(books_table(booklist.books, numbered=True))
    console.print(f"\n[dim]{booklist.book_count} book(s)[/dim]")
