# ABOUTME: Builds the store/service graph for one CLI invocation and tears it down afterwards.
# ABOUTME: Also holds the shared error reporting used by every command.

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from booktracker.core.booklists import BooklistService
from booktracker.core.search import SearchService
from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.db.connection import DEFAULT_DB_PATH, open_database
from booktracker.errors import BooktrackerError
from booktracker.metadata.http import BooktrackerHttpClient
from booktracker.metadata.openlibrary import OpenLibraryLookup
from booktracker.metadata.provider import CatalogLookup


@dataclass
class Services:
    booklists: BooklistService
    search: SearchService


def _create_lookup() -> tuple[CatalogLookup, BooktrackerHttpClient]:
    """Create the default catalog lookup (Open Library) and the client it owns."""
    http_client = BooktrackerHttpClient()
    return OpenLibraryLookup(http_client=http_client), http_client


@contextmanager
def open_services(db_path: Path | None, *, with_lookup: bool = False) -> Iterator[Services]:
    """Open the database and yield services wired to it.

    The catalog lookup is only built when ``with_lookup`` is set, so commands
    that never reach the network don't create an HTTP client.
    """
    conn = open_database(db_path or DEFAULT_DB_PATH)
    http_client = None
    try:
        lookup = None
        if with_lookup:
            lookup, http_client = _create_lookup()
        booklist_store = BooklistStore(conn)
        book_catalog = BookCatalog(conn)
        yield Services(
            booklists=BooklistService(booklist_store, book_catalog, lookup),
            search=SearchService(booklist_store, book_catalog),
        )
    finally:
        if http_client is not None:
            http_client.close()
        conn.close()


@contextmanager
def reporting_errors(console: Console) -> Iterator[None]:
    """Turn Booktracker faults into a red message and exit status 1."""
    try:
        yield
    except BooktrackerError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc
