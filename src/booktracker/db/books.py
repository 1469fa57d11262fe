# ABOUTME: Load, save, and scan operations for canonical books in the SQLite catalog.
# ABOUTME: Books are keyed by asin; scans return rows in insertion order.

import logging
import sqlite3

from booktracker.db.filters import TEXT, compile_filter
from booktracker.db.mapping import book_to_row, row_to_book
from booktracker.metadata.matcher import FilterExpression
from booktracker.metadata.types import Book

logger = logging.getLogger(__name__)

# Columns a book search may match tokens against.
SEARCHABLE_COLUMNS = {"title": TEXT, "asin": TEXT, "author": TEXT, "genre": TEXT}


class BookCatalog:
    """Wraps a sqlite3 connection and provides typed access to the books table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, asin: str) -> Book | None:
        """Retrieve a book by asin, or None if the catalog does not hold it."""
        cursor = self._conn.execute("SELECT * FROM books WHERE asin = ?", (asin,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def save(self, book: Book) -> Book:
        """Insert or update ``book``. An existing row keeps its scan position."""
        row = book_to_row(book)
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        updates = ", ".join(f"{name} = excluded.{name}" for name in row if name != "asin")
        self._conn.execute(
            f"INSERT INTO books ({columns}) VALUES ({placeholders}) "
            f"ON CONFLICT(asin) DO UPDATE SET {updates}, "
            "date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')",
            list(row.values()),
        )
        self._conn.commit()
        logger.debug("Saved book %s", book.asin)
        return book

    def delete(self, book: Book) -> None:
        """Delete ``book`` from the catalog. Deleting a missing book is a no-op."""
        self._conn.execute("DELETE FROM books WHERE asin = ?", (book.asin,))
        self._conn.commit()

    def scan(self, expression: FilterExpression | None = None) -> list[Book]:
        """Return every book matching ``expression`` (all books when omitted)."""
        where, params = compile_filter(
            expression or FilterExpression(), "books", SEARCHABLE_COLUMNS
        )
        cursor = self._conn.execute(
            f"SELECT * FROM books WHERE {where} ORDER BY books.rowid", params
        )
        return [row_to_book(row) for row in cursor.fetchall()]

    def list_currently_reading(self) -> list[Book]:
        """Return every book whose currently_reading flag is set, in insertion order."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE currently_reading = 1 ORDER BY rowid"
        )
        return [row_to_book(row) for row in cursor.fetchall()]
