# ABOUTME: The Booklist aggregate and conversions between domain values and SQLite rows.
# ABOUTME: Embedded books and tags are stored as JSON columns on the booklists table.

import json
import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from typing import Any

from booktracker.metadata.types import Book

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Booklist:
    """A reader's list of books, holding by-value copies of each Book.

    Instances are immutable: ``tags`` is a frozenset and ``books`` a tuple, so
    nothing handed out by a store can be mutated behind its back. Changes
    produce a new Booklist. ``book_count`` is derived from ``books`` and can
    never disagree with it.
    """

    id: str
    name: str
    customer_id: str
    tags: frozenset[str] = field(default_factory=frozenset)
    books: tuple[Book, ...] = ()
    version: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", frozenset(self.tags or ()))
        object.__setattr__(self, "books", tuple(self.books or ()))

    @property
    def book_count(self) -> int:
        return len(self.books)

    @property
    def asins(self) -> list[str]:
        return [book.asin for book in self.books]

    def is_owned_by(self, customer_id: str | None) -> bool:
        return customer_id is not None and self.customer_id == customer_id

    def renamed(self, name: str) -> "Booklist":
        return replace(self, name=name)

    def with_book(self, book: Book) -> "Booklist":
        """Append ``book`` to the end of the list. Duplicates are allowed."""
        return replace(self, books=(*self.books, book))

    def without_asin(self, asin: str) -> "Booklist":
        """Drop every embedded entry with ``asin``."""
        return replace(self, books=tuple(b for b in self.books if b.asin != asin))

    def with_books(self, books: Iterable[Book]) -> "Booklist":
        return replace(self, books=tuple(books))


def book_to_dict(book: Book) -> dict[str, Any]:
    """Serialize a Book to a plain dict, dropping unset fields."""
    return {key: value for key, value in asdict(book).items() if value is not None}


def dict_to_book(data: dict[str, Any]) -> Book:
    """Rebuild a Book from ``book_to_dict`` output, ignoring unknown keys."""
    known = {name: data.get(name) for name in Book.__dataclass_fields__}
    return Book(**known)


def book_to_row(book: Book) -> dict[str, Any]:
    """Convert a Book to a books-table row. Booleans are stored as 0/1."""
    row = asdict(book)
    if book.currently_reading is not None:
        row["currently_reading"] = int(book.currently_reading)
    return row


def row_to_book(row: Any) -> Book:
    """Convert a books-table row back into a Book."""
    reading = row["currently_reading"]
    return Book(
        asin=row["asin"],
        title=row["title"],
        author=row["author"],
        genre=row["genre"],
        thumbnail=row["thumbnail"],
        rating=row["rating"],
        currently_reading=None if reading is None else bool(reading),
        percent_complete=row["percent_complete"],
        page_count=row["page_count"],
    )


def booklist_to_row(booklist: Booklist) -> dict[str, Any]:
    """Convert a Booklist to a booklists-table row (without the version column)."""
    return {
        "id": booklist.id,
        "name": booklist.name,
        "customer_id": booklist.customer_id,
        "tags": json.dumps(sorted(booklist.tags)),
        "books": json.dumps([book_to_dict(book) for book in booklist.books]),
        "book_count": booklist.book_count,
    }


def row_to_booklist(row: Any) -> Booklist:
    """Convert a booklists-table row back into a Booklist.

    The stored book_count column is informational only; a mismatch with the
    embedded books is logged and the derived count wins.
    """
    books = tuple(dict_to_book(item) for item in json.loads(row["books"] or "[]"))
    if row["book_count"] != len(books):
        logger.warning(
            "Booklist %s stored book_count=%d but embeds %d book(s)",
            row["id"],
            row["book_count"],
            len(books),
        )
    return Booklist(
        id=row["id"],
        name=row["name"],
        customer_id=row["customer_id"],
        tags=frozenset(json.loads(row["tags"] or "[]")),
        books=books,
        version=row["version"],
    )
