# ABOUTME: Search operations over booklists and canonical books.
# ABOUTME: Builds token filters for the stores and wraps currently-reading books in a fake list.

import logging

from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.db.mapping import Booklist
from booktracker.metadata.matcher import build_filter, tokenize
from booktracker.metadata.types import Book

logger = logging.getLogger(__name__)

BOOKLIST_SEARCH_FIELDS = ("name", "tags")
BOOK_SEARCH_FIELDS = ("title", "asin")

CURRENTLY_READING_NAME = "Currently Reading"


class SearchService:
    """Case-sensitive token search over the booklist and book stores.

    Every whitespace-separated token in the criteria must appear in at least
    one searched field. Blank criteria return everything in insertion order.
    """

    def __init__(self, booklists: BooklistStore, books: BookCatalog) -> None:
        self._booklists = booklists
        self._books = books

    def search_booklists(self, criteria: str | None) -> list[Booklist]:
        """Find booklists whose name or tags contain every token."""
        tokens = tokenize(criteria)
        results = self._booklists.scan(build_filter(tokens, BOOKLIST_SEARCH_FIELDS))
        logger.info("Booklist search %s matched %d booklist(s)", tokens, len(results))
        return results

    def search_books(self, criteria: str | None) -> list[Book]:
        """Find books whose title or asin contain every token."""
        tokens = tokenize(criteria)
        results = self._books.scan(build_filter(tokens, BOOK_SEARCH_FIELDS))
        logger.info("Book search %s matched %d book(s)", tokens, len(results))
        return results

    def currently_reading(self) -> Booklist:
        """Return every book flagged as currently being read.

        The result is shaped like a booklist for display but is never stored;
        it has no id and no owner.
        """
        books = self._books.list_currently_reading()
        return Booklist(id="", name=CURRENTLY_READING_NAME, customer_id="", books=tuple(books))
