# ABOUTME: Public API for the Booktracker database layer.
# ABOUTME: Exports connection management, the two stores, and the Booklist aggregate.

from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.db.connection import DEFAULT_DB_PATH, open_database
from booktracker.db.mapping import Booklist

__all__ = [
    "DEFAULT_DB_PATH",
    "BookCatalog",
    "Booklist",
    "BooklistStore",
    "open_database",
]
