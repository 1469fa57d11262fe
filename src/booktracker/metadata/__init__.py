# ABOUTME: Metadata package: book values, token matching, and external catalog lookups.
# ABOUTME: Exports the Book and BookUpdate types used throughout Booktracker.

from booktracker.metadata.matcher import FilterExpression, build_filter, tokenize
from booktracker.metadata.provider import CatalogLookup
from booktracker.metadata.types import Book, BookUpdate

__all__ = [
    "Book",
    "BookUpdate",
    "CatalogLookup",
    "FilterExpression",
    "build_filter",
    "tokenize",
]
