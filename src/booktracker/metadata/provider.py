# ABOUTME: CatalogLookup protocol defining the contract for external book sources.
# ABOUTME: Add-book falls back to one of these when an identifier is not in the local catalog.

from typing import Protocol, runtime_checkable

from booktracker.metadata.types import Book


@runtime_checkable
class CatalogLookup(Protocol):
    """Protocol for external catalog lookup services.

    Implementations return candidate Books best-first. An empty list means
    nothing was found; lookup failures are reported the same way.
    """

    @property
    def name(self) -> str: ...

    def search(self, term: str) -> list[Book]: ...

    def search_by_isbn(self, isbn: str) -> list[Book]: ...
