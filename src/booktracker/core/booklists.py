# ABOUTME: Booklist mutation operations: create, rename, delete, add/remove books, update progress.
# ABOUTME: Enforces single-owner checks and hands changed books to the propagator.

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from booktracker.core.propagation import PropagationResult, propagate_book_update
from booktracker.core.validation import (
    generate_booklist_id,
    require_valid,
    validate_tags,
)
from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.db.mapping import Booklist
from booktracker.errors import (
    BooklistNotFoundError,
    BookNotFoundError,
    NoSearchResultError,
    StaleBooklistError,
    UnauthorizedError,
)
from booktracker.metadata.provider import CatalogLookup
from booktracker.metadata.types import Book, BookUpdate

logger = logging.getLogger(__name__)

_ID_ATTEMPTS = 5


@dataclass
class BookUpdateResult:
    """The updated canonical book and what propagating it touched."""

    book: Book
    propagation: PropagationResult


class BooklistService:
    """Operations on booklists and the books embedded in them.

    Stores and the catalog lookup are passed in explicitly; the service holds
    no other state, so one instance per request or per process both work.
    """

    def __init__(
        self,
        booklists: BooklistStore,
        books: BookCatalog,
        lookup: CatalogLookup | None = None,
    ) -> None:
        self._booklists = booklists
        self._books = books
        self._lookup = lookup

    # --- Reads ---

    def get_booklist(self, booklist_id: str) -> Booklist:
        """Load a booklist by id.

        Raises:
            BooklistNotFoundError: If the id does not resolve.
        """
        booklist = self._booklists.get(booklist_id)
        if booklist is None:
            raise BooklistNotFoundError(f"Could not find booklist with id {booklist_id}")
        return booklist

    def list_booklists(self, customer_id: str) -> list[Booklist]:
        """Return the booklists owned by ``customer_id``, oldest first."""
        return self._booklists.list_for_customer(customer_id)

    def get_book(self, asin: str) -> Book:
        """Load a canonical book by asin.

        Raises:
            BookNotFoundError: If the catalog does not hold it.
        """
        book = self._books.get(asin)
        if book is None:
            raise BookNotFoundError(f"Could not find book with asin {asin}")
        return book

    # --- Booklist lifecycle ---

    def create_booklist(
        self, name: str, customer_id: str, tags: Iterable[str] | None = None
    ) -> Booklist:
        """Create an empty booklist owned by ``customer_id``.

        Raises:
            InvalidAttributeError: If the name, owner id, or a tag is invalid.
        """
        logger.info("Creating booklist %r for %s", name, customer_id)
        require_valid(name, "name")
        require_valid(customer_id, "customer ID")
        booklist_tags = validate_tags(tags)

        for _ in range(_ID_ATTEMPTS):
            booklist_id = generate_booklist_id()
            if self._booklists.exists(booklist_id):
                continue
            booklist = Booklist(
                id=booklist_id,
                name=name,
                customer_id=customer_id,
                tags=booklist_tags,
            )
            try:
                return self._booklists.save(booklist)
            except StaleBooklistError:
                logger.debug("Booklist id %s was taken concurrently, retrying", booklist_id)
        raise StaleBooklistError(
            f"Could not allocate a unique booklist id in {_ID_ATTEMPTS} tries"
        )

    def rename_booklist(self, booklist_id: str, customer_id: str, name: str) -> Booklist:
        """Rename a booklist. The owner never changes.

        Raises:
            BooklistNotFoundError: If the id does not resolve.
            UnauthorizedError: If ``customer_id`` does not own the booklist.
            InvalidAttributeError: If the new name is invalid.
        """
        logger.info("Renaming booklist %s to %r", booklist_id, name)
        booklist = self._load_owned(booklist_id, customer_id)
        require_valid(name, "name")
        return self._booklists.save(booklist.renamed(name))

    def delete_booklist(self, booklist_id: str, customer_id: str) -> Booklist:
        """Hard-delete a booklist and return it as it was before deletion.

        Raises:
            BooklistNotFoundError: If the id does not resolve.
            UnauthorizedError: If ``customer_id`` does not own the booklist.
        """
        logger.info("Deleting booklist %s", booklist_id)
        booklist = self._load_owned(booklist_id, customer_id)
        self._booklists.delete(booklist)
        return booklist

    # --- Embedded books ---

    def add_book(self, booklist_id: str, customer_id: str, identifier: str) -> Booklist:
        """Append the book named by ``identifier`` to the end of a booklist.

        ``identifier`` is an asin already in the catalog, or a free-text search
        term resolved through the catalog lookup. The same book may be added
        more than once.

        Raises:
            BooklistNotFoundError: If the booklist id does not resolve.
            UnauthorizedError: If ``customer_id`` does not own the booklist.
            NoSearchResultError: If the identifier cannot be resolved to a book.
        """
        logger.info("Adding %r to booklist %s", identifier, booklist_id)
        booklist = self._load_owned(booklist_id, customer_id)
        book = self.resolve_book(identifier)
        return self._booklists.save(booklist.with_book(book))

    def remove_book(self, booklist_id: str, customer_id: str, asin: str) -> Booklist:
        """Remove every embedded copy of ``asin`` from a booklist.

        Raises:
            BooklistNotFoundError: If the booklist id does not resolve.
            UnauthorizedError: If ``customer_id`` does not own the booklist.
            BookNotFoundError: If the booklist does not contain ``asin``.
        """
        logger.info("Removing %s from booklist %s", asin, booklist_id)
        booklist = self._load_owned(booklist_id, customer_id)
        if asin not in booklist.asins:
            raise BookNotFoundError(f"Booklist {booklist_id} does not contain book {asin}")
        return self._booklists.save(booklist.without_asin(asin))

    def update_book(
        self,
        asin: str,
        customer_id: str,
        update: BookUpdate,
        *,
        replace_all: bool = True,
    ) -> BookUpdateResult:
        """Apply a partial progress update to a book and refresh the owner's booklists.

        Fields left as None on ``update`` are not touched. The canonical book
        is saved first, then every booklist owned by ``customer_id`` holding a
        stale copy is rewritten before this returns.

        Raises:
            InvalidAttributeError: If ``customer_id`` is invalid.
            BookNotFoundError: If ``asin`` is not in the catalog.
        """
        logger.info("Updating book %s for %s: %s", asin, customer_id, update.changes())
        require_valid(customer_id, "customer ID")
        original = self.get_book(asin)
        updated = update.apply_to(original)
        if not original.same_values(updated):
            self._books.save(updated)

        propagation = propagate_book_update(
            self._booklists,
            original,
            updated,
            customer_id=customer_id,
            replace_all=replace_all,
        )
        return BookUpdateResult(book=updated, propagation=propagation)

    def resolve_book(self, identifier: str) -> Book:
        """Turn an asin or search term into a canonical Book, cataloging new finds.

        Raises:
            NoSearchResultError: If the identifier is blank, or the lookup
                finds nothing.
        """
        term = (identifier or "").strip()
        if not term:
            raise NoSearchResultError("A book asin or search term is required")

        existing = self._books.get(term)
        if existing is not None:
            return existing

        if self._lookup is None:
            raise NoSearchResultError(f"No book found for {term!r}")
        results = self._lookup.search(term)
        if not results:
            raise NoSearchResultError(f"No {self._lookup.name} results for {term!r}")

        found = results[0]
        stored = self._books.get(found.asin)
        if stored is not None:
            logger.debug("Search %r resolved to cataloged book %s", term, found.asin)
            return stored

        logger.info(
            "Cataloging new book %s (%s) from %s", found.asin, found.title, self._lookup.name
        )
        return self._books.save(found)

    def _load_owned(self, booklist_id: str, customer_id: str) -> Booklist:
        booklist = self.get_booklist(booklist_id)
        if not booklist.is_owned_by(customer_id):
            raise UnauthorizedError("You must own a booklist to modify it")
        return booklist
