# ABOUTME: Keeps embedded book copies inside booklists in step with their canonical record.
# ABOUTME: Scans the booklists in scope and rewrites stale entries in place after a book changes.

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from booktracker.db.booklists import BooklistStore
from booktracker.db.mapping import Booklist
from booktracker.errors import BooklistNotFoundError, StaleBooklistError
from booktracker.metadata.types import Book

logger = logging.getLogger(__name__)

# Attempts per booklist when a concurrent writer bumps its version mid-rewrite.
_MAX_ATTEMPTS = 3


@dataclass
class PropagationResult:
    """Summary of one propagation run."""

    scanned: int = 0
    updated_booklists: list[str] = field(default_factory=list)
    replaced_entries: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.updated_booklists)


def replace_embedded(
    books: Sequence[Book],
    original: Book,
    updated: Book,
    *,
    replace_all: bool = True,
) -> tuple[tuple[Book, ...], int]:
    """Replace stale copies of ``original`` with ``updated``, keeping positions.

    An entry is stale when it has the original's (asin, title, author)
    identity but does not already carry exactly the updated values. With
    ``replace_all=False`` only the first stale entry is rewritten.

    Returns:
        The new books tuple and the number of entries replaced.
    """
    replaced = 0
    result: list[Book] = []
    for entry in books:
        stale = entry.identity == original.identity and not entry.same_values(updated)
        if stale and (replace_all or replaced == 0):
            result.append(updated)
            replaced += 1
        else:
            result.append(entry)
    return tuple(result), replaced


def propagate_book_update(
    store: BooklistStore,
    original: Book,
    updated: Book,
    *,
    customer_id: str | None = None,
    replace_all: bool = True,
) -> PropagationResult:
    """Rewrite every booklist in scope that embeds a stale copy of ``original``.

    Scope is the booklists owned by ``customer_id``, or every booklist when
    it is None. A booklist is saved only when at least one entry changed, so
    running the same propagation twice writes nothing the second time.
    ``book_count`` never changes: entries are replaced, never added or removed.

    Args:
        store: Booklist store to scan and save through.
        original: The book as it was before the update.
        updated: The book as it is now.
        customer_id: Owner whose booklists are in scope; None for all owners.
        replace_all: Rewrite every stale occurrence in a list (default), or
            only the first one.
    """
    if customer_id is None:
        booklists = store.scan()
    else:
        booklists = store.list_for_customer(customer_id)

    result = PropagationResult(scanned=len(booklists))
    for booklist in booklists:
        replaced = _rewrite(store, booklist, original, updated, replace_all=replace_all)
        if replaced:
            result.updated_booklists.append(booklist.id)
            result.replaced_entries += replaced

    logger.info(
        "Propagated %s to %d of %d booklist(s) (%d entr%s replaced)",
        updated.asin,
        len(result.updated_booklists),
        result.scanned,
        result.replaced_entries,
        "y" if result.replaced_entries == 1 else "ies",
    )
    return result


def _rewrite(
    store: BooklistStore,
    booklist: Booklist,
    original: Book,
    updated: Book,
    *,
    replace_all: bool,
) -> int:
    """Replace stale entries in one booklist and save it, reloading on a version clash.

    A booklist deleted by another writer before it could be saved is skipped.
    """
    current: Booklist | None = booklist
    attempt = 1
    while current is not None:
        books, replaced = replace_embedded(
            current.books, original, updated, replace_all=replace_all
        )
        if not replaced:
            return 0
        try:
            store.save(current.with_books(books))
        except BooklistNotFoundError:
            break
        except StaleBooklistError:
            if attempt == _MAX_ATTEMPTS:
                raise
            logger.warning(
                "Booklist %s changed during propagation, reloading (attempt %d/%d)",
                booklist.id,
                attempt,
                _MAX_ATTEMPTS,
            )
            attempt += 1
            current = store.get(booklist.id)
            continue
        return replaced

    logger.debug("Booklist %s vanished during propagation", booklist.id)
    return 0
