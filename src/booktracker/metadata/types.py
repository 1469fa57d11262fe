# ABOUTME: Core book data structures: the canonical Book value and partial BookUpdate requests.
# ABOUTME: Book equality is the (asin, title, author) identity used to locate embedded copies.

from dataclasses import astuple, dataclass, field, replace
from typing import Any

from booktracker.errors import InvalidAttributeError


@dataclass(frozen=True)
class Book:
    """A book as stored in the catalog or embedded in a booklist.

    Two Book values are equal when they share asin, title, and author, even if
    their reading progress differs. That identity is how a stale embedded copy
    is recognised as "the same book" as its canonical record. Use
    ``same_values`` when every field has to agree.
    """

    asin: str
    title: str | None = None
    author: str | None = None
    genre: str | None = field(default=None, compare=False)
    thumbnail: str | None = field(default=None, compare=False)
    rating: int | None = field(default=None, compare=False)
    currently_reading: bool | None = field(default=None, compare=False)
    percent_complete: int | None = field(default=None, compare=False)
    page_count: int | None = field(default=None, compare=False)

    @property
    def identity(self) -> tuple[str, str | None, str | None]:
        return (self.asin, self.title, self.author)

    def same_values(self, other: "Book") -> bool:
        """Whether every field, not just the identity, matches ``other``."""
        return astuple(self) == astuple(other)


# Fields a progress update may touch.
UPDATABLE_FIELDS = ("rating", "currently_reading", "percent_complete")


@dataclass(frozen=True)
class BookUpdate:
    """A partial change to a book's reading progress.

    ``None`` means "not provided": the field is left as stored. A concrete
    falsy value such as ``0`` or ``False`` is a real change and is applied.
    """

    rating: int | None = None
    currently_reading: bool | None = None
    percent_complete: int | None = None

    def __post_init__(self) -> None:
        if self.rating is not None and self.rating < 0:
            raise InvalidAttributeError(f"rating must not be negative, got {self.rating}")
        if self.percent_complete is not None and not 0 <= self.percent_complete <= 100:
            msg = f"percent_complete must be between 0 and 100, got {self.percent_complete}"
            raise InvalidAttributeError(msg)

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        provided = {}
        for name in UPDATABLE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                provided[name] = value
        return provided

    @property
    def is_empty(self) -> bool:
        return not self.changes()

    def apply_to(self, book: Book) -> Book:
        """Build a fresh copy of ``book`` with the provided fields overwritten."""
        return replace(book, **self.changes())
