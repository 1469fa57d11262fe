# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts search docs and edition records into catalog Book values.

from typing import Any

from booktracker.metadata.types import Book

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"


def build_cover_url(
    *, cover_id: int | None = None, isbn: str | None = None, size: str = "M"
) -> str | None:
    """Build an Open Library cover image URL from a cover id or an ISBN.

    Args:
        cover_id: Numeric cover id, preferred when present.
        isbn: Fallback ISBN lookup key.
        size: "S" (small), "M" (medium), or "L" (large).
    """
    if cover_id:
        return f"{_COVERS_BASE_URL}/id/{cover_id}-{size}.jpg"
    if isbn:
        return f"{_COVERS_BASE_URL}/isbn/{isbn}-{size}.jpg"
    return None


def _first(values: Any) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return None


def _pick_isbn(isbns: list[str]) -> str | None:
    """Prefer an ISBN-13 from a mixed list of ISBN-10 and ISBN-13 values."""
    for isbn in isbns:
        if len(isbn) == 13:
            return isbn
    return isbns[0] if isbns else None


def _work_id(key: str | None) -> str | None:
    # "/works/OL45883W" -> "OL45883W"
    if not key:
        return None
    return key.rsplit("/", 1)[-1]


def parse_search_doc(doc: dict[str, Any]) -> Book | None:
    """Convert one Search API doc into a Book.

    The asin is the best ISBN on the doc, falling back to the Open Library
    work id. Docs with neither cannot be stored and yield None.
    """
    isbn = _pick_isbn(doc.get("isbn") or [])
    asin = isbn or _work_id(doc.get("key"))
    if not asin:
        return None

    return Book(
        asin=asin,
        title=doc.get("title"),
        author=_first(doc.get("author_name")),
        genre=_first(doc.get("subject")),
        thumbnail=build_cover_url(cover_id=doc.get("cover_i"), isbn=isbn),
        page_count=doc.get("number_of_pages_median"),
    )


def parse_search_results(data: dict[str, Any]) -> list[Book]:
    """Parse a Search API response into Books, skipping docs without an identifier."""
    books = []
    for doc in data.get("docs", []):
        book = parse_search_doc(doc)
        if book is not None:
            books.append(book)
    return books


def parse_isbn_response(data: dict[str, Any], isbn: str) -> Book:
    """Parse an ISBN endpoint (edition) response into a Book.

    Edition records only carry author keys; the author name is resolved
    separately through the authors endpoint.
    """
    found = _pick_isbn([*data.get("isbn_13", []), *data.get("isbn_10", [])]) or isbn
    return Book(
        asin=found,
        title=data.get("title"),
        genre=_first(data.get("subjects")),
        thumbnail=build_cover_url(cover_id=_first(data.get("covers")), isbn=found),
        page_count=data.get("number_of_pages"),
    )


def parse_author_key(data: dict[str, Any]) -> str | None:
    """Return the first author key ("/authors/OL..A") of an edition record."""
    entry = _first(data.get("authors"))
    if isinstance(entry, dict):
        return entry.get("key") or None
    return None


def parse_author_name(data: dict[str, Any]) -> str | None:
    """Extract the author name from an Author endpoint response."""
    return data.get("name") or data.get("personal_name")
