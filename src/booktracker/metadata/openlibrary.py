# ABOUTME: Open Library catalog lookup used when add-book cannot resolve an identifier locally.
# ABOUTME: Free-text search goes through search.json; ISBN-shaped terms try the ISBN endpoint first.

import logging
import re
from dataclasses import replace

from booktracker.metadata.http import HttpClient, MetadataFetchError
from booktracker.metadata.openlibrary_parser import (
    parse_author_key,
    parse_author_name,
    parse_isbn_response,
    parse_search_results,
)
from booktracker.metadata.types import Book

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = 5
_SEARCH_FIELDS = "key,title,author_name,isbn,subject,cover_i,number_of_pages_median"

_ISBN_RE = re.compile(r"^(?:\d{9}[\dXx]|\d{13})$")
_ISBN_STRIP_RE = re.compile(r"[\s-]")


def looks_like_isbn(term: str) -> bool:
    """Whether ``term`` is an ISBN-10 or ISBN-13, ignoring hyphens and spaces."""
    return bool(_ISBN_RE.match(_ISBN_STRIP_RE.sub("", term)))


class OpenLibraryLookup:
    """Catalog lookup backed by the Open Library API.

    Uses a dependency-injected HttpClient so tests can serve canned JSON.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    def search(self, term: str) -> list[Book]:
        """Search for ``term``, returning candidate Books best-first.

        An ISBN-shaped term is resolved through the ISBN endpoint first and
        only falls back to free-text search if that finds nothing.
        """
        term = term.strip()
        if not term:
            return []
        if looks_like_isbn(term):
            books = self.search_by_isbn(term)
            if books:
                return books

        params = {"q": term, "limit": str(_SEARCH_LIMIT), "fields": _SEARCH_FIELDS}
        try:
            data = self._http.get(f"{_OL_BASE}/search.json", params=params)
        except MetadataFetchError as exc:
            logger.warning("Open Library search failed for %r: %s", term, exc)
            return []

        books = parse_search_results(data)
        logger.debug("Open Library search for %r returned %d book(s)", term, len(books))
        return books

    def search_by_isbn(self, isbn: str) -> list[Book]:
        """Look up a single edition by ISBN, resolving its first author's name."""
        clean = _ISBN_STRIP_RE.sub("", isbn)
        try:
            data = self._http.get(f"{_OL_BASE}/isbn/{clean}.json")
        except MetadataFetchError as exc:
            logger.warning("ISBN lookup failed for %s: %s", isbn, exc)
            return []
        if not data:
            return []

        book = parse_isbn_response(data, clean)
        author = self._resolve_author(parse_author_key(data))
        if author:
            book = replace(book, author=author)
        return [book]

    def _resolve_author(self, author_key: str | None) -> str | None:
        if not author_key:
            return None
        try:
            return parse_author_name(self._http.get(f"{_OL_BASE}{author_key}.json"))
        except MetadataFetchError:
            logger.debug("Could not resolve author %s", author_key)
            return None
