# ABOUTME: Shared pytest fixtures for Booktracker tests.
# ABOUTME: Provides a temporary database, both stores, a fake catalog lookup, and wired services.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from booktracker.core.booklists import BooklistService
from booktracker.core.search import SearchService
from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.db.connection import open_database
from booktracker.metadata.types import Book
from tests.fixtures.fakes import FakeLookup


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "booktracker.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open connection to a fresh database, closed after the test."""
    connection = open_database(db_path)
    yield connection
    connection.close()


@pytest.fixture
def booklist_store(conn: sqlite3.Connection) -> BooklistStore:
    return BooklistStore(conn)


@pytest.fixture
def book_catalog(conn: sqlite3.Connection) -> BookCatalog:
    return BookCatalog(conn)


@pytest.fixture
def fake_lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture
def service(
    booklist_store: BooklistStore, book_catalog: BookCatalog, fake_lookup: FakeLookup
) -> BooklistService:
    return BooklistService(booklist_store, book_catalog, fake_lookup)


@pytest.fixture
def search_service(booklist_store: BooklistStore, book_catalog: BookCatalog) -> SearchService:
    return SearchService(booklist_store, book_catalog)


@pytest.fixture
def dune() -> Book:
    """A cataloged-style book with some reading progress."""
    return Book(
        asin="9780441013593",
        title="Dune",
        author="Frank Herbert",
        genre="Science fiction",
        rating=3,
        currently_reading=True,
        percent_complete=40,
        page_count=604,
    )


@pytest.fixture
def rose() -> Book:
    return Book(
        asin="9780156001311",
        title="The Name of the Rose",
        author="Umberto Eco",
        genre="Mystery",
    )
