# ABOUTME: Unit tests for BooklistService mutations and book progress updates.
# ABOUTME: Covers validation, ownership, add/remove semantics, catalog lookups, and propagation.

import pytest

from booktracker.core.booklists import BooklistService
from booktracker.db.booklists import BooklistStore
from booktracker.db.books import BookCatalog
from booktracker.errors import (
    BooklistNotFoundError,
    BookNotFoundError,
    InvalidAttributeError,
    NoSearchResultError,
    UnauthorizedError,
)
from booktracker.metadata.types import Book, BookUpdate
from tests.fixtures.fakes import FakeLookup


class TestCreateBooklist:
    """Tests for creating booklists."""

    def test_creates_empty_owned_list(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Sci-Fi Favorites", "u1", tags=["space"])
        assert booklist.name == "Sci-Fi Favorites"
        assert booklist.customer_id == "u1"
        assert booklist.tags == frozenset({"space"})
        assert booklist.books == ()
        assert booklist.book_count == 0
        assert booklist.id

    def test_persisted(self, service: BooklistService) -> None:
        created = service.create_booklist("Favorites", "u1")
        assert service.get_booklist(created.id).name == "Favorites"

    def test_ids_are_unique(self, service: BooklistService) -> None:
        ids = {service.create_booklist(f"List {n}", "u1").id for n in range(10)}
        assert len(ids) == 10

    def test_no_tags_is_empty_set(self, service: BooklistService) -> None:
        assert service.create_booklist("Favorites", "u1").tags == frozenset()

    @pytest.mark.parametrize("name", ["", "   ", "bad\x00name", 'say "hi"'])
    def test_invalid_name_rejected(self, service: BooklistService, name: str) -> None:
        with pytest.raises(InvalidAttributeError):
            service.create_booklist(name, "u1")

    def test_invalid_customer_rejected(self, service: BooklistService) -> None:
        with pytest.raises(InvalidAttributeError, match="customer ID"):
            service.create_booklist("Favorites", "")

    def test_invalid_tag_rejected(self, service: BooklistService) -> None:
        with pytest.raises(InvalidAttributeError, match="tag"):
            service.create_booklist("Favorites", "u1", tags=["it's"])

    def test_nothing_saved_on_invalid_input(self, service: BooklistService) -> None:
        with pytest.raises(InvalidAttributeError):
            service.create_booklist("", "u1")
        assert service.list_booklists("u1") == []


class TestRenameAndDelete:
    """Tests for renaming and deleting booklists."""

    def test_rename_keeps_owner_and_books(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        booklist = service.create_booklist("Old", "u1")
        book_catalog.save(dune)
        service.add_book(booklist.id, "u1", dune.asin)

        renamed = service.rename_booklist(booklist.id, "u1", "New")

        assert renamed.name == "New"
        assert renamed.customer_id == "u1"
        assert renamed.asins == [dune.asin]

    def test_rename_by_non_owner_is_unauthorized(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Mine", "u1")
        with pytest.raises(UnauthorizedError):
            service.rename_booklist(booklist.id, "u2", "Theirs")
        assert service.get_booklist(booklist.id).name == "Mine"

    def test_rename_invalid_name(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Mine", "u1")
        with pytest.raises(InvalidAttributeError):
            service.rename_booklist(booklist.id, "u1", "")

    def test_rename_missing_list(self, service: BooklistService) -> None:
        with pytest.raises(BooklistNotFoundError):
            service.rename_booklist("nope", "u1", "Name")

    def test_delete_returns_prior_value(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Doomed", "u1")
        deleted = service.delete_booklist(booklist.id, "u1")
        assert deleted.name == "Doomed"
        with pytest.raises(BooklistNotFoundError):
            service.get_booklist(booklist.id)

    def test_delete_by_non_owner_is_unauthorized(self, service: BooklistService) -> None:
        """A foreign owner gets Unauthorized, not NotFound."""
        booklist = service.create_booklist("Mine", "u1")
        with pytest.raises(UnauthorizedError):
            service.delete_booklist(booklist.id, "u2")
        assert service.get_booklist(booklist.id)

    def test_delete_missing_list(self, service: BooklistService) -> None:
        with pytest.raises(BooklistNotFoundError):
            service.delete_booklist("nope", "u1")


class TestAddBook:
    """Tests for adding books to booklists."""

    def test_add_to_empty_list(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        """An empty list receiving a cataloged asin holds exactly that book."""
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")

        updated = service.add_book(booklist.id, "u1", dune.asin)

        assert updated.books == (dune,)
        assert updated.books[0].same_values(dune)
        assert updated.book_count == 1

    def test_appends_to_end(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book, rose: Book
    ) -> None:
        book_catalog.save(dune)
        book_catalog.save(rose)
        booklist = service.create_booklist("Favorites", "u1")
        service.add_book(booklist.id, "u1", rose.asin)
        updated = service.add_book(booklist.id, "u1", dune.asin)
        assert updated.asins == [rose.asin, dune.asin]

    def test_duplicates_allowed(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")
        service.add_book(booklist.id, "u1", dune.asin)
        updated = service.add_book(booklist.id, "u1", dune.asin)
        assert updated.asins == [dune.asin, dune.asin]
        assert updated.book_count == 2

    def test_search_term_catalogs_first_result(
        self,
        service: BooklistService,
        fake_lookup: FakeLookup,
        book_catalog: BookCatalog,
        rose: Book,
    ) -> None:
        """A free-text term is looked up and the first hit is stored canonically."""
        fake_lookup.results["name of the rose"] = [rose, Book(asin="other")]
        booklist = service.create_booklist("Favorites", "u1")

        updated = service.add_book(booklist.id, "u1", "name of the rose")

        assert updated.asins == [rose.asin]
        stored = book_catalog.get(rose.asin)
        assert stored is not None
        assert stored.same_values(rose)
        assert book_catalog.get("other") is None

    def test_search_hit_reuses_cataloged_book(
        self,
        service: BooklistService,
        fake_lookup: FakeLookup,
        book_catalog: BookCatalog,
        dune: Book,
    ) -> None:
        """Progress on an existing canonical book is not clobbered by fresh lookup data."""
        book_catalog.save(dune)
        fake_lookup.results["dune"] = [Book(asin=dune.asin, title="Dune", author="Frank Herbert")]
        booklist = service.create_booklist("Favorites", "u1")

        updated = service.add_book(booklist.id, "u1", "dune")

        assert updated.books[0].rating == dune.rating
        assert updated.books[0].percent_complete == dune.percent_complete

    def test_exact_asin_skips_lookup(
        self,
        service: BooklistService,
        fake_lookup: FakeLookup,
        book_catalog: BookCatalog,
        dune: Book,
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")
        service.add_book(booklist.id, "u1", dune.asin)
        assert fake_lookup.searches == []

    def test_no_result(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Favorites", "u1")
        with pytest.raises(NoSearchResultError):
            service.add_book(booklist.id, "u1", "nothing matches this")
        assert service.get_booklist(booklist.id).book_count == 0

    def test_no_lookup_configured(
        self, booklist_store: BooklistStore, book_catalog: BookCatalog
    ) -> None:
        offline = BooklistService(booklist_store, book_catalog)
        booklist = offline.create_booklist("Favorites", "u1")
        with pytest.raises(NoSearchResultError):
            offline.add_book(booklist.id, "u1", "some title")

    def test_blank_identifier(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Favorites", "u1")
        with pytest.raises(NoSearchResultError):
            service.add_book(booklist.id, "u1", "  ")

    def test_missing_list(self, service: BooklistService) -> None:
        with pytest.raises(BooklistNotFoundError):
            service.add_book("nope", "u1", "anything")

    def test_non_owner_is_unauthorized(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")
        with pytest.raises(UnauthorizedError):
            service.add_book(booklist.id, "u2", dune.asin)


class TestRemoveBook:
    """Tests for removing books from booklists."""

    def test_removes_every_copy(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book, rose: Book
    ) -> None:
        book_catalog.save(dune)
        book_catalog.save(rose)
        booklist = service.create_booklist("Favorites", "u1")
        for asin in (dune.asin, rose.asin, dune.asin):
            service.add_book(booklist.id, "u1", asin)

        updated = service.remove_book(booklist.id, "u1", dune.asin)

        assert updated.asins == [rose.asin]
        assert updated.book_count == 1

    def test_removes_by_asin_regardless_of_title(
        self, service: BooklistService, booklist_store: BooklistStore, dune: Book, rose: Book
    ) -> None:
        """Copies sharing an asin go together even when their titles drifted apart."""
        retitled = Book(asin=dune.asin, title="Dune (Deluxe Edition)", author=dune.author)
        booklist = service.create_booklist("Favorites", "u1")
        stored = booklist_store.get(booklist.id)
        assert stored is not None
        booklist_store.save(stored.with_books((dune, rose, retitled)))

        updated = service.remove_book(booklist.id, "u1", dune.asin)

        assert updated.asins == [rose.asin]

    def test_absent_book(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Favorites", "u1")
        with pytest.raises(BookNotFoundError):
            service.remove_book(booklist.id, "u1", "X")

    def test_remove_leaves_catalog_alone(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")
        service.add_book(booklist.id, "u1", dune.asin)
        service.remove_book(booklist.id, "u1", dune.asin)
        assert book_catalog.get(dune.asin) is not None

    def test_non_owner_is_unauthorized(self, service: BooklistService) -> None:
        booklist = service.create_booklist("Favorites", "u1")
        with pytest.raises(UnauthorizedError):
            service.remove_book(booklist.id, "u2", "X")


class TestUpdateBook:
    """Tests for progress updates and their propagation."""

    def test_partial_update_preserves_other_fields(
        self, service: BooklistService, book_catalog: BookCatalog
    ) -> None:
        """Setting only rating leaves percent_complete as stored."""
        book_catalog.save(Book(asin="X", title="T", author="A", rating=4, percent_complete=50))

        result = service.update_book("X", "u1", BookUpdate(rating=5))

        assert result.book.rating == 5
        assert result.book.percent_complete == 50
        stored = book_catalog.get("X")
        assert stored is not None
        assert stored.same_values(result.book)

    def test_falsy_values_applied(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        result = service.update_book(
            dune.asin, "u1", BookUpdate(currently_reading=False, percent_complete=0)
        )
        assert result.book.currently_reading is False
        assert result.book.percent_complete == 0

    def test_owner_booklists_refreshed(
        self, service: BooklistService, book_catalog: BookCatalog
    ) -> None:
        """u1's list holding X at rating 3 shows rating 5 once the update returns."""
        book_catalog.save(Book(asin="X", title="T", author="A", rating=3))
        booklist = service.create_booklist("L1", "u1")
        service.add_book(booklist.id, "u1", "X")

        result = service.update_book("X", "u1", BookUpdate(rating=5))

        refreshed = service.get_booklist(booklist.id)
        assert refreshed.books[0].rating == 5
        assert refreshed.book_count == 1
        assert result.propagation.updated_booklists == [booklist.id]

    def test_other_owners_untouched(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        mine = service.create_booklist("Mine", "u1")
        theirs = service.create_booklist("Theirs", "u2")
        service.add_book(mine.id, "u1", dune.asin)
        service.add_book(theirs.id, "u2", dune.asin)

        service.update_book(dune.asin, "u1", BookUpdate(rating=1))

        assert service.get_booklist(theirs.id).books[0].rating == dune.rating

    def test_duplicate_entries_all_refreshed(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Twice", "u1")
        service.add_book(booklist.id, "u1", dune.asin)
        service.add_book(booklist.id, "u1", dune.asin)

        service.update_book(dune.asin, "u1", BookUpdate(percent_complete=90))

        books = service.get_booklist(booklist.id).books
        assert [b.percent_complete for b in books] == [90, 90]

    def test_duplicate_entries_first_only(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Twice", "u1")
        service.add_book(booklist.id, "u1", dune.asin)
        service.add_book(booklist.id, "u1", dune.asin)

        service.update_book(dune.asin, "u1", BookUpdate(percent_complete=90), replace_all=False)

        books = service.get_booklist(booklist.id).books
        assert [b.percent_complete for b in books] == [90, dune.percent_complete]

    def test_repeat_update_is_idempotent(
        self, service: BooklistService, book_catalog: BookCatalog, dune: Book
    ) -> None:
        book_catalog.save(dune)
        booklist = service.create_booklist("Favorites", "u1")
        service.add_book(booklist.id, "u1", dune.asin)

        service.update_book(dune.asin, "u1", BookUpdate(rating=5))
        version = service.get_booklist(booklist.id).version
        again = service.update_book(dune.asin, "u1", BookUpdate(rating=5))

        assert not again.propagation.changed
        assert service.get_booklist(booklist.id).version == version

    def test_missing_book(self, service: BooklistService) -> None:
        with pytest.raises(BookNotFoundError):
            service.update_book("nope", "u1", BookUpdate(rating=1))

    def test_invalid_customer(self, service: BooklistService, book_catalog: BookCatalog) -> None:
        book_catalog.save(Book(asin="X"))
        with pytest.raises(InvalidAttributeError):
            service.update_book("X", "", BookUpdate(rating=1))
