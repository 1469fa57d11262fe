# ABOUTME: Load, save, delete, and scan operations for booklists in SQLite.
# ABOUTME: Saves are conditional on the version the caller loaded, so lost updates are detected.

import logging
import sqlite3
from dataclasses import replace

from booktracker.db.filters import JSON_SET, TEXT, compile_filter
from booktracker.db.mapping import Booklist, booklist_to_row, row_to_booklist
from booktracker.errors import BooklistNotFoundError, StaleBooklistError
from booktracker.metadata.matcher import FilterExpression

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = {"name": TEXT, "tags": JSON_SET}


class BooklistStore:
    """Wraps a sqlite3 connection and provides typed access to the booklists table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, booklist_id: str) -> Booklist | None:
        """Retrieve a booklist by id, or None if it does not exist."""
        cursor = self._conn.execute("SELECT * FROM booklists WHERE id = ?", (booklist_id,))
        row = cursor.fetchone()
        return row_to_booklist(row) if row else None

    def exists(self, booklist_id: str) -> bool:
        cursor = self._conn.execute("SELECT 1 FROM booklists WHERE id = ?", (booklist_id,))
        return cursor.fetchone() is not None

    def save(self, booklist: Booklist) -> Booklist:
        """Create or update ``booklist`` and return it with its new version.

        A booklist with version 0 has never been stored and is inserted. Any
        other version must match the stored one, otherwise somebody saved the
        list since it was loaded and nothing is written.

        Raises:
            StaleBooklistError: On a version mismatch, or when inserting an id
                that already exists.
            BooklistNotFoundError: When updating a booklist that was deleted.
        """
        row = booklist_to_row(booklist)
        if booklist.version == 0:
            self._insert(row)
            new_version = 1
        else:
            self._update(row, booklist.version)
            new_version = booklist.version + 1
        self._conn.commit()
        logger.debug(
            "Saved booklist %s (version %d, %d book(s))",
            booklist.id,
            new_version,
            booklist.book_count,
        )
        return replace(booklist, version=new_version)

    def _insert(self, row: dict[str, object]) -> None:
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            self._conn.execute(
                f"INSERT INTO booklists ({columns}, version) VALUES ({placeholders}, 1)",
                list(row.values()),
            )
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed: booklists.id" in str(exc):
                raise StaleBooklistError(f"Booklist {row['id']} already exists") from exc
            raise

    def _update(self, row: dict[str, object], expected_version: int) -> None:
        assignments = ", ".join(f"{name} = ?" for name in row if name != "id")
        values = [value for name, value in row.items() if name != "id"]
        cursor = self._conn.execute(
            f"UPDATE booklists SET {assignments}, version = version + 1, "
            "date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now') "
            "WHERE id = ? AND version = ?",
            [*values, row["id"], expected_version],
        )
        if cursor.rowcount == 0:
            if not self.exists(str(row["id"])):
                raise BooklistNotFoundError(f"Could not find booklist with id {row['id']}")
            raise StaleBooklistError(
                f"Booklist {row['id']} changed since version {expected_version} was loaded"
            )

    def delete(self, booklist: Booklist) -> None:
        """Hard-delete ``booklist``.

        Raises:
            BooklistNotFoundError: If no booklist with that id is stored.
        """
        cursor = self._conn.execute("DELETE FROM booklists WHERE id = ?", (booklist.id,))
        self._conn.commit()
        if cursor.rowcount == 0:
            raise BooklistNotFoundError(f"Could not find booklist with id {booklist.id}")

    def scan(self, expression: FilterExpression | None = None) -> list[Booklist]:
        """Return every booklist matching ``expression`` (all when omitted), oldest first."""
        where, params = compile_filter(
            expression or FilterExpression(), "booklists", SEARCHABLE_COLUMNS
        )
        cursor = self._conn.execute(
            f"SELECT * FROM booklists WHERE {where} ORDER BY booklists.seq", params
        )
        return [row_to_booklist(row) for row in cursor.fetchall()]

    def list_for_customer(self, customer_id: str) -> list[Booklist]:
        """Return every booklist owned by ``customer_id``, oldest first."""
        cursor = self._conn.execute(
            "SELECT * FROM booklists WHERE customer_id = ? ORDER BY seq", (customer_id,)
        )
        return [row_to_booklist(row) for row in cursor.fetchall()]
