# ABOUTME: SQLite connection management for the Booktracker database.
# ABOUTME: Opens or creates the database, applies schema and migrations, and sets pragmas.

import logging
import sqlite3
from pathlib import Path

from booktracker.db.schema import LATEST_VERSION, MIGRATIONS, SCHEMA_V1
from booktracker.errors import SchemaVersionError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".booktracker" / "booktracker.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT MAX(version) FROM schema_version")
    row = cursor.fetchone()
    return row[0] or 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply every migration newer than the stored schema version, in order."""
    current = get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            logger.info("Migrating booktracker schema %d -> %d", current, version)
            conn.executescript(sql)
            current = version


def open_database(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the Booktracker database.

    Creates parent directories as needed, applies the schema on first use and
    any pending migrations afterwards. Rows come back as sqlite3.Row.

    Args:
        path: Path to the database file. Defaults to ~/.booktracker/booktracker.db.
            The special value ``:memory:`` opens a throwaway in-memory database.

    Raises:
        SchemaVersionError: If the database schema is newer than this release.
    """
    db_path = path or DEFAULT_DB_PATH
    if str(db_path) != ":memory:":
        db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        conn.executescript(SCHEMA_V1)

    version = get_schema_version(conn)
    if version > LATEST_VERSION:
        conn.close()
        raise SchemaVersionError(
            f"Database {db_path} uses schema version {version}; "
            f"this Booktracker supports up to {LATEST_VERSION}"
        )

    _apply_migrations(conn)

    return conn
