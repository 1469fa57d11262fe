# ABOUTME: SQL DDL statements for the Booktracker database schema.
# ABOUTME: Defines the canonical books table, the booklists table, and forward migrations.

SCHEMA_V1 = """
-- Canonical book catalog, keyed by asin
CREATE TABLE books (
    asin              TEXT PRIMARY KEY,
    title             TEXT,
    author            TEXT,
    genre             TEXT,
    thumbnail         TEXT,
    rating            INTEGER,
    currently_reading INTEGER,
    percent_complete  INTEGER,
    page_count        INTEGER,
    date_added        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Booklists embed full JSON copies of their books rather than referencing rows
CREATE TABLE booklists (
    seq           INTEGER PRIMARY KEY AUTOINCREMENT,
    id            TEXT NOT NULL UNIQUE,
    name          TEXT NOT NULL,
    customer_id   TEXT NOT NULL,
    tags          TEXT NOT NULL DEFAULT '[]',
    books         TEXT NOT NULL DEFAULT '[]',
    book_count    INTEGER NOT NULL DEFAULT 0,
    date_added    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX idx_booklists_customer ON booklists(customer_id);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# V2: optimistic concurrency token for booklist writes.
MIGRATION_V2 = """
ALTER TABLE booklists ADD COLUMN version INTEGER NOT NULL DEFAULT 1;

CREATE INDEX idx_books_currently_reading ON books(currently_reading)
    WHERE currently_reading = 1;

INSERT INTO schema_version (version) VALUES (2);
"""

MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]

LATEST_VERSION = 2
