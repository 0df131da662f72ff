"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db`` which applies migrations when the application starts.
Every function takes the database path explicitly so that the app
factory decides which file is used.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: books table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            author TEXT NOT NULL,
            isbn TEXT NOT NULL UNIQUE,
            publication_year INTEGER NOT NULL,
            available INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );
        """,
    ),
    # Migration 2: lookup indices for the derived queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_books_author_lower ON books(lower(author));
        CREATE INDEX IF NOT EXISTS idx_books_available ON books(available);
        """,
    ),
    # Migration 3: SQLite lower() only folds ASCII; author lookups use the
    # casefold() function registered per connection instead.
    (
        3,
        """
        DROP INDEX IF EXISTS idx_books_author_lower;
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    An absolute path is used as is; a relative one is resolved against
    the project root (the directory holding the ``library_api``
    package).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def get_connection(database_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  No type detection is enabled; timestamps come back as the
    ISO strings they were stored as.

    A deterministic ``casefold`` SQL function is registered so queries
    can compare text ignoring case for every script, not only ASCII.
    """
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(database_path: str) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every newer entry of
    ``MIGRATIONS``.  Returns the schema version after the run.  To add a
    migration, append it with an incremented version number.
    """
    with get_cursor(database_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
