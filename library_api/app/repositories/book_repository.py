"""
SQLite persistence for books.

``BookRepository`` offers the lookups the service needs (by id, by
ISBN, by author ignoring case, by availability), ``save`` which
inserts or updates depending on whether the record already has an id,
and ``delete_by_id``.  Each call opens its own short-lived connection.

The ``isbn`` column carries a UNIQUE constraint.  When two writers
race past the service's existence check, the database rejects the
second write and ``save`` raises ``DuplicateIsbnError``.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from ..core.db import get_connection, get_cursor
from ..core.exceptions import BookNotFoundError, DuplicateIsbnError
from ..models.book import Book


logger = logging.getLogger(__name__)

_COLUMNS = "id, title, author, isbn, publication_year, available, created_at, updated_at"

# SQLite INTEGER is a signed 64-bit value; larger ids cannot be stored.
_MIN_ID = -(2 ** 63)
_MAX_ID = 2 ** 63 - 1


def _storable_id(book_id: int) -> bool:
    return _MIN_ID <= book_id <= _MAX_ID


class BookRepository:
    """Data access for the ``books`` table."""

    def __init__(self, database_path: str) -> None:
        self.database_path = database_path

    def find_all(self) -> List[Book]:
        return self._fetch_all(f"SELECT {_COLUMNS} FROM books ORDER BY id")

    def find_by_id(self, book_id: int) -> Optional[Book]:
        if not _storable_id(book_id):
            return None
        conn = get_connection(self.database_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)
            ).fetchone()
            return self._row_to_book(row) if row else None
        finally:
            conn.close()

    def exists_by_isbn(self, isbn: str) -> bool:
        conn = get_connection(self.database_path)
        try:
            row = conn.execute("SELECT 1 FROM books WHERE isbn = ?", (isbn,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def find_by_author_ignore_case(self, author: str) -> List[Book]:
        """Return books whose author equals ``author`` ignoring case.

        This is an exact match, not a substring search.  Case folding
        covers all scripts ("Émile Zola" matches "ÉMILE ZOLA").
        """
        return self._fetch_all(
            f"SELECT {_COLUMNS} FROM books WHERE casefold(author) = casefold(?) ORDER BY id",
            (author,),
        )

    def find_by_available(self, available: bool = True) -> List[Book]:
        return self._fetch_all(
            f"SELECT {_COLUMNS} FROM books WHERE available = ? ORDER BY id",
            (1 if available else 0,),
        )

    def save(self, book: Book) -> Book:
        """Insert ``book`` when it has no id, otherwise update it by id.

        Returns the stored record.  Raises ``DuplicateIsbnError`` when
        the ISBN is already used by another row and ``BookNotFoundError``
        when updating an id that does not exist.
        """
        if book.id is not None and not _storable_id(book.id):
            raise BookNotFoundError(book.id)
        try:
            with get_cursor(self.database_path) as cursor:
                if book.id is None:
                    cursor.execute(
                        """
                        INSERT INTO books (title, author, isbn, publication_year, available, created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            book.title,
                            book.author,
                            book.isbn,
                            book.publication_year,
                            int(book.available),
                            _format_timestamp(book.created_at),
                            _format_timestamp(book.updated_at),
                        ),
                    )
                    book_id = cursor.lastrowid
                else:
                    cursor.execute(
                        """
                        UPDATE books
                        SET title = ?, author = ?, isbn = ?, publication_year = ?, available = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            book.title,
                            book.author,
                            book.isbn,
                            book.publication_year,
                            int(book.available),
                            _format_timestamp(book.updated_at),
                            book.id,
                        ),
                    )
                    if cursor.rowcount == 0:
                        raise BookNotFoundError(book.id)
                    book_id = book.id
        except sqlite3.IntegrityError as exc:
            if "UNIQUE" in str(exc) and "books.isbn" in str(exc):
                logger.warning("Rejected write of duplicate ISBN %s", book.isbn)
                raise DuplicateIsbnError(book.isbn) from exc
            raise
        stored = self.find_by_id(book_id)
        if stored is None:
            raise BookNotFoundError(book_id)
        return stored

    def delete_by_id(self, book_id: int) -> bool:
        """Delete a book by id.

        Returns ``True`` if a row was deleted, ``False`` otherwise.
        """
        if not _storable_id(book_id):
            return False
        with get_cursor(self.database_path) as cursor:
            cursor.execute("DELETE FROM books WHERE id = ?", (book_id,))
            return cursor.rowcount > 0

    def _fetch_all(self, query: str, params: tuple = ()) -> List[Book]:
        conn = get_connection(self.database_path)
        try:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_book(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> Book:
        """Convert a database row to a ``Book`` record."""
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            isbn=row["isbn"],
            publication_year=row["publication_year"],
            available=bool(row["available"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
