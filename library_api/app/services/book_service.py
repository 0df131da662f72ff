"""
Business logic for books.

``BookService`` orchestrates one repository round trip per operation
(two for create and update, which check ISBN uniqueness first) and
turns "missing" and "duplicate" conditions into ``BookNotFoundError``
and ``DuplicateIsbnError``.  Payloads are expected to have passed
``app.validation`` already.

Timestamps are assigned here rather than by the database: creation
sets ``created_at`` and ``updated_at`` to the same instant, every
update moves ``updated_at`` strictly forward.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from ..core.exceptions import BookNotFoundError, DuplicateIsbnError
from ..models.book import Book
from ..repositories.book_repository import BookRepository
from ..schemas.book import BookRequest


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookService:
    """Service for managing the book catalogue.

    Parameters
    ----------
    repository : BookRepository
        Storage collaborator.
    clock : Optional[Callable[[], datetime]]
        Returns the current time.  Defaults to timezone-aware UTC now.
    """

    DELETED_MESSAGE = "Book deleted successfully"

    def __init__(
        self,
        repository: BookRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.repository = repository
        self.clock = clock or utc_now

    def list_all(self) -> List[Book]:
        return self.repository.find_all()

    def get_by_id(self, book_id: int) -> Book:
        """Return the book with ``book_id`` or raise ``BookNotFoundError``."""
        book = self.repository.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def list_available(self) -> List[Book]:
        return self.repository.find_by_available(True)

    def list_by_author(self, author: str) -> List[Book]:
        """Books whose author matches ``author`` exactly, ignoring case."""
        return self.repository.find_by_author_ignore_case(author)

    def create(self, payload: BookRequest) -> Book:
        """Store a new book and return it with its id and timestamps.

        New books are always available.  Raises ``DuplicateIsbnError``
        if the ISBN is already taken, either by the upfront check or by
        the database constraint when a concurrent create wins the race.
        """
        if self.repository.exists_by_isbn(payload.isbn):
            logger.warning("Refused to create book: ISBN %s already exists", payload.isbn)
            raise DuplicateIsbnError(payload.isbn)
        now = self.clock()
        book = Book(
            title=payload.title,
            author=payload.author,
            isbn=payload.isbn,
            publication_year=payload.publication_year,
            available=True,
            created_at=now,
            updated_at=now,
        )
        created = self.repository.save(book)
        logger.info("Created book %s (ISBN %s)", created.id, created.isbn)
        return created

    def update(self, book_id: int, payload: BookRequest) -> Book:
        """Replace title, author, ISBN and publication year of a book.

        ``id``, ``available`` and ``created_at`` are left untouched.
        Keeping the book's own ISBN is allowed; switching to an ISBN that
        belongs to another book raises ``DuplicateIsbnError``.
        """
        book = self.get_by_id(book_id)
        if book.isbn != payload.isbn and self.repository.exists_by_isbn(payload.isbn):
            logger.warning(
                "Refused to update book %s: ISBN %s already exists", book_id, payload.isbn
            )
            raise DuplicateIsbnError(payload.isbn)

        book.title = payload.title
        book.author = payload.author
        book.isbn = payload.isbn
        book.publication_year = payload.publication_year
        book.updated_at = self._next_update_time(book.updated_at)
        updated = self.repository.save(book)
        logger.info("Updated book %s", book_id)
        return updated

    def delete(self, book_id: int) -> str:
        """Delete a book by id.

        Raises ``BookNotFoundError`` if no such book exists.
        """
        if not self.repository.delete_by_id(book_id):
            raise BookNotFoundError(book_id)
        logger.info("Deleted book %s", book_id)
        return self.DELETED_MESSAGE

    def _next_update_time(self, previous: Optional[datetime]) -> datetime:
        now = self.clock()
        if previous is not None and now <= previous:
            # Clock did not advance (coarse resolution or skew).
            now = previous + timedelta(microseconds=1)
        return now
