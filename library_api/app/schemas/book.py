"""
Pydantic models for book data.

``BookRequest`` is the inbound create/update payload, ``BookResponse``
the outward representation of a stored record and ``ErrorResponse``
the body of every failed request.  Field names are snake_case in
Python and camelCase on the wire (``publicationYear``, ``createdAt``,
``updatedAt``).

Every ``BookRequest`` field is optional at the parsing level.  The
field rules live in ``app.validation`` so that a single response can
report all violations at once instead of the first one only.

``publicationYear`` must be a JSON integer; strings such as ``"2021"``
and floats such as ``2021.0`` are rejected rather than coerced.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, StrictInt

from ..models.book import Book


class BookRequest(BaseModel):
    """Schema for creating or replacing a book.

    ``id``, ``available`` and the timestamps are controlled by the
    server; if a client sends them they are ignored.
    """

    title: Optional[str] = Field(None, examples=["SQL in Action"])
    author: Optional[str] = Field(None, examples=["Craig Walls"])
    isbn: Optional[str] = Field(None, examples=["9781617298546"])
    publication_year: Optional[StrictInt] = Field(
        None, alias="publicationYear", examples=[2021]
    )

    model_config = {
        "populate_by_name": True,
    }


class BookResponse(BaseModel):
    """Schema for reading a book from the API."""

    id: int
    title: str
    author: str
    isbn: str
    publication_year: int = Field(..., alias="publicationYear")
    available: bool
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }


class ErrorResponse(BaseModel):
    """Body returned for every failed request.

    ``errors`` maps field names to messages and is only present for
    validation failures.
    """

    status: int
    message: str
    errors: Optional[Dict[str, str]] = None
    timestamp: datetime


def to_book_response(book: Book) -> BookResponse:
    """Convert a stored record to its outward representation."""
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        publication_year=book.publication_year,
        available=book.available,
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


def to_book_responses(books: Iterable[Book]) -> List[BookResponse]:
    return [to_book_response(book) for book in books]
