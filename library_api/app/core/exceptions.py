"""
Error kinds raised by the validation, service and persistence layers.

Each error carries the HTTP status it maps to; the translation into a
response body happens in ``error_handlers``.
"""

from typing import Dict


class BookError(Exception):
    """Base class for book related failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BookValidationError(BookError):
    """The inbound payload violates one or more field rules."""

    status_code = 400

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__("Validation failed")
        self.errors = dict(errors)


class BookNotFoundError(BookError):
    status_code = 404

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book not found with id: {book_id}")
        self.book_id = book_id


class DuplicateIsbnError(BookError):
    """Another book already uses the ISBN."""

    status_code = 409

    def __init__(self, isbn: str) -> None:
        super().__init__("ISBN already exists")
        self.isbn = isbn
