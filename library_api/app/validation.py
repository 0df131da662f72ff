"""
Field rules for inbound book payloads.

``validate_book_request`` checks every field and returns a mapping of
field name (as it appears on the wire) to a human readable message.
``ensure_valid_book_request`` raises ``BookValidationError`` carrying
that mapping.  Both run before the service layer is called.

The upper bound of ``publicationYear`` is the calendar year at the
time of the call, so it moves forward every January.
"""

import re
from datetime import date
from typing import Dict, Optional

from .core.exceptions import BookValidationError
from .schemas.book import BookRequest


TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
MIN_PUBLICATION_YEAR = 1000

# ASCII digits only; ``\d`` would also accept other Unicode digits.
ISBN_PATTERN = re.compile(r"[0-9]{13}")


def _check_text(
    errors: Dict[str, str], field: str, label: str, value: Optional[str], max_length: int
) -> None:
    if value is None or not value.strip():
        errors[field] = f"{label} is required"
    elif len(value) > max_length:
        errors[field] = f"{label} must be less than {max_length} characters"


def validate_book_request(
    payload: BookRequest, today: Optional[date] = None
) -> Dict[str, str]:
    """Return every field violation of ``payload``.

    An empty dict means the payload is valid.  ``today`` defaults to
    the current date and only exists so callers can pin the clock.
    """
    errors: Dict[str, str] = {}
    current_year = (today or date.today()).year

    _check_text(errors, "title", "Title", payload.title, TITLE_MAX_LENGTH)
    _check_text(errors, "author", "Author", payload.author, AUTHOR_MAX_LENGTH)

    if payload.isbn is None:
        errors["isbn"] = "ISBN is required"
    elif not ISBN_PATTERN.fullmatch(payload.isbn):
        errors["isbn"] = "ISBN must be exactly 13 digits"

    year = payload.publication_year
    if year is None:
        errors["publicationYear"] = "Publication year is required"
    elif year < MIN_PUBLICATION_YEAR:
        errors["publicationYear"] = f"Publication year must be {MIN_PUBLICATION_YEAR} or later"
    elif year > current_year:
        errors["publicationYear"] = "Publication year must not exceed the current year"

    return errors


def ensure_valid_book_request(payload: BookRequest, today: Optional[date] = None) -> None:
    """Raise ``BookValidationError`` if ``payload`` breaks any field rule."""
    errors = validate_book_request(payload, today=today)
    if errors:
        raise BookValidationError(errors)
