"""
Stored book record.

``Book`` is what the repository reads and writes.  It is kept apart
from the pydantic schemas so the wire representation can change
without touching persistence.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Book:
    """One row of the ``books`` table.

    ``id`` stays ``None`` until the repository has inserted the record.
    """

    title: str
    author: str
    isbn: str
    publication_year: int
    available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None
