"""
Persistence records.

Records are plain dataclasses; the repository maps them to and from
SQLite rows.
"""

from .book import Book  # noqa: F401
