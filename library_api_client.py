"""Library Book API client.

This module defines a small client wrapper around the REST API served
by ``library_api``.  It uses the ``requests`` library internally and
exposes one method per endpoint:

* :meth:`LibraryAPI.list_books` – return every book.
* :meth:`LibraryAPI.get_book` – fetch a single book by its identifier.
* :meth:`LibraryAPI.search_by_author` – books by author, ignoring case.
* :meth:`LibraryAPI.list_available` – books currently available.
* :meth:`LibraryAPI.create_book` – create a book.
* :meth:`LibraryAPI.update_book` – replace a book's fields.
* :meth:`LibraryAPI.delete_book` – delete a book.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code``, ``message`` and ``errors`` (the field
map sent with validation failures, otherwise ``None``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class LibraryAPI:
    """Client for interacting with the Library Book API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including any prefix, e.g.
                ``http://localhost:8000`` or ``https://example.com/api/v1``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/books``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module
            docstring.  ``data`` is ``None`` for empty responses.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": None}

        if response.status_code >= 400:
            return None, self._error_from_response(response)
        if response.content:
            return response.json(), None
        return None, None

    @staticmethod
    def _error_from_response(response: Any) -> Error:
        message = ""
        errors = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail") or ""
            errors = body.get("errors")
        if not message:
            message = response.text or f"HTTP {response.status_code}"
        logger.error("API request failed (%s): %s", response.status_code, message)
        return {"status_code": response.status_code, "message": message, "errors": errors}

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/books")
        return (data or [], error)

    def get_book(self, book_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/books/{book_id}")

    def search_by_author(self, author: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Books whose author equals ``author`` ignoring case."""
        data, error = self._request("GET", "/books/search", params={"author": author})
        return (data or [], error)

    def list_available(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/books/available")
        return (data or [], error)

    def create_book(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a book.

        Args:
            payload: ``title``, ``author``, ``isbn`` and ``publicationYear``.
        Returns:
            A tuple ``(book, error)``.
        """
        return self._request("POST", "/books", json_body=payload)

    def update_book(
        self, book_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/books/{book_id}", json_body=payload)

    def delete_book(self, book_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete a book.

        Returns:
            A tuple ``(deleted, error)``.
        """
        _, error = self._request("DELETE", f"/books/{book_id}")
        return error is None, error
