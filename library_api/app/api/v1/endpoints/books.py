"""
Book endpoints for API v1.

These routes expose the CRUD surface of the catalogue.  Payloads are
checked by ``ensure_valid_book_request`` before the service is called;
failures raise the error kinds from ``core.exceptions`` which the
handlers in ``core.error_handlers`` turn into responses.

``/search`` and ``/available`` are declared before ``/{book_id}`` so
they are not captured by the id route.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from library_api.app.api.deps import get_book_service
from library_api.app.schemas.book import (
    BookRequest,
    BookResponse,
    ErrorResponse,
    to_book_response,
    to_book_responses,
)
from library_api.app.services.book_service import BookService
from library_api.app.validation import ensure_valid_book_request


router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}


@router.get("", response_model=List[BookResponse])
def list_books(service: BookService = Depends(get_book_service)) -> List[BookResponse]:
    """Return every book in storage order."""
    return to_book_responses(service.list_all())


@router.get("/search", response_model=List[BookResponse], responses=BAD_REQUEST)
def search_books_by_author(
    author: str = Query(..., description="Author name, matched exactly but ignoring case"),
    service: BookService = Depends(get_book_service),
) -> List[BookResponse]:
    """Find books by author.

    ``CRAIG WALLS`` matches ``Craig Walls`` but ``Walls`` does not.  An
    empty list is returned when nothing matches.
    """
    return to_book_responses(service.list_by_author(author))


@router.get("/available", response_model=List[BookResponse])
def list_available_books(service: BookService = Depends(get_book_service)) -> List[BookResponse]:
    return to_book_responses(service.list_available())


@router.get("/{book_id}", response_model=BookResponse, responses=NOT_FOUND)
def get_book(book_id: int, service: BookService = Depends(get_book_service)) -> BookResponse:
    """Retrieve a single book by its ID.  Returns 404 if it does not exist."""
    return to_book_response(service.get_by_id(book_id))


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **CONFLICT},
)
def create_book(
    book_in: BookRequest,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Create a book.

    The new book is available and gets its id and timestamps from the
    server.  Returns 400 with every failing field when the payload is
    invalid and 409 when the ISBN is already used.
    """
    ensure_valid_book_request(book_in)
    return to_book_response(service.create(book_in))


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={**NOT_FOUND, **BAD_REQUEST, **CONFLICT},
)
def update_book(
    book_id: int,
    book_in: BookRequest,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Replace title, author, ISBN and publication year of a book."""
    ensure_valid_book_request(book_in)
    return to_book_response(service.update(book_id, book_in))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_book(book_id: int, service: BookService = Depends(get_book_service)) -> None:
    """Delete a book.  Returns 404 if it does not exist."""
    service.delete(book_id)
    return None
