"""
FastAPI dependencies shared by the endpoint modules.

The app factory stores the composed service on ``app.state``; handlers
receive it through ``Depends(get_book_service)``.
"""

from fastapi import Request

from ..services.book_service import BookService


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service
