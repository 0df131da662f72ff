"""
Translation of error kinds into HTTP responses.

``register_exception_handlers`` installs one handler per kind so that
handlers and services can simply raise:

* ``BookValidationError`` and request parsing errors -> 400 with a
  field to message map
* ``BookNotFoundError`` -> 404
* ``DuplicateIsbnError`` -> 409
* anything else -> 500 with a generic message

Every body is an ``ErrorResponse``.  Unexpected failures are logged
with their stack trace but nothing about them is sent to the client.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import BookError, BookValidationError
from ..schemas.book import ErrorResponse


logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(
    status_code: int, message: str, errors: Optional[Dict[str, str]] = None
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        message=message,
        errors=errors,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def request_errors_to_fields(exc: RequestValidationError) -> Dict[str, str]:
    """Flatten framework parsing errors into a field to message map.

    The location prefix (``body``, ``path``, ``query``) is dropped so
    the keys match the wire field names.  Only the first message per
    field is kept.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "body")
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


async def handle_book_validation_error(request: Request, exc: BookValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.errors)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Validation failed", request_errors_to_fields(exc)
    )


async def handle_book_error(request: Request, exc: BookError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error translators to ``app``.

    Starlette resolves handlers along the exception's MRO, so
    ``BookValidationError`` reaches its own handler rather than the
    ``BookError`` one.
    """
    app.add_exception_handler(BookValidationError, handle_book_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(BookError, handle_book_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
