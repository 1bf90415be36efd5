"""Error taxonomy of the Contacts API and its JSON error envelope.

Every failure leaves the service as ``{"error": "<message>"}`` with the
status code carried by the exception.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ContactBookError(Exception):
    """Base class for errors reported to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ContactBookError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ContactBookError):
    """The email address is already used by another contact."""

    status_code = status.HTTP_400_BAD_REQUEST


class ServiceUnavailable(ContactBookError):
    """The datastore credentials were not supplied."""


class InternalError(ContactBookError):
    """Unexpected datastore failure. The cause is logged, never returned."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def contact_book_error_handler(request: Request, exc: ContactBookError):
    return error_response(exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    """Report framework-level request validation failures as ``400``."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    message = "Invalid request"
    if problems:
        message = f"{message}: {'; '.join(problems)}"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    """Log an unexpected failure and answer with a generic ``500``."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the ``{"error": ...}`` envelope on ``app``."""
    app.add_exception_handler(ContactBookError, contact_book_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
