"""Interface layer error handling.

Domain errors are rendered as ``{"success": false, "message": ...}`` with a
status code derived from the error class. Storage and unexpected failures
never leak internal detail to the client.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from margin.domain.error import (
    ContentDeletedError,
    DomainError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)

INTERNAL_ERROR_MESSAGE = "Internal server error"
UNAVAILABLE_MESSAGE = "Service temporarily unavailable, please retry"


def status_for(error: DomainError) -> int:
    """Map a domain error to an HTTP status code."""
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ContentDeletedError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, StorageError) and error.retryable:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def client_message(error: DomainError) -> str:
    """Message safe to show to a client."""
    if isinstance(error, StorageError):
        return UNAVAILABLE_MESSAGE if error.retryable else INTERNAL_ERROR_MESSAGE
    if status_for(error) == status.HTTP_500_INTERNAL_SERVER_ERROR:
        return INTERNAL_ERROR_MESSAGE
    return str(error)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    log = logfire.error if status_code >= 500 else logfire.warn
    log(
        "Request failed",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=status_code,
    )
    return error_response(status_code, client_message(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body/query validation failures as 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logfire.warn(
        "Request validation failed", path=request.url.path, errors=len(errors)
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        f"{location}: {message}" if location else message,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
