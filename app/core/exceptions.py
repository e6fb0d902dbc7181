"""
Domain error taxonomy and the FastAPI handlers that render it.

Services raise these errors; the handlers registered in main.py turn them
into JSON responses of the form {"detail": "..."}. Unexpected failures are
logged with their traceback and returned as a generic 500 so that query text
and stack traces never reach the client.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class JobBoardError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(JobBoardError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"


class AuthError(JobBoardError):
    """Bad credentials or an invalid, expired or missing token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class ForbiddenError(JobBoardError):
    """Authenticated, but not allowed to act on this resource."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFoundError(JobBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(JobBoardError):
    """Uniqueness violation (duplicate email, duplicate application)."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class ServerError(JobBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


async def job_board_error_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        detail = ServerError.default_detail
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=exc.headers,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} -> 400: {len(errors)} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ValidationError.default_detail, "errors": errors},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": ServerError.default_detail},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": ServerError.default_detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain, validation and fallback handlers on the app."""
    app.add_exception_handler(JobBoardError, job_board_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
