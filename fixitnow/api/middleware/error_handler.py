"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fixitnow.api.schemas.common import ErrorResponse
from fixitnow.config.logging import get_logger
from fixitnow.domain.exceptions.lifecycle_error import LifecycleError
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import (
    ConcurrencyConflictError,
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)

# Most specific first
_LIFECYCLE_ERRORS = (
    (ValidationError, 400, "validation_error"),
    (NotFoundError, 404, "not_found"),
    (ForbiddenActionError, 403, "forbidden"),
    (ConcurrencyConflictError, 409, "concurrency_conflict"),
    (IllegalStateError, 409, "illegal_state"),
)


def _error_response(status_code: int, message, error_type: str) -> JSONResponse:
    body = ErrorResponse(message=str(message), error_type=error_type)
    return JSONResponse(status_code=status_code, content=body.model_dump())


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(LifecycleError)
    async def lifecycle_error_handler(request: Request, exc: LifecycleError):
        for error_class, status_code, error_type in _LIFECYCLE_ERRORS:
            if isinstance(exc, error_class):
                break
        else:
            status_code, error_type = 400, "lifecycle_error"

        logger.warning(
            "Lifecycle operation rejected",
            error=str(exc),
            error_type=error_type,
            path=request.url.path,
        )
        return _error_response(status_code, str(exc), error_type)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        logger.warning("Request validation error", error=message, path=request.url.path)
        return _error_response(400, message, "validation_error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        record_error(type(exc).__name__, "database")
        logger.error("Database error", error=str(exc), path=request.url.path)
        return _error_response(500, "A database error occurred", "database_error")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, exc.detail, "http_error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        record_error(type(exc).__name__, "api")
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return _error_response(500, "An unexpected error occurred", "internal_error")
