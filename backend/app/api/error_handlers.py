"""Error Handlers: global exception handlers, the single place errors become HTTP.

Invariants:
    - AppError -> status from HTTP_STATUS_BY_KIND, body from to_response()
    - RequestValidationError -> 400 {"message", "errors": [{"field", "message"}]}
    - Exception (catch-all) -> 500 {"error": generic message}, details only in logs
    - 4xx domain errors log at warning, 5xx at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import AppError, ErrorSeverity, InternalError, ValidationError
from app.core.validation import field_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_app_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_app_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Handle all domain/infrastructure errors."""
        level = (
            logging.WARNING if exc.severity == ErrorSeverity.WARNING
            else logging.ERROR
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic request validation errors."""
        errors = field_errors(exc.errors(), strip_source=True)
        logger.warning(
            f"Validation error on {request.url.path}: "
            f"{[e.field for e in errors]}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationError(errors).to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
        )
