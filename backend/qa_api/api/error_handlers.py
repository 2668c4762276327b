"""Error Handlers — global exception handlers for the Q&A API.

Invariants:
    - Every error response body is {"error": string}
    - QAError → its own http_status; 4xx logged at WARNING, 5xx at ERROR
      with the database cause attached
    - Starlette HTTPException (unknown route, wrong method) → same envelope
    - RequestValidationError → 400
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (QAError), routing (HTTPException),
      validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the app factory short
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from qa_api.core.errors import QAError, PersistenceError

logger = logging.getLogger(__name__)

_ROUTING_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "route not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method not allowed",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_qa_error_handler(app)
    _register_http_exception_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_qa_error_handler(app: FastAPI) -> None:
    """Register Q&A domain/infrastructure error handler."""

    @app.exception_handler(QAError)
    async def qa_error_handler(request: Request, exc: QAError):
        """Handle all Q&A domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
        }
        if isinstance(exc, PersistenceError):
            extra["operation"] = exc.operation
            logger.error(
                f"{exc.public_message}: {exc.message}",
                extra=extra,
                exc_info=exc.cause,
            )
        else:
            logger.warning(f"QAError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_exception_handler(app: FastAPI) -> None:
    """Register routing error handler (404 unknown path, 405 wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        message = _ROUTING_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "invalid request"},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )
