"""Error Handlers — global exception handlers for the lahlah API.

Invariants:
    - LahlahError → its to_response() envelope with its own HTTP status
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500 {"error": message}; the process keeps serving
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from lahlah_server.core.errors import InternalServerError, LahlahError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_lahlah_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_lahlah_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LahlahError)
    async def lahlah_error_handler(request: Request, exc: LahlahError):
        """Handle all lahlah domain/infrastructure errors."""
        logger.error(
            f"LahlahError: {exc.message}",
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
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — converts any handler failure into a failure payload."""
        error = InternalServerError(str(exc))
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=error.http_status,
            content={"error": error.message},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": "Invalid request data",
        "code": "VALIDATION_ERROR",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
