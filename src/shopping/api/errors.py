"""Mapping of shopping errors to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopping.errors import InternalError, ShoppingError

logger = structlog.get_logger(__name__)


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "header", "path", "query")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def register_error_handlers(app: FastAPI) -> None:
    """Answer shopping errors and request validation failures as ``{"error": ...}``."""

    @app.exception_handler(ShoppingError)
    async def shopping_error_handler(request: Request, exc: ShoppingError) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error(
                "Request failed",
                path=request.url.path,
                error_type=type(exc).__name__,
                detail=exc.message,
                exc_info=exc,
            )
            return JSONResponse(status_code=exc.status_code, content={"error": InternalError.default_message})

        logger.info("Request rejected", path=request.url.path, status=exc.status_code, reason=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _field_errors(exc)})
