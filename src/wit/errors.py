"""Application errors and their HTTP rendering.

Every API failure is rendered as::

    {"success": false, "error": {"code": "...", "message": "...", "details": [...]}}
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Operational error with an HTTP status and an application error code."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    @classmethod
    def bad_request(cls, message: str, code: str = "BAD_REQUEST", details: Any = None) -> "AppError":
        return cls(message, 400, code, details)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", code: str = "UNAUTHORIZED") -> "AppError":
        return cls(message, 401, code)

    @classmethod
    def forbidden(cls, message: str = "Forbidden", code: str = "FORBIDDEN") -> "AppError":
        return cls(message, 403, code)

    @classmethod
    def not_found(cls, message: str = "Resource not found", code: str = "NOT_FOUND") -> "AppError":
        return cls(message, 404, code)

    @classmethod
    def conflict(cls, message: str, code: str = "CONFLICT") -> "AppError":
        return cls(message, 409, code)

    @classmethod
    def validation(cls, message: str, details: Any = None) -> "AppError":
        return cls(message, 422, "VALIDATION_ERROR", details)


def error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    """Build the error envelope."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            # Drop the "body"/"query"/"path" location prefix
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=error_body("VALIDATION_ERROR", "Validation failed", details),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A wrong method on a known path is an unknown route too
    if exc.status_code in (404, 405) and request.url.path.startswith("/api/v1"):
        return JSONResponse(
            status_code=404,
            content=error_body("ROUTE_NOT_FOUND", f"Route {request.url.path} not found"),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "An unexpected error occurred"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
