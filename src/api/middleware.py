"""API middleware: CORS, request logging, and error handling.

Starlette middleware runs as a stack (last added, first executed).  In
``main.py`` ErrorHandlingMiddleware is added before RequestLoggingMiddleware,
so the request flows::

    Client → RequestLogging → ErrorHandling → route handler

and RequestLoggingMiddleware sees the final status code, including the
ones ErrorHandlingMiddleware produced from exceptions.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import failure
from src.utils.errors import ShoeZoneProxyError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    The API is read-only and public, so every origin is allowed unless a
    deployment narrows it with ``CORS_ORIGINS``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn exceptions into ``{ok: false, result: <message>}`` envelopes.

    ``ShoeZoneProxyError`` subclasses keep their own status code and
    message.  Anything else is logged with its traceback and answered with
    a generic 500 so internals never reach the client.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ShoeZoneProxyError as exc:
            _logger.warning(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                status=exc.status_code,
                path=str(request.url.path),
            )
            return JSONResponse(status_code=exc.status_code, content=failure(exc.message))
        except Exception:
            _logger.exception("unhandled_error", path=str(request.url.path))
            return JSONResponse(status_code=500, content=failure("Internal server error"))


# ---------------------------------------------------------------------------
# Framework error handlers
# ---------------------------------------------------------------------------


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = f'"{request.url.path}" was not found on this server'
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=failure(message))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("query", "path"))
    message = f"Invalid {location}: {first.get('msg', 'bad value')}" if location else "Invalid request"
    return JSONResponse(status_code=400, content=failure(message))


def register_exception_handlers(app: FastAPI) -> None:
    """Answer unknown routes and bad parameters with the standard envelope."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
