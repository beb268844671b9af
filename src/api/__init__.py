"""Proxy API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router
from src.api.schemas import (
    ApiResponse,
    ErrorResponse,
    ProductResponse,
    StockResponse,
    StoreResponse,
)

__all__ = [
    "ApiResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "ProductResponse",
    "RequestLoggingMiddleware",
    "StockResponse",
    "StoreResponse",
    "configure_cors",
    "register_exception_handlers",
    "router",
]
