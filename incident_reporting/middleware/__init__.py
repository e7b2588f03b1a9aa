"""Middleware exports."""
from __future__ import annotations

from .cors import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_MAX_AGE,
    OriginGuardMiddleware,
    is_allowed_origin,
)
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "CORS_ALLOWED_HEADERS",
    "CORS_ALLOWED_METHODS",
    "CORS_MAX_AGE",
    "OriginGuardMiddleware",
    "RequestLoggingMiddleware",
    "is_allowed_origin",
]
