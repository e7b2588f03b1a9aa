"""Origin allow-list enforcement in front of the CORS headers middleware."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORS_ALLOWED_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CORS_ALLOWED_HEADERS: tuple[str, ...] = ("Authorization", "Content-Type")
CORS_MAX_AGE = 86400


def is_allowed_origin(origin: str | None, allowed_origins: Iterable[str]) -> bool:
    """Requests without an ``Origin`` header (curl, same-origin) are always allowed."""

    if not origin:
        return True
    return origin in set(allowed_origins)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests whose origin is not on the allow-list.

    Notes:
    - Runs before routing, so rejected requests never reach a handler.
    - The rejection is plain text without CORS headers, which browsers surface
      as a blocked request rather than an API error.
    """

    def __init__(self, app: ASGIApp, *, allowed_origins: Sequence[str]) -> None:
        super().__init__(app)
        self._allowed_origins = tuple(allowed_origins)

    async def dispatch(self, request: Request, call_next) -> Response:
        origin = request.headers.get("origin")
        if is_allowed_origin(origin, self._allowed_origins):
            return await call_next(request)

        logger.warning("Blocked %s %s from origin %s", request.method, request.url.path, origin)
        return PlainTextResponse("Not allowed by CORS", status_code=status.HTTP_403_FORBIDDEN)


__all__: Iterable[str] = [
    "CORS_ALLOWED_HEADERS",
    "CORS_ALLOWED_METHODS",
    "CORS_MAX_AGE",
    "OriginGuardMiddleware",
    "is_allowed_origin",
]
