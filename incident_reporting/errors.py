"""Catch-all exception handling for the API."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from .config import get_settings
from .services.submission_service import error_detail

logger = logging.getLogger(__name__)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Something went wrong!",
            "error": error_detail(exc, disclose=not get_settings().is_production),
        },
    )


class ErrorTrapMiddleware(BaseHTTPMiddleware):
    """Turn route errors into the JSON 500 body.

    Installed inside ``CORSMiddleware`` so browsers on allowed origins can read
    the response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    # Only reached for failures raised by the outer middleware.
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["ErrorTrapMiddleware", "register_exception_handlers", "unhandled_exception_handler"]
