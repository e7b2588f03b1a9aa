"""Application entry point for the incident reporting API."""
from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db, store
from .errors import ErrorTrapMiddleware, register_exception_handlers
from .middleware import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_MAX_AGE,
    OriginGuardMiddleware,
    RequestLoggingMiddleware,
)
from .routers import flash_router, reports_router, system_router
from .services import verify_email_transport

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

# Starlette runs the last-added middleware first: logging, origin guard, CORS headers, error trap.
app.add_middleware(ErrorTrapMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=list(CORS_ALLOWED_METHODS),
    allow_headers=list(CORS_ALLOWED_HEADERS),
    max_age=CORS_MAX_AGE,
)
app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.allowed_origins)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(system_router)
app.include_router(reports_router)
app.include_router(flash_router)

_email_check_task: asyncio.Task[bool] | None = None


@app.on_event("startup")
async def _startup() -> None:
    """Connect to the store and create the schema before serving."""

    try:
        await asyncio.to_thread(
            store.connect,
            retry_delay=settings.database_retry_delay_seconds,
            max_attempts=settings.database_max_connect_attempts,
        )
        init_db()
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Database initialisation failed")
        raise

    # The mail check may hang on a slow SMTP host; serve requests meanwhile.
    global _email_check_task
    _email_check_task = asyncio.create_task(asyncio.to_thread(verify_email_transport))

    logger.info("%s listening (environment=%s, port=%d)", settings.app_name, settings.environment, settings.port)


@app.on_event("shutdown")
async def _shutdown() -> None:
    """Release the store connection pool during graceful shutdown."""

    logger.info("Shutting down %s", settings.app_name)
    if _email_check_task is not None and not _email_check_task.done():
        _email_check_task.cancel()
    await asyncio.to_thread(store.close)


__all__ = ["app"]
