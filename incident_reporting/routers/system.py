"""Liveness and health routes."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse, PlainTextResponse

from ..config import Settings, get_settings
from ..database import StoreConnection, get_store
from ..schemas import HealthResponse, UnhealthyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Incident Reporting API is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": UnhealthyResponse}},
)
def healthcheck(
    store: StoreConnection = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Report store connectivity and the deployment mode."""

    try:
        state = store.status()
        health = HealthResponse(
            timestamp=datetime.now(timezone.utc),
            database=state,
            mongodb=state,
            environment=settings.environment,
        )
    except Exception as exc:
        logger.exception("Health check failed")
        body = UnhealthyResponse(error=str(exc) or exc.__class__.__name__)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())

    return JSONResponse(status_code=status.HTTP_200_OK, content=health.model_dump(mode="json"))


__all__ = ["router"]
