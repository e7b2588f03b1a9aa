"""Schemas for liveness and health endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from ..database import StoreState


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    timestamp: datetime
    database: StoreState
    # Older dashboards read the store state from this key.
    mongodb: StoreState
    environment: str


class UnhealthyResponse(BaseModel):
    status: Literal["unhealthy"] = "unhealthy"
    error: str


__all__ = ["HealthResponse", "UnhealthyResponse"]
