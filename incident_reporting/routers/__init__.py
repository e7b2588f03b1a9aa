"""Aggregate router exports."""
from .flash import router as flash_router
from .reports import router as reports_router
from .system import router as system_router

__all__ = ["flash_router", "reports_router", "system_router"]
