"""Pydantic schemas exposed by the API."""
from .reports import (
    FlashReport,
    FlashReportResponse,
    MissingFieldsResponse,
    ReportCreatedResponse,
    ReportErrorResponse,
    ReportSubmission,
)
from .system import HealthResponse, UnhealthyResponse

__all__ = [
    "FlashReport",
    "FlashReportResponse",
    "HealthResponse",
    "MissingFieldsResponse",
    "ReportCreatedResponse",
    "ReportErrorResponse",
    "ReportSubmission",
    "UnhealthyResponse",
]
