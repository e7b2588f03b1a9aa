"""Wire schemas for incident report endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ReportSubmission(BaseModel):
    """Documented request shape; the handler validates the raw body itself."""

    model_config = ConfigDict(populate_by_name=True)

    college_code: str = Field(alias="collegeCode")
    incident_category: str = Field(alias="incidentCategory")
    incident_type: str = Field(alias="incidentType")
    description: str
    date: datetime | None = None


class MissingFieldsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    required_fields: list[str] = Field(alias="requiredFields")


class ReportCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    message: str = "Report submitted successfully"
    report_id: str = Field(alias="reportId")


class ReportErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str
    error: str


class FlashReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    college_code: str = Field(alias="collegeCode")
    incident_category: str = Field(alias="incidentCategory")
    incident_type: str = Field(alias="incidentType")
    description: str
    date: datetime


class FlashReportResponse(BaseModel):
    message: str = "Report received successfully!"
    report: FlashReport


__all__ = [
    "FlashReport",
    "FlashReportResponse",
    "MissingFieldsResponse",
    "ReportCreatedResponse",
    "ReportErrorResponse",
    "ReportSubmission",
]
