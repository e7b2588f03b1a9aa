"""Dry-run submission endpoint: validates and echoes, never stores or emails."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from starlette.responses import JSONResponse

from ..config import Settings, get_settings
from ..schemas import FlashReport, FlashReportResponse
from ..services.report_service import resolve_report_date
from ..services.validation import ReportValidationError, validate_report_payload
from .reports import read_json_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flash", tags=["flash"])


@router.post("/reports", status_code=status.HTTP_201_CREATED, response_model=FlashReportResponse)
async def flash_report(request: Request, settings: Settings = Depends(get_settings)) -> JSONResponse:
    payload = await read_json_payload(request)
    logger.debug("Received data: %r", payload)

    try:
        fields = validate_report_payload(payload, date_required=settings.report_date_required)
    except ReportValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "All fields are required.", "requiredFields": exc.required_fields},
        )

    echoed = FlashReportResponse(
        report=FlashReport(
            college_code=fields.college_code,
            incident_category=fields.incident_category,
            incident_type=fields.incident_type,
            description=fields.description,
            date=resolve_report_date(fields.date),
        )
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=echoed.model_dump(mode="json", by_alias=True))


__all__ = ["router"]
