"""Report submission endpoints."""
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from starlette.responses import JSONResponse

from ..deps import get_submission_handler
from ..schemas import MissingFieldsResponse, ReportCreatedResponse, ReportErrorResponse, ReportSubmission
from ..services.submission_service import ReportSubmissionHandler

router = APIRouter(prefix="/reports", tags=["reports"])


async def read_json_payload(request: Request) -> Any:
    """Return the decoded JSON body, or an empty mapping when it cannot be decoded."""

    try:
        return await request.json()
    except ValueError:
        return {}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ReportCreatedResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": MissingFieldsResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ReportErrorResponse},
    },
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": ReportSubmission.model_json_schema(by_alias=True)}}}},
)
async def create_report_endpoint(
    request: Request,
    handler: ReportSubmissionHandler = Depends(get_submission_handler),
) -> JSONResponse:
    payload = await read_json_payload(request)
    # Store and SMTP calls block; keep them off the event loop.
    result = await asyncio.to_thread(handler.submit, payload)
    return JSONResponse(status_code=result.status_code, content=result.body)


__all__ = ["router", "read_json_payload"]
