"""Orchestration of a single report submission.

A submission moves through a fixed sequence of states::

    RECEIVED -> VALIDATING -> PERSISTING -> NOTIFYING -> RESPONDED

Validation failures and persistence failures short-circuit to ``RESPONDED``
with a 400 or 500 body. Once the report is stored the response is always 201:
the notification outcome is only logged.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from fastapi import status

from ..models import IncidentReport
from ..schemas import MissingFieldsResponse, ReportCreatedResponse, ReportErrorResponse
from .notification_service import NotifyResult
from .report_service import PersistenceError
from .validation import ReportFields, ReportValidationError, validate_report_payload

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Internal server error"


class ReportGateway(Protocol):
    def create(self, fields: ReportFields) -> IncidentReport: ...


class Notifier(Protocol):
    def notify(self, report: IncidentReport) -> NotifyResult: ...


class SubmissionState(str, enum.Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    NOTIFYING = "notifying"
    RESPONDED = "responded"


@dataclass(slots=True)
class SubmissionResult:
    status_code: int
    body: dict[str, Any]
    state: SubmissionState = SubmissionState.RESPONDED
    history: list[SubmissionState] = field(default_factory=list)
    notification: NotifyResult | None = None


def error_detail(exc: BaseException, *, disclose: bool) -> str:
    """Return the message shown to clients for ``exc`` under the disclosure policy."""

    if not disclose:
        return GENERIC_ERROR_DETAIL
    return str(exc) or exc.__class__.__name__


class ReportSubmissionHandler:
    """Validate, store and announce one incident report."""

    def __init__(
        self,
        repository: ReportGateway,
        notifier: Notifier,
        *,
        date_required: bool = False,
        disclose_errors: bool = True,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._date_required = date_required
        self._disclose_errors = disclose_errors

    def submit(self, payload: Any) -> SubmissionResult:
        history = [SubmissionState.RECEIVED]

        def respond(status_code: int, body: dict[str, Any], notification: NotifyResult | None = None) -> SubmissionResult:
            history.append(SubmissionState.RESPONDED)
            return SubmissionResult(status_code=status_code, body=body, history=history, notification=notification)

        history.append(SubmissionState.VALIDATING)
        try:
            fields = validate_report_payload(payload, date_required=self._date_required)
        except ReportValidationError as exc:
            logger.info("Rejected report: missing %s", ", ".join(exc.missing_fields))
            body = MissingFieldsResponse(error="Missing required fields", required_fields=exc.required_fields)
            return respond(status.HTTP_400_BAD_REQUEST, body.model_dump(by_alias=True))

        history.append(SubmissionState.PERSISTING)
        try:
            report = self._repository.create(fields)
        except PersistenceError as exc:
            logger.error("Report submission error: %s", exc)
            body = ReportErrorResponse(
                message="Error submitting report",
                error=error_detail(exc, disclose=self._disclose_errors),
            )
            return respond(status.HTTP_500_INTERNAL_SERVER_ERROR, body.model_dump())

        history.append(SubmissionState.NOTIFYING)
        outcome = self._notifier.notify(report)
        if not outcome.sent:
            logger.warning("Report %s stored but notification failed: %s", report.id, outcome.reason)

        created = ReportCreatedResponse(report_id=str(report.id))
        return respond(status.HTTP_201_CREATED, created.model_dump(by_alias=True), outcome)


__all__ = [
    "GENERIC_ERROR_DETAIL",
    "Notifier",
    "ReportGateway",
    "ReportSubmissionHandler",
    "SubmissionResult",
    "SubmissionState",
    "error_detail",
]
