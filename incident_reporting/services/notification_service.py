"""Best-effort operator notifications for new incident reports."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from markupsafe import escape

from ..models import IncidentReport
from .email_service import send_email

logger = logging.getLogger(__name__)

NOTIFICATION_SUBJECT = "New Incident Report"

Sender = Callable[..., bool]


@dataclass(frozen=True, slots=True)
class NotifyResult:
    sent: bool
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class ReportNotification:
    subject: str
    text: str
    html: str


def _format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.isoformat()


def build_report_notification(report: IncidentReport) -> ReportNotification:
    """Render the operator email for ``report``; same record, same output."""

    lines = [
        ("College Code", report.college_code),
        ("Category", report.incident_category),
        ("Type", report.incident_type),
        ("Description", report.description),
        ("Date", _format_timestamp(report.date)),
        ("Report ID", str(report.id)),
        ("Submitted At", _format_timestamp(report.created_at)),
    ]

    text = "\n".join([NOTIFICATION_SUBJECT, ""] + [f"{label}: {value}" for label, value in lines])
    html = "\n".join(
        [f"<h2>{NOTIFICATION_SUBJECT}</h2>"]
        + [f"<p><strong>{label}:</strong> {escape(value)}</p>" for label, value in lines]
    )
    return ReportNotification(subject=NOTIFICATION_SUBJECT, text=text, html=html)


class ReportNotifier:
    """Emails new reports to the configured operators.

    ``notify`` never raises: transport problems come back as
    ``NotifyResult(sent=False, reason=...)`` and the caller decides what to log.
    """

    def __init__(self, recipients: Sequence[str], *, send: Sender = send_email) -> None:
        self._recipients = [recipient for recipient in recipients if recipient]
        self._send = send

    @property
    def recipients(self) -> list[str]:
        return list(self._recipients)

    def notify(self, report: IncidentReport) -> NotifyResult:
        if not self._recipients:
            return NotifyResult(sent=False, reason="No notification recipients configured")

        try:
            message = build_report_notification(report)
            self._send(", ".join(self._recipients), message.subject, message.text, html_body=message.html)
        except Exception as exc:
            logger.exception("Email sending failed for report %s", report.id)
            return NotifyResult(sent=False, reason=str(exc) or exc.__class__.__name__)

        logger.info("Notification sent for report %s to %d recipient(s)", report.id, len(self._recipients))
        return NotifyResult(sent=True)


__all__ = [
    "NOTIFICATION_SUBJECT",
    "NotifyResult",
    "ReportNotification",
    "ReportNotifier",
    "build_report_notification",
]
