"""Convenience exports for service layer."""
from .email_service import EmailDeliveryError, send_email, verify_email_transport
from .notification_service import NotifyResult, ReportNotifier, build_report_notification
from .report_service import PersistenceError, ReportRepository, resolve_report_date
from .submission_service import ReportSubmissionHandler, SubmissionResult, SubmissionState
from .validation import ReportFields, ReportValidationError, validate_report_payload

__all__ = [
    "EmailDeliveryError",
    "NotifyResult",
    "PersistenceError",
    "ReportFields",
    "ReportNotifier",
    "ReportRepository",
    "ReportSubmissionHandler",
    "ReportValidationError",
    "SubmissionResult",
    "SubmissionState",
    "build_report_notification",
    "resolve_report_date",
    "send_email",
    "validate_report_payload",
    "verify_email_transport",
]
