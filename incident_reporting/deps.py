"""FastAPI dependency providers wiring the report pipeline together."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .database import get_session
from .services.notification_service import ReportNotifier
from .services.report_service import ReportRepository
from .services.submission_service import ReportSubmissionHandler


def get_report_repository(db: Session = Depends(get_session)) -> ReportRepository:
    return ReportRepository(db)


def get_notifier(settings: Settings = Depends(get_settings)) -> ReportNotifier:
    return ReportNotifier(settings.report_notify_recipients)


def get_submission_handler(
    repository: ReportRepository = Depends(get_report_repository),
    notifier: ReportNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> ReportSubmissionHandler:
    """Build a fresh handler per request; nothing is shared between submissions."""

    return ReportSubmissionHandler(
        repository,
        notifier,
        date_required=settings.report_date_required,
        disclose_errors=not settings.is_production,
    )


__all__ = ["get_notifier", "get_report_repository", "get_submission_handler"]
