"""Persistence gateway for incident reports."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import IncidentReport
from .validation import ReportFields

logger = logging.getLogger(__name__)

_DATETIME_ADAPTER: TypeAdapter[datetime] = TypeAdapter(datetime)


class PersistenceError(RuntimeError):
    """Raised when a report cannot be durably stored."""


def resolve_report_date(value: Any, *, now: datetime | None = None) -> datetime:
    """Parse a client-supplied date, falling back to ``now`` when absent or unparsable.

    Accepts ``datetime`` objects, ISO 8601 strings and Unix timestamps (seconds
    or milliseconds). Naive values are taken as UTC.
    """

    fallback = now or datetime.now(timezone.utc)
    if value is None or value == "" or isinstance(value, bool):
        return fallback

    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError:
        logger.debug("Ignoring unparsable report date %r", value)
        return fallback

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ReportRepository:
    """Create-only access to the ``incident_reports`` table."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, fields: ReportFields) -> IncidentReport:
        now = datetime.now(timezone.utc)
        report = IncidentReport(
            college_code=fields.college_code,
            incident_category=fields.incident_category,
            incident_type=fields.incident_type,
            description=fields.description,
            date=resolve_report_date(fields.date, now=now),
            created_at=now,
        )
        try:
            self._db.add(report)
            self._db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            self._db.rollback()
            logger.error("Failed to store incident report for %s: %s", fields.college_code, exc)
            raise PersistenceError(str(exc)) from exc

        logger.info("Stored incident report %s (college=%s)", report.id, report.college_code)
        return report


__all__ = ["PersistenceError", "ReportRepository", "resolve_report_date"]
