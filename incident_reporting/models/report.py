"""SQLAlchemy ORM model for submitted incident reports."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Text, Uuid
from sqlalchemy.sql import func

from ..database import Base


class IncidentReport(Base):
    __tablename__ = "incident_reports"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # No length limit on client-supplied text.
    college_code = Column(Text, nullable=False, index=True)
    incident_category = Column(Text, nullable=False, index=True)
    incident_type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)

    # When the incident happened, as reported; submission time when the client omits it.
    date = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


__all__ = ["IncidentReport"]
