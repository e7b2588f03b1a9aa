"""ORM models registered on the shared declarative base."""
from .report import IncidentReport

__all__ = ["IncidentReport"]
