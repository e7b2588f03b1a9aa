"""Tests for the dry-run flash submission endpoint."""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, func, select

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_incident_reports.db")

from incident_reporting.database import Base, SessionLocal, engine  # noqa: E402
from incident_reporting.deps import get_notifier  # noqa: E402
from incident_reporting.main import app  # noqa: E402
from incident_reporting.models import IncidentReport  # noqa: E402

VALID_PAYLOAD = {
    "collegeCode": "ABC123",
    "incidentCategory": "Safety",
    "incidentType": "Fire",
    "description": "Smoke in lab 3",
}


class ExplodingNotifier:
    def notify(self, report):
        raise AssertionError("dry-run submissions must not notify")


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> Iterator[TestClient]:
    with SessionLocal() as session:
        session.execute(delete(IncidentReport))
        session.commit()
    app.dependency_overrides[get_notifier] = ExplodingNotifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_flash_echoes_report_without_persisting(client):
    response = client.post("/api/flash/reports", json={**VALID_PAYLOAD, "date": "2024-03-15T10:30:00Z"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Report received successfully!"
    report = body["report"]
    assert report["collegeCode"] == "ABC123"
    assert report["description"] == "Smoke in lab 3"
    assert datetime.fromisoformat(report["date"].replace("Z", "+00:00")) == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    with SessionLocal() as session:
        assert session.scalar(select(func.count(IncidentReport.id))) == 0


def test_flash_defaults_date_to_now(client):
    response = client.post("/api/flash/reports", json=VALID_PAYLOAD)

    assert response.status_code == 201
    echoed = datetime.fromisoformat(response.json()["report"]["date"].replace("Z", "+00:00"))
    assert abs(echoed - datetime.now(timezone.utc)) < timedelta(seconds=2)


def test_flash_rejects_missing_fields(client):
    response = client.post("/api/flash/reports", json={"collegeCode": "ABC123"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "All fields are required.",
        "requiredFields": ["collegeCode", "incidentCategory", "incidentType", "description"],
    }
