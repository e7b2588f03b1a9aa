"""End-to-end tests for the report submission endpoint."""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Iterator
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, func, select

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_incident_reports.db")

from incident_reporting import errors  # noqa: E402
from incident_reporting.config import Settings, get_settings  # noqa: E402
from incident_reporting.database import Base, SessionLocal, engine  # noqa: E402
from incident_reporting.deps import get_notifier, get_report_repository  # noqa: E402
from incident_reporting.main import app  # noqa: E402
from incident_reporting.models import IncidentReport  # noqa: E402
from incident_reporting.services.notification_service import NotifyResult  # noqa: E402
from incident_reporting.services.report_service import PersistenceError  # noqa: E402

REQUIRED = ["collegeCode", "incidentCategory", "incidentType", "description"]

VALID_PAYLOAD = {
    "collegeCode": "ABC123",
    "incidentCategory": "Safety",
    "incidentType": "Fire",
    "description": "Smoke in lab 3",
}


class StubNotifier:
    def __init__(self, result: NotifyResult | None = None) -> None:
        self.result = result or NotifyResult(sent=True)
        self.calls = 0

    def notify(self, report) -> NotifyResult:
        self.calls += 1
        return self.result


class FailingRepository:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def create(self, fields):
        raise self.error


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(IncidentReport))
        session.commit()
    yield


@pytest.fixture
def notifier() -> Iterator[StubNotifier]:
    stub = StubNotifier()
    app.dependency_overrides[get_notifier] = lambda: stub
    yield stub
    app.dependency_overrides.clear()


@pytest.fixture
def client(notifier) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.mark.parametrize("missing", REQUIRED)
def test_missing_field_returns_400_with_full_required_list(client, notifier, missing):
    payload = {key: value for key, value in VALID_PAYLOAD.items() if key != missing}

    response = client.post("/reports", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields", "requiredFields": REQUIRED}
    assert notifier.calls == 0


def test_empty_field_counts_as_missing(client):
    response = client.post("/reports", json={**VALID_PAYLOAD, "description": ""})
    assert response.status_code == 400
    assert response.json()["requiredFields"] == REQUIRED


def test_malformed_body_is_treated_as_empty(client):
    response = client.post("/reports", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["requiredFields"] == REQUIRED


def test_valid_report_is_stored_and_notified(client, notifier):
    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Report submitted successfully"
    assert notifier.calls == 1

    with SessionLocal() as session:
        stored = session.get(IncidentReport, UUID(body["reportId"]))
        assert stored is not None
        assert stored.college_code == "ABC123"
        assert stored.incident_type == "Fire"


def test_failing_notifier_does_not_change_status(client, notifier):
    notifier.result = NotifyResult(sent=False, reason="535 Authentication failed")

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 201
    report_id = UUID(response.json()["reportId"])
    with SessionLocal() as session:
        assert session.get(IncidentReport, report_id) is not None


def test_omitted_date_defaults_to_now(client):
    response = client.post("/reports", json=VALID_PAYLOAD)
    assert response.status_code == 201

    with SessionLocal() as session:
        stored = session.get(IncidentReport, UUID(response.json()["reportId"]))
        assert stored is not None
        assert abs(_as_utc(stored.date) - datetime.now(timezone.utc)) < timedelta(seconds=2)


def test_supplied_date_is_parsed(client):
    response = client.post("/reports", json={**VALID_PAYLOAD, "date": "2024-03-15T10:30:00Z"})
    assert response.status_code == 201

    with SessionLocal() as session:
        stored = session.get(IncidentReport, UUID(response.json()["reportId"]))
        assert stored is not None
        assert _as_utc(stored.date) == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


def test_unparsable_date_falls_back_to_now(client):
    response = client.post("/reports", json={**VALID_PAYLOAD, "date": "last tuesday"})
    assert response.status_code == 201

    with SessionLocal() as session:
        stored = session.get(IncidentReport, UUID(response.json()["reportId"]))
        assert stored is not None
        assert abs(_as_utc(stored.date) - datetime.now(timezone.utc)) < timedelta(seconds=2)


def test_persistence_failure_returns_500_without_notification(client, notifier):
    app.dependency_overrides[get_report_repository] = lambda: FailingRepository(PersistenceError("disk I/O error"))

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error submitting report", "error": "disk I/O error"}
    assert notifier.calls == 0


def test_production_mode_hides_persistence_detail(client, notifier):
    app.dependency_overrides[get_report_repository] = lambda: FailingRepository(PersistenceError("disk I/O error"))
    app.dependency_overrides[get_settings] = lambda: Settings(APP_ENV="production")

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert "disk I/O error" not in response.text


def test_date_required_setting_applies_to_endpoint(client):
    app.dependency_overrides[get_settings] = lambda: Settings(REPORT_DATE_REQUIRED="true")

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 400
    assert response.json()["requiredFields"] == REQUIRED + ["date"]


def test_unexpected_error_reaches_catch_all(client, notifier):
    app.dependency_overrides[get_report_repository] = lambda: FailingRepository(RuntimeError("boom"))

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Something went wrong!", "error": "boom"}
    assert notifier.calls == 0


def test_unexpected_error_detail_hidden_in_production(client, monkeypatch):
    app.dependency_overrides[get_report_repository] = lambda: FailingRepository(RuntimeError("boom"))
    monkeypatch.setattr(errors, "get_settings", lambda: Settings(APP_ENV="production"))

    response = client.post("/reports", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_identical_reports_create_distinct_records(client):
    first = client.post("/reports", json=VALID_PAYLOAD)
    second = client.post("/reports", json=VALID_PAYLOAD)

    assert first.status_code == second.status_code == 201
    assert first.json()["reportId"] != second.json()["reportId"]
    with SessionLocal() as session:
        assert session.scalar(select(func.count(IncidentReport.id))) == 2
