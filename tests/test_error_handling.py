"""Error envelope tests for unexpected failures in development and production modes."""

import logging

import pytest
from fastapi.testclient import TestClient

from conftest import make_settings
from sentic.common.dependencies.service_dep import get_database, get_report_service
from sentic.common.exceptions.base_exception import NotFoundError, ServiceUnavailableException
from sentic.main import create_app

UNAVAILABLE_ID = "665f1c2b9d1e8a00deadbeef"


class BrokenService:
    async def list_public(self):
        raise RuntimeError("kaboom")

    async def get_report(self, report_id, include_reporter=False):
        if report_id == UNAVAILABLE_ID:
            raise ServiceUnavailableException("Database operation failed")
        raise NotFoundError("Report not found")


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def log_records():
    handler = RecordingHandler()
    logger = logging.getLogger("sentic")
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


def build_client(db, **overrides):
    app = create_app(make_settings(**overrides))
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_report_service] = lambda: BrokenService()
    return TestClient(app, raise_server_exceptions=False)


def test_unexpected_error_shows_detail_outside_production(db):
    response = build_client(db, ENVIRONMENT="development").get("/api/reports")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "kaboom"
    assert "RuntimeError" in body["details"]


def test_unexpected_error_is_generic_in_production(db):
    response = build_client(db, ENVIRONMENT="production").get("/api/reports")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal Server Error"}


def test_unexpected_error_is_logged_once_at_error_level(db, log_records):
    build_client(db, ENVIRONMENT="development").get("/api/reports")

    logged = [(r.levelno, r.getMessage()) for r in log_records if r.getMessage() != "Incoming request"]
    assert logged == [(logging.ERROR, "Unhandled exception")]


@pytest.mark.parametrize("environment", ["development", "production"])
def test_client_errors_keep_their_message(db, environment):
    response = build_client(db, ENVIRONMENT=environment).get("/api/reports/unknown-id")

    assert response.status_code == 404
    assert response.json()["message"] == "Report not found"


def test_server_side_application_error_is_masked_in_production(db):
    response = build_client(db, ENVIRONMENT="production").get(f"/api/reports/{UNAVAILABLE_ID}")

    assert response.status_code == 503
    assert response.json() == {"success": False, "message": "Internal Server Error"}


def test_server_side_application_error_keeps_message_outside_production(db):
    response = build_client(db, ENVIRONMENT="development").get(f"/api/reports/{UNAVAILABLE_ID}")

    assert response.status_code == 503
    assert response.json()["message"] == "Database operation failed"
