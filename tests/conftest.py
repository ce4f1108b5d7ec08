"""Pytest fixtures."""

import asyncio
from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from sentic.common.config.settings import Settings
from sentic.common.dependencies.service_dep import get_classifier, get_database
from sentic.common.security.jwt_handler import create_admin_token
from sentic.common.security.password import hash_password
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository
from sentic.infrastructure.external.ml.classifier_client import IssueClassifier
from sentic.main import create_app

TEST_SECRET = "test-secret-not-for-production"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

# Smallest possible JPEG-looking payload; the pipeline never decodes pixels.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"


def make_settings(**overrides) -> Settings:
    values = {"ADMIN_JWT_SECRET": TEST_SECRET, "ML_API_URL": "", "ML_API_KEY": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def mock_classifier(settings: Settings, handler) -> IssueClassifier:
    return IssueClassifier(settings, transport=httpx.MockTransport(handler))


class InMemoryMongo:
    """Stands in for MongoDBConnection, serving an in-memory database."""

    def __init__(self, db):
        self.db = db
        self.connected = False

    async def connect(self):
        self.connected = True

    async def disconnect(self):
        self.connected = False

    def get_db(self):
        return self.db


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def db():
    return AsyncMongoMockClient()["sentic_test"]


@pytest.fixture
def app(settings, db):
    application = create_app(settings)
    application.dependency_overrides[get_database] = lambda: db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client with the in-memory database. Lifespan (real Mongo) is not started."""
    return TestClient(app)


@pytest.fixture
def use_classifier(app):
    """Route classification through a mocked ML endpoint answering with `handler`."""

    def _install(handler, **overrides):
        classifier_settings = make_settings(ML_API_URL="http://ml.test", **overrides)
        classifier = mock_classifier(classifier_settings, handler)
        app.dependency_overrides[get_classifier] = lambda: classifier
        return classifier

    return _install


@pytest.fixture
def admin_id(db):
    return asyncio.run(AdminRepository(db).create(ADMIN_USERNAME, hash_password(ADMIN_PASSWORD)))


@pytest.fixture
def admin_headers(settings, admin_id):
    token = create_admin_token(settings, admin_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def expired_headers(settings, admin_id):
    token = create_admin_token(settings, admin_id, expires_delta=timedelta(seconds=-60))
    return {"Authorization": f"Bearer {token}"}


def submit_report(client, content=JPEG_BYTES, mime="image/jpeg", **fields):
    data = {"area": "Main St", "latitude": "40.0", "longitude": "-74.0"}
    data.update(fields)
    files = {"image": ("photo.jpg", content, mime)} if content is not None else None
    return client.post("/api/reports", data=data, files=files)
