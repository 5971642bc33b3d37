"""Fixtures for API tests.

The application runs its real lifespan (schema creation and baseline
reconciliation) on a fresh in-memory SQLite engine per test. Outbound
email is replaced by a recording sender.
"""

import pytest
from fastapi.testclient import TestClient

from platec.presentation.api.app import create_app
from platec.presentation.api.dependencies import get_notification_sender
from tests.shared.fixtures.database import create_memory_engine, make_test_settings
from tests.shared.fixtures.fakes import RecordingNotificationSender

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin123!"
TEACHERS_URL = "/api/v1/teachers"


@pytest.fixture
def settings_overrides() -> dict:
    return {}


@pytest.fixture
def sender() -> RecordingNotificationSender:
    return RecordingNotificationSender()


@pytest.fixture
def app(sender, settings_overrides):
    app = create_app(
        settings=make_test_settings(**settings_overrides),
        engine=create_memory_engine(),
    )
    app.dependency_overrides[get_notification_sender] = lambda: sender
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, email: str, password: str) -> dict:
    """Log in and return headers carrying the bearer and anti-forgery tokens."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return {
        "Authorization": f"Bearer {body['access_token']}",
        "X-CSRF-Token": body["csrf_token"],
    }


@pytest.fixture
def admin_headers(client) -> dict:
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def create_teacher(
    client: TestClient,
    headers: dict,
    email: str = "t1@x.com",
    password: str = "1234",
):
    return client.post(
        f"{TEACHERS_URL}/create",
        json={
            "email": email,
            "password": password,
            "first_name": "A",
            "last_name": "B",
        },
        headers=headers,
    )
