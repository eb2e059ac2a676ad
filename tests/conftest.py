import pytest
from fastapi.testclient import TestClient

from backend.services.rate_limit import limiter
from backend.settings import reset_settings

API_KEY = "test-api-key"


@pytest.fixture
def backend_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'mindjournal.db'}")
    monkeypatch.setenv("BACKEND_API_KEY", API_KEY)
    monkeypatch.delenv("AUTH_REQUIRE_EMAIL_CONFIRMATION", raising=False)
    reset_settings()
    limiter.reset()
    yield monkeypatch
    reset_settings()
    limiter.reset()


@pytest.fixture
def client(backend_env):
    from backend.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def api_headers(token=None):
    headers = {"X-Api-Key": API_KEY}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def sign_up(client, email="user@example.com", password="secret123", full_name="Test User"):
    response = client.post(
        "/v1/auth/signup",
        json={"email": email, "password": password, "full_name": full_name},
        headers=api_headers(),
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def session(client):
    payload = sign_up(client)
    return {"token": payload["access_token"], "user": payload["user"], "headers": api_headers(payload["access_token"])}
