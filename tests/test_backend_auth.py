from backend.auth import hash_password, verify_password
from tests.conftest import api_headers, sign_up


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_signup_returns_session_and_user(client):
    payload = sign_up(client, email="  New@Example.com ")
    assert payload["access_token"]
    assert payload["user"]["email"] == "new@example.com"
    assert payload["user"]["full_name"] == "Test User"
    assert "password_hash" not in payload["user"]


def test_signup_requires_api_key(client):
    response = client.post("/v1/auth/signup", json={"email": "a@example.com", "password": "secret123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid API key"


def test_signup_duplicate_email(client):
    sign_up(client)
    response = client.post(
        "/v1/auth/signup",
        json={"email": "user@example.com", "password": "another123"},
        headers=api_headers(),
    )
    assert response.status_code == 422
    assert response.json()["detail"] == "User already registered"


def test_signup_weak_password_and_bad_email(client):
    weak = client.post("/v1/auth/signup", json={"email": "a@example.com", "password": "123"}, headers=api_headers())
    assert weak.status_code == 422
    assert weak.json()["detail"] == "Password should be at least 6 characters"

    bad = client.post("/v1/auth/signup", json={"email": "not-an-email", "password": "secret123"}, headers=api_headers())
    assert bad.status_code == 422
    assert "Unable to validate email address" in bad.json()["detail"]


def test_signin_success_and_me(client):
    sign_up(client)
    response = client.post(
        "/v1/auth/signin",
        json={"email": "user@example.com", "password": "secret123"},
        headers=api_headers(),
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    me = client.get("/v1/auth/me", headers=api_headers(token))
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "user@example.com"


def test_signin_wrong_password(client):
    sign_up(client)
    response = client.post(
        "/v1/auth/signin",
        json={"email": "user@example.com", "password": "wrong-password"},
        headers=api_headers(),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid login credentials"


def test_signin_rate_limited_after_repeated_failures(client, backend_env):
    sign_up(client)
    for _ in range(5):
        client.post(
            "/v1/auth/signin",
            json={"email": "user@example.com", "password": "wrong-password"},
            headers=api_headers(),
        )
    response = client.post(
        "/v1/auth/signin",
        json={"email": "user@example.com", "password": "secret123"},
        headers=api_headers(),
    )
    assert response.status_code == 429
    assert response.json()["detail"] == "Too many requests"


def test_missing_session_is_rejected(client):
    response = client.get("/v1/auth/me", headers=api_headers())
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing or expired session"

    response = client.get("/v1/auth/me", headers=api_headers("not-a-real-token"))
    assert response.status_code == 401


def test_signout_invalidates_token(client, session):
    response = client.post("/v1/auth/signout", headers=session["headers"])
    assert response.status_code == 200
    assert client.get("/v1/auth/me", headers=session["headers"]).status_code == 401


def test_profile_update(client, session):
    response = client.patch("/v1/auth/profile", json={"full_name": "  Renamed User "}, headers=session["headers"])
    assert response.status_code == 200
    assert response.json()["user"]["full_name"] == "Renamed User"

    empty = client.patch("/v1/auth/profile", json={"full_name": "   "}, headers=session["headers"])
    assert empty.status_code == 422


def test_delete_account_removes_everything(client, session):
    headers = session["headers"]
    client.post(
        "/v1/entries",
        json={"title": "Day", "content": "A long enough entry body.", "emotion_score": 6},
        headers=headers,
    )
    response = client.delete("/v1/auth/account", headers=headers)
    assert response.status_code == 200
    assert client.get("/v1/auth/me", headers=headers).status_code == 401

    signin = client.post(
        "/v1/auth/signin",
        json={"email": "user@example.com", "password": "secret123"},
        headers=api_headers(),
    )
    assert signin.status_code == 400


def test_email_confirmation_flow(backend_env):
    from fastapi.testclient import TestClient

    from backend.main import create_app
    from backend.settings import reset_settings

    backend_env.setenv("AUTH_REQUIRE_EMAIL_CONFIRMATION", "true")
    reset_settings()
    with TestClient(create_app()) as client:
        payload = sign_up(client, email="confirm@example.com")
        assert payload["access_token"] is None
        token = payload["confirmation_token"]
        assert token

        blocked = client.post(
            "/v1/auth/signin",
            json={"email": "confirm@example.com", "password": "secret123"},
            headers=api_headers(),
        )
        assert blocked.status_code == 400
        assert blocked.json()["detail"] == "Email not confirmed"

        wrong = client.post(
            "/v1/auth/confirm",
            json={"email": "confirm@example.com", "token": "nope"},
            headers=api_headers(),
        )
        assert wrong.status_code == 400

        confirmed = client.post(
            "/v1/auth/confirm",
            json={"email": "confirm@example.com", "token": token},
            headers=api_headers(),
        )
        assert confirmed.status_code == 200
        assert confirmed.json()["access_token"]
        assert confirmed.json()["user"]["email_confirmed"] is True


def test_password_hash_round_trip():
    stored = hash_password("secret123")
    assert stored.startswith("$pbkdf2-sha256$")
    assert verify_password("secret123", stored)
    assert not verify_password("secret124", stored)
    assert not verify_password("secret123", "")
    assert not verify_password("secret123", "not-a-hash")
