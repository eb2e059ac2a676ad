import asyncio

from backend import repositories
from backend.db import dispose_engine
from backend.db_init import init_db
from backend.settings import DEFAULT_USER_SETTINGS


def test_first_read_creates_defaults(client, session):
    response = client.get("/v1/settings", headers=session["headers"])
    assert response.status_code == 200
    settings = response.json()
    for key, value in DEFAULT_USER_SETTINGS.items():
        assert settings[key] == value
    assert settings["user_id"] == session["user"]["id"]

    again = client.get("/v1/settings", headers=session["headers"]).json()
    assert again["id"] == settings["id"]


def test_concurrent_first_reads_create_one_record(backend_env):
    async def scenario():
        await init_db()
        try:
            user = await repositories.create_user("race@example.com", "x", "Race", True, None)
            return await asyncio.gather(
                repositories.get_or_create_user_settings(user["id"]),
                repositories.get_or_create_user_settings(user["id"]),
            )
        finally:
            await dispose_engine()

    first, second = asyncio.run(scenario())
    assert first["id"] == second["id"]


def test_update_settings(client, session):
    headers = session["headers"]
    response = client.patch(
        "/v1/settings",
        json={"theme": "dark", "language": "en", "default_notification_minutes": 30, "timezone": "Europe/London"},
        headers=headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["theme"] == "dark"
    assert updated["language"] == "en"
    assert updated["default_notification_minutes"] == 30
    assert updated["timezone"] == "Europe/London"
    assert updated["notifications_enabled"] is True


def test_update_settings_rejects_invalid_values(client, session):
    headers = session["headers"]
    assert client.patch("/v1/settings", json={"theme": "neon"}, headers=headers).status_code == 422
    assert client.patch("/v1/settings", json={"timezone": "Mars/Base"}, headers=headers).status_code == 422
    assert client.patch("/v1/settings", json={"default_notification_minutes": -5}, headers=headers).status_code == 422


def test_bootstrap_returns_user_settings_and_today(client, session):
    response = client.get("/v1/bootstrap", headers=session["headers"])
    assert response.status_code == 200
    payload = response.json()
    assert payload["user"]["id"] == session["user"]["id"]
    assert payload["settings"]["timezone"] == "Asia/Tokyo"
    assert len(payload["today"]) == 10
