from mindjournal import auth
from mindjournal.data import repositories
from mindjournal.errors import AuthError
from mindjournal.state.app_state import AppState


def test_refresh_session_loads_user_and_settings(monkeypatch):
    calls = []

    def fake_bootstrap():
        calls.append("bootstrap")
        return {"user": {"id": "u1", "email": "a@example.com"}, "settings": {"language": "en"}}

    monkeypatch.setattr(repositories, "bootstrap", fake_bootstrap)
    state = AppState()
    state.set_session({"id": "u1"}, "token")
    auth.refresh_session(state)
    assert calls == ["bootstrap"]
    assert state.user["email"] == "a@example.com"
    assert state.language == "en"


def test_refresh_session_clears_rejected_session(monkeypatch):
    def rejected():
        raise AuthError("Missing or expired session", 401)

    monkeypatch.setattr(repositories, "bootstrap", rejected)
    state = AppState()
    state.set_session({"id": "u1"}, "stale")
    auth.refresh_session(state)
    assert not state.is_authenticated


def test_refresh_session_without_token_does_nothing(monkeypatch):
    calls = []
    monkeypatch.setattr(repositories, "bootstrap", lambda: calls.append("bootstrap"))
    auth.refresh_session(AppState())
    assert calls == []
