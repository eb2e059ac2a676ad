from mindjournal.errors import AuthError, NotConnectedError, StoreError, ValidationError, user_message
from mindjournal.validation import FieldError


def test_known_auth_messages_are_translated():
    exc = AuthError("Invalid login credentials", 400)
    assert user_message(exc, "ja") == "メールアドレスまたはパスワードが正しくありません"
    assert user_message(exc, "en") == "Incorrect email address or password."


def test_matching_is_case_insensitive_substring():
    exc = StoreError("Database error: relation \"journal_entries\" DOES NOT EXIST", 500)
    assert user_message(exc, "en") == "A database table is missing. Check the backend configuration."


def test_first_matching_rule_wins():
    exc = AuthError("Missing or expired session: user not found", 401)
    assert user_message(exc, "en") == "Your session has expired. Please sign in again."


def test_not_connected_and_network_failures():
    assert "API_BASE_URL" in user_message(NotConnectedError("API_KEY not configured"), "en")
    assert user_message(StoreError("Failed to fetch: connection refused"), "ja") == "ネットワーク接続を確認してください"


def test_unknown_message_passes_through():
    assert user_message(StoreError("Something odd"), "en") == "Something odd"


def test_validation_error_joins_field_messages():
    exc = ValidationError([FieldError("title", "Enter a title."), FieldError("content", "Too short.")])
    assert user_message(exc, "en") == "Enter a title.\nToo short."
    assert "title: Enter a title." in str(exc)
