from __future__ import annotations

import hmac
import logging
import re

from sqlalchemy.exc import IntegrityError

from backend import repositories
from backend.auth import hash_password, new_token, verify_password
from backend.errors import (
    AlreadyRegistered,
    EmailUnconfirmed,
    InvalidCredentials,
    InvalidEmail,
    RateLimited,
    WeakPassword,
)
from backend.services.rate_limit import limiter
from backend.settings import get_settings

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


def _session_payload(user: dict, session: dict | None, confirmation_token: str | None = None) -> dict:
    return {
        "access_token": session["token"] if session else None,
        "expires_at": session["expires_at"] if session else None,
        "user": user,
        "confirmation_token": confirmation_token,
    }


async def _open_session(user: dict) -> dict:
    settings = get_settings()
    return await repositories.create_session(user["id"], new_token(), settings.session_ttl_hours)


async def sign_up(email: str, password: str, full_name: str = "") -> dict:
    settings = get_settings()
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmail()
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise WeakPassword()
    if await repositories.get_user_credentials(email):
        raise AlreadyRegistered()

    require_confirmation = settings.auth_require_email_confirmation
    confirmation_token = new_token() if require_confirmation else None
    try:
        user = await repositories.create_user(
            email,
            hash_password(password),
            " ".join(str(full_name or "").split()),
            confirmed=not require_confirmation,
            confirmation_token=confirmation_token,
        )
    except IntegrityError:
        raise AlreadyRegistered()
    logger.info("User %s registered (confirmation required: %s)", user["id"], require_confirmation)

    if require_confirmation:
        return _session_payload(user, None, confirmation_token)
    return _session_payload(user, await _open_session(user))


async def sign_in(email: str, password: str) -> dict:
    settings = get_settings()
    email = normalize_email(email)
    window = settings.auth_rate_limit_window_seconds
    attempts = settings.auth_max_failed_attempts
    if limiter.is_limited(email, attempts, window):
        logger.warning("Sign-in rate limited")
        raise RateLimited()

    record = await repositories.get_user_credentials(email)
    if not record or not verify_password(password or "", record.get("password_hash") or ""):
        limiter.record_failure(email, attempts, window)
        raise InvalidCredentials()
    if not record.get("email_confirmed"):
        raise EmailUnconfirmed()

    limiter.clear(email, attempts, window)
    user = await repositories.get_user(record["id"])
    logger.info("User %s signed in", user["id"])
    return _session_payload(user, await _open_session(user))


async def confirm_email(email: str, token: str) -> dict:
    record = await repositories.get_user_credentials(normalize_email(email))
    expected = (record or {}).get("confirmation_token") or ""
    if not record or not expected or not hmac.compare_digest(expected, token or ""):
        raise InvalidCredentials("Invalid confirmation token")
    await repositories.confirm_user(record["id"])
    user = await repositories.get_user(record["id"])
    return _session_payload(user, await _open_session(user))


async def sign_out(token: str) -> None:
    await repositories.delete_session(token)


async def delete_account(user_id: str) -> None:
    await repositories.delete_user_cascade(user_id)
    logger.info("User %s deleted their account", user_id)
