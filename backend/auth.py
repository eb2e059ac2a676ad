from __future__ import annotations

import hmac
import secrets

from fastapi import Depends, Header, HTTPException
from passlib.context import CryptContext

from backend import repositories
from backend.errors import NotAuthenticated
from backend.settings import get_settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> bool:
    if not stored:
        return False
    try:
        return pwd_context.verify(password, stored)
    except ValueError:
        return False


def new_token() -> str:
    return secrets.token_urlsafe(32)


async def require_api_key(x_api_key: str | None = Header(default=None, alias="X-Api-Key")) -> None:
    settings = get_settings()
    if not x_api_key or not hmac.compare_digest(x_api_key, settings.backend_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise NotAuthenticated()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise NotAuthenticated()
    return token.strip()


async def require_session_token(
    _api_key: None = Depends(require_api_key),
    authorization: str | None = Header(default=None),
) -> str:
    return _bearer_token(authorization)


async def require_user(token: str = Depends(require_session_token)) -> dict:
    user = await repositories.get_session_user(token)
    if not user:
        raise NotAuthenticated()
    return user
