import logging
import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from mindjournal.errors import AuthError, NotConnectedError, StoreError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
AUTH_PREFIX = "/v1/auth"

_SECRET_GETTER = None
_TOKEN_GETTER = None


def _build_session():
    session = requests.Session()
    # One round trip per action; failures surface to the user instead of retrying.
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter, token_getter):
    global _SECRET_GETTER, _TOKEN_GETTER
    _SECRET_GETTER = secret_getter
    _TOKEN_GETTER = token_getter


def set_session(session):
    global _SESSION
    _SESSION = session


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return (
        _get_secret(("app", "API_BASE_URL"))
        or _get_secret(("API_BASE_URL",))
        or os.getenv("API_BASE_URL")
        or ""
    )


def api_key():
    return (
        _get_secret(("app", "API_KEY"))
        or _get_secret(("API_KEY",))
        or os.getenv("API_KEY")
        or ""
    )


def is_enabled():
    return bool(api_base_url() and api_key())


def _error_detail(response):
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason or ""
    if isinstance(payload, dict):
        detail = payload.get("detail", payload)
        if isinstance(detail, list):
            return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
        return str(detail)
    return str(payload)


def request(
    method: str,
    path: str,
    params: dict | None = None,
    json: dict | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    authenticated: bool = True,
) -> Any:
    base = api_base_url().rstrip("/")
    if not base:
        raise NotConnectedError("API_BASE_URL not configured")
    key = api_key()
    if not key:
        raise NotConnectedError("API_KEY not configured")
    headers = {"X-Api-Key": key}
    if authenticated:
        token = _TOKEN_GETTER() if _TOKEN_GETTER else None
        if not token:
            raise AuthError("Missing or expired session", 401)
        headers["Authorization"] = f"Bearer {token}"
    url = f"{base}{path}"
    try:
        response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise StoreError(f"Failed to fetch: {exc}") from exc
    if not response.ok:
        detail = _error_detail(response)
        status = response.status_code
        logger.warning("%s %s -> %s %s", method, path, status, detail)
        if status in (401, 429) or (path.startswith(AUTH_PREFIX) and 400 <= status < 500):
            raise AuthError(detail, status)
        raise StoreError(detail, status)
    if response.status_code == 204 or not response.content:
        return None
    return response.json()
