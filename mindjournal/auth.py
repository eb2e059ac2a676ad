from __future__ import annotations

import logging
import os

import streamlit as st

from mindjournal.constants import APP_NAME
from mindjournal.data import api_client, repositories
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.validation import validate_sign_in, validate_sign_up

logger = logging.getLogger(__name__)

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "API_KEY"): "API_KEY",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except (FileNotFoundError, KeyError, TypeError):
        return default
    return current


def _show_errors(result):
    for err in result.errors:
        st.error(err.message)


def _finish_sign_in(state, session):
    state.set_session(session["user"], session["access_token"])
    try:
        payload = repositories.bootstrap()
    except (AuthError, StoreError) as exc:
        logger.warning("Bootstrap after sign-in failed: %s", exc)
        return
    state.set_settings(payload.get("settings"))


def refresh_session(state):
    """Reload user and settings for a stored session; clears it if rejected."""
    if not state.session_token:
        return
    try:
        payload = repositories.bootstrap()
    except AuthError:
        logger.info("Stored session rejected, signing out locally")
        state.clear()
        return
    state.set_user(payload.get("user"))
    state.set_settings(payload.get("settings"))


def _render_sign_in(state, language):
    with st.form("sign_in_form"):
        email = st.text_input(t("email", language), key="sign_in.email")
        password = st.text_input(t("password", language), type="password", key="sign_in.password")
        submitted = st.form_submit_button(t("sign_in", language), use_container_width=True)
    if not submitted:
        return
    result = validate_sign_in(email, password, language)
    if not result.ok:
        _show_errors(result)
        return
    state.set_loading(True)
    try:
        session = repositories.sign_in(result.data["email"], result.data["password"])
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    finally:
        state.set_loading(False)
    _finish_sign_in(state, session)
    st.rerun()


def _render_sign_up(state, language):
    with st.form("sign_up_form"):
        full_name = st.text_input(t("full_name", language), key="sign_up.full_name")
        email = st.text_input(t("email", language), key="sign_up.email")
        password = st.text_input(t("password", language), type="password", key="sign_up.password")
        confirm = st.text_input(t("confirm_password", language), type="password", key="sign_up.confirm")
        submitted = st.form_submit_button(t("sign_up", language), use_container_width=True)
    if submitted:
        result = validate_sign_up(full_name, email, password, confirm, language)
        if not result.ok:
            _show_errors(result)
            return
        state.set_loading(True)
        try:
            session = repositories.sign_up(result.data["email"], result.data["password"], result.data["full_name"])
        except (AuthError, StoreError) as exc:
            st.error(user_message(exc, language))
            return
        finally:
            state.set_loading(False)
        if session.get("access_token"):
            _finish_sign_in(state, session)
            st.rerun()
        st.session_state["sign_up.pending_email"] = result.data["email"]
        st.info(t("confirmation_sent", language))
        if session.get("confirmation_token"):
            st.code(session["confirmation_token"])

    pending_email = st.session_state.get("sign_up.pending_email")
    if pending_email:
        code = st.text_input(t("confirmation_code", language), key="sign_up.code")
        if st.button(t("confirm", language), key="sign_up.confirm_btn"):
            try:
                session = repositories.confirm_email(pending_email, code.strip())
            except (AuthError, StoreError) as exc:
                st.error(user_message(exc, language))
                return
            st.session_state.pop("sign_up.pending_email", None)
            _finish_sign_in(state, session)
            st.rerun()


def render_auth_gate(state):
    """Show sign-in/sign-up until a session exists; stops the script run otherwise."""
    if state.is_authenticated:
        return
    language = state.language
    st.markdown(f"<div class='section-title'>{APP_NAME}</div>", unsafe_allow_html=True)
    st.caption(t("tagline", language))
    if not api_client.is_enabled():
        st.warning(t("not_connected", language))
        st.code('API_BASE_URL = "http://localhost:8000"\nAPI_KEY = "YOUR_BACKEND_API_KEY"', language="toml")
        st.stop()
    sign_in_tab, sign_up_tab = st.tabs([t("sign_in", language), t("sign_up", language)])
    with sign_in_tab:
        _render_sign_in(state, language)
    with sign_up_tab:
        _render_sign_up(state, language)
    st.stop()


def sign_out(state):
    try:
        repositories.sign_out()
    except (AuthError, StoreError) as exc:
        logger.warning("Sign-out request failed: %s", exc)
    state.clear()
