"""Signed-in user, session and preferences shared by every view.

Views get the ``AppState`` passed in explicitly and may subscribe to be told
when it changes. Inside Streamlit one instance lives in ``st.session_state``
for the browser session.
"""
import logging

from mindjournal.constants import DEFAULT_USER_SETTINGS

logger = logging.getLogger(__name__)

STATE_KEY = "mindjournal.app_state"


class AppState:
    def __init__(self):
        self.user = None
        self.session_token = None
        self.settings = dict(DEFAULT_USER_SETTINGS)
        self.loading = False
        self._subscribers = []

    @property
    def is_authenticated(self):
        return bool(self.user and self.session_token)

    @property
    def language(self):
        return self.settings.get("language") or DEFAULT_USER_SETTINGS["language"]

    @property
    def timezone(self):
        return self.settings.get("timezone") or DEFAULT_USER_SETTINGS["timezone"]

    def subscribe(self, callback):
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, change):
        for callback in list(self._subscribers):
            try:
                callback(self, change)
            except Exception:
                logger.exception("State subscriber failed on %s", change)

    def set_session(self, user, session_token):
        self.user = dict(user) if user else None
        self.session_token = session_token
        self._notify("session")

    def set_user(self, user):
        self.user = dict(user) if user else None
        self._notify("session")

    def set_settings(self, settings):
        merged = dict(DEFAULT_USER_SETTINGS)
        merged.update({key: value for key, value in (settings or {}).items() if value is not None})
        self.settings = merged
        self._notify("settings")

    def set_loading(self, loading):
        self.loading = bool(loading)
        self._notify("loading")

    def clear(self):
        self.user = None
        self.session_token = None
        self.settings = dict(DEFAULT_USER_SETTINGS)
        self.loading = False
        self._notify("clear")


def get_app_state():
    import streamlit as st

    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = AppState()
    return st.session_state[STATE_KEY]
