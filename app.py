from datetime import datetime
from zoneinfo import ZoneInfo

import streamlit as st

from mindjournal.auth import get_secret, load_local_env, refresh_session, render_auth_gate
from mindjournal.constants import APP_NAME
from mindjournal.data import api_client
from mindjournal.header import render_global_header
from mindjournal.logging_config import configure_logging
from mindjournal.router import render_router
from mindjournal.state.app_state import get_app_state
from mindjournal.theme import inject_theme_css


load_local_env()
configure_logging()

st.set_page_config(page_title=APP_NAME, page_icon="📔", layout="wide")

state = get_app_state()
api_client.configure(get_secret, lambda: state.session_token)

if state.is_authenticated and not st.session_state.get("mindjournal.bootstrapped"):
    refresh_session(state)
    st.session_state["mindjournal.bootstrapped"] = state.is_authenticated

theme = inject_theme_css(state.settings)
render_auth_gate(state)

context = {
    "state": state,
    "theme": theme,
    "today": datetime.now(ZoneInfo(state.timezone)).date(),
}

render_global_header(context)
render_router(context)
