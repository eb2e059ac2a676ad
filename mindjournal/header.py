import streamlit as st

from mindjournal.constants import APP_NAME


def render_global_header(ctx):
    state = ctx["state"]
    user = state.user or {}
    name = user.get("full_name") or user.get("email") or ""
    st.markdown("<div class='sticky-header-wrap'>", unsafe_allow_html=True)
    st.markdown(f"<h2 class='page-title'>{APP_NAME}</h2>", unsafe_allow_html=True)
    st.markdown(
        f"<div class='small-label'>{name} • {ctx['today'].isoformat()} • {state.timezone}</div>",
        unsafe_allow_html=True,
    )
    st.markdown("</div>", unsafe_allow_html=True)
