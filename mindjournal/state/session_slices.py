"""Component-local UI state (open menus, pending delete confirmations).

Each component owns a named slice in ``st.session_state``; nothing here is
shared across views.
"""
import streamlit as st


PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.get(name, default)


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def clear_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key in st.session_state:
        del st.session_state[key]


def toggle_menu(slice_name, item_id):
    current = get_value(slice_name, "open_menu")
    set_value(slice_name, "open_menu", None if current == item_id else item_id)


def is_menu_open(slice_name, item_id):
    return get_value(slice_name, "open_menu") == item_id


def request_delete(slice_name, item_id):
    set_value(slice_name, "confirm_delete", item_id)


def pending_delete(slice_name):
    return get_value(slice_name, "confirm_delete")


def cancel_delete(slice_name):
    set_value(slice_name, "confirm_delete", None)
