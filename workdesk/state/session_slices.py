import streamlit as st

from workdesk.constants import ASSIGNEE_ALL, CATEGORY_ALL, DiaryWindow, DueBucket

PREFIX = "slice"

KANBAN = "kanban"
DIARY = "diary"
REPORTS = "reports"

SLICE_DEFAULTS = {
    KANBAN: {"due_bucket": DueBucket.ALL.value, "assignee": ASSIGNEE_ALL, "board_id": None},
    DIARY: {"category": CATEGORY_ALL, "window": DiaryWindow.ALL.value},
    REPORTS: {"assignee": ASSIGNEE_ALL, "board_id": None},
}


def slice_key(slice_name):
    return f"{PREFIX}.{slice_name}"


def get_slice(slice_name):
    key = slice_key(slice_name)
    if key not in st.session_state:
        st.session_state[key] = dict(SLICE_DEFAULTS.get(slice_name, {}))
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    return get_slice(slice_name).get(name, default)


def set_value(slice_name, name, value):
    get_slice(slice_name)[name] = value


def update_slice(slice_name, values):
    get_slice(slice_name).update(values)


def reset_slice(slice_name, names=None):
    defaults = SLICE_DEFAULTS.get(slice_name, {})
    payload = get_slice(slice_name)
    for name in names or list(defaults):
        payload[name] = defaults.get(name)
