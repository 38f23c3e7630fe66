import streamlit as st

from workdesk.tabs.diary_tab import render_diary_tab
from workdesk.tabs.kanban_tab import render_kanban_tab
from workdesk.tabs.reports_tab import render_reports_tab


TAB_OPTIONS = [
    "Kanban",
    "Diary",
    "Reports",
]


def render_router(ctx):
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )

    if active == "Diary":
        return _render_diary(ctx)

    if active == "Reports":
        return _render_reports(ctx)

    return _render_kanban(ctx)


@st.fragment
def _render_kanban(ctx):
    render_kanban_tab(ctx)


@st.fragment
def _render_diary(ctx):
    render_diary_tab(ctx)


@st.fragment
def _render_reports(ctx):
    render_reports_tab(ctx)
