import logging

import pandas as pd
import requests
import streamlit as st

from workdesk.constants import ASSIGNEE_ALL, STATUS_LABELS, STATUSES
from workdesk.data import loaders
from workdesk.export import CSV_MIME, detailed_rows, export_filename, to_csv
from workdesk.metrics import board_performance, status_percentages, tasks_for_board, user_report
from workdesk.state import session_slices
from workdesk.visualizations import status_distribution_chart

logger = logging.getLogger(__name__)


def _download(label, kind, payload, today, key, assignee=ASSIGNEE_ALL):
    st.download_button(
        label,
        data=to_csv(kind, payload, assignee=assignee).encode("utf-8"),
        file_name=export_filename(kind, today),
        mime=CSV_MIME,
        key=key,
    )


def _render_user_report(report, today):
    st.markdown("<div class='small-label'>Progress by user</div>", unsafe_allow_html=True)
    cols = st.columns(4)
    cols[0].metric("Total tasks", report.total)
    cols[1].metric("Completed", report.completed)
    cols[2].metric("In progress", report.in_progress)
    cols[3].metric("Completion rate", f"{report.completion_rate}%")
    cols = st.columns(4)
    cols[0].metric("Pending", report.pending)
    cols[1].metric("In review", report.review)
    cols[2].metric("Overdue", report.overdue)
    st.progress(report.completion_rate / 100)
    _download("Export CSV", "user", report, today, "reports.export.user")


def _render_board_performance(performance, today):
    st.markdown("<div class='small-label'>Board performance</div>", unsafe_allow_html=True)
    percentages = status_percentages(performance)
    for status in STATUSES:
        label = STATUS_LABELS[status]
        if status in performance.bottlenecks:
            label = f"{label} · bottleneck"
        st.caption(f"{label}: {performance.status_counts[status]} ({percentages[status]}%)")
    st.plotly_chart(status_distribution_chart(performance), use_container_width=True)
    cols = st.columns(2)
    cols[0].metric("Total tasks", performance.total_tasks)
    cols[1].metric("Average completion time", f"{performance.avg_completion_days} days")
    if performance.bottlenecks:
        names = ", ".join(STATUS_LABELS[status] for status in performance.bottlenecks)
        st.warning(f"Bottlenecks identified: {names}")
    _download("Export CSV", "board", performance, today, "reports.export.board")


def render_reports_tab(ctx):
    st.markdown("<div class='section-title'>Reports</div>", unsafe_allow_html=True)
    try:
        boards = loaders.load_boards()
    except (RuntimeError, requests.RequestException) as exc:
        logger.exception("Failed to load boards")
        st.error(f"Could not load boards: {exc}")
        return
    if not boards:
        st.info("No boards yet.")
        return

    board_ids = [board.id for board in boards]
    names = {board.id: board.name for board in boards}
    current_board = session_slices.get_value(session_slices.REPORTS, "board_id")
    if current_board not in board_ids:
        current_board = board_ids[0]
    assignee_values = [ASSIGNEE_ALL] + [user.email for user in ctx.users]
    current_assignee = session_slices.get_value(session_slices.REPORTS, "assignee", ASSIGNEE_ALL)
    if current_assignee not in assignee_values:
        current_assignee = ASSIGNEE_ALL

    filter_cols = st.columns(2)
    with filter_cols[0]:
        board_id = st.selectbox(
            "Board",
            board_ids,
            index=board_ids.index(current_board),
            format_func=lambda value: names.get(value, value),
            key="reports.board",
        )
    with filter_cols[1]:
        assignee = st.selectbox(
            "User",
            assignee_values,
            index=assignee_values.index(current_assignee),
            format_func=lambda value: "All users" if value == ASSIGNEE_ALL else ctx.user_label(value),
            key="reports.assignee",
        )
    session_slices.update_slice(session_slices.REPORTS, {"board_id": board_id, "assignee": assignee})

    try:
        board_tasks = tasks_for_board(loaders.load_tasks(board_id), board_id)
    except (RuntimeError, requests.RequestException) as exc:
        logger.exception("Failed to load tasks for board %s", board_id)
        st.error(f"Could not load tasks: {exc}")
        return

    report = user_report(board_tasks, assignee)
    performance = board_performance(board_tasks)

    layout = st.columns(2)
    with layout[0]:
        with st.container(border=True):
            _render_user_report(report, ctx.today)
    with layout[1]:
        with st.container(border=True):
            _render_board_performance(performance, ctx.today)

    st.markdown("<div class='small-label'>Detailed export</div>", unsafe_allow_html=True)
    st.caption("Every task with title, status, priority, assignee and dates.")
    selected = board_tasks if assignee == ASSIGNEE_ALL else [task for task in board_tasks if task.assignee == assignee]
    rows = detailed_rows(selected)
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    _download(
        "Export full report (CSV)",
        "detailed",
        board_tasks,
        ctx.today,
        "reports.export.detailed",
        assignee=assignee,
    )
