import logging

import requests
import streamlit as st

from workdesk.columns import checklist_progress, due_badge, project_columns, short_name
from workdesk.constants import (
    ASSIGNEE_ALL,
    ASSIGNEE_UNASSIGNED,
    DUE_BUCKET_LABELS,
    PRIORITIES,
    PRIORITY_BADGES,
    PRIORITY_LABELS,
    STATUS_LABELS,
    STATUSES,
    DueBucket,
    Priority,
    Status,
)
from workdesk.data import loaders, repositories
from workdesk.filters import filter_tasks, has_active_filters
from workdesk.models import TaskDraft
from workdesk.reorder import DragResult, DropPosition
from workdesk.state import session_slices

logger = logging.getLogger(__name__)

MUTATION_ERRORS = (RuntimeError, requests.RequestException)


def _select_board(boards):
    board_ids = [board.id for board in boards]
    names = {board.id: board.name for board in boards}
    current = session_slices.get_value(session_slices.KANBAN, "board_id")
    if current not in board_ids:
        current = board_ids[0]
    selected = st.selectbox(
        "Board",
        board_ids,
        index=board_ids.index(current),
        format_func=lambda board_id: names.get(board_id, board_id),
        key="kanban.board_select",
    )
    session_slices.set_value(session_slices.KANBAN, "board_id", selected)
    return selected


def _assignee_options(users):
    return [ASSIGNEE_ALL, ASSIGNEE_UNASSIGNED] + [user.email for user in users]


def _assignee_label(value, ctx):
    if value == ASSIGNEE_ALL:
        return "All assignees"
    if value == ASSIGNEE_UNASSIGNED:
        return "Unassigned"
    return ctx.user_label(value)


def _clear_filters():
    session_slices.reset_slice(session_slices.KANBAN, ["due_bucket", "assignee"])
    st.session_state.pop("kanban.filter.due", None)
    st.session_state.pop("kanban.filter.assignee", None)


def _render_filters(ctx):
    due_values = [bucket.value for bucket in DueBucket]
    assignee_values = _assignee_options(ctx.users)
    current_due = session_slices.get_value(session_slices.KANBAN, "due_bucket", DueBucket.ALL.value)
    current_assignee = session_slices.get_value(session_slices.KANBAN, "assignee", ASSIGNEE_ALL)
    if current_assignee not in assignee_values:
        current_assignee = ASSIGNEE_ALL

    cols = st.columns([1.2, 1.4, 0.8, 0.8])
    with cols[0]:
        due_bucket = st.selectbox(
            "Due date",
            due_values,
            index=due_values.index(current_due),
            format_func=lambda value: DUE_BUCKET_LABELS[DueBucket(value)],
            key="kanban.filter.due",
        )
    with cols[1]:
        assignee = st.selectbox(
            "Assignee",
            assignee_values,
            index=assignee_values.index(current_assignee),
            format_func=lambda value: _assignee_label(value, ctx),
            key="kanban.filter.assignee",
        )
    session_slices.update_slice(session_slices.KANBAN, {"due_bucket": due_bucket, "assignee": assignee})
    with cols[2]:
        if has_active_filters(due_bucket, assignee):
            st.button("Clear filters", key="kanban.filter.clear", on_click=_clear_filters)
    return due_bucket, assignee, cols[3].empty()


def _card_badges(task, ctx):
    badges = [f"{PRIORITY_BADGES[task.priority]} {PRIORITY_LABELS[task.priority]}"]
    badge = due_badge(task.due_date, ctx.today)
    if badge:
        prefix = "⏰" if badge.overdue else "📅"
        badges.append(f"{prefix} {badge.label}")
    progress = checklist_progress(task.checklist)
    if progress:
        badges.append(f"☑ {progress[0]}/{progress[1]}")
    if task.assignee:
        badges.append(f"👤 {short_name(task.assignee, ctx.users)}")
    return " · ".join(badges)


def _move_task(task, source_index):
    destination_status = st.session_state.get(f"kanban.move.status.{task.id}")
    destination_index = st.session_state.get(f"kanban.move.index.{task.id}")
    destination = None
    if destination_status:
        destination = DropPosition(status=Status(destination_status), index=int(destination_index or 0))
    drag = DragResult(task_id=task.id, source=DropPosition(task.status, source_index), destination=destination)
    try:
        repositories.move_task(drag)
    except MUTATION_ERRORS as exc:
        logger.exception("Failed to move task %s", task.id)
        st.session_state["kanban.error"] = f"Could not move task: {exc}"


def _open_editor(task_id):
    st.session_state["kanban.editing"] = task_id
    st.session_state.pop("kanban.draft", None)


def _render_card(task, index, ctx):
    with st.container(border=True):
        st.markdown(f"**{task.title}**")
        if task.description:
            description = task.description if len(task.description) <= 120 else task.description[:117] + "..."
            st.caption(description)
        st.caption(_card_badges(task, ctx))
        action_cols = st.columns(2)
        with action_cols[0]:
            st.button("Edit", key=f"kanban.edit.{task.id}", on_click=_open_editor, args=(task.id,))
        with action_cols[1]:
            with st.popover("Move"):
                status_values = [status.value for status in STATUSES]
                st.selectbox(
                    "Column",
                    status_values,
                    index=status_values.index(task.status.value),
                    format_func=lambda value: STATUS_LABELS[Status(value)],
                    key=f"kanban.move.status.{task.id}",
                )
                st.number_input("Position", min_value=0, step=1, value=index, key=f"kanban.move.index.{task.id}")
                st.button("Drop here", key=f"kanban.move.go.{task.id}", on_click=_move_task, args=(task, index))


def _sync_draft(draft, today):
    draft.title = st.session_state.get("kanban.form.title", draft.title)
    draft.description = st.session_state.get("kanban.form.description", draft.description)
    draft.status = Status(st.session_state.get("kanban.form.status", draft.status.value))
    draft.priority = Priority(st.session_state.get("kanban.form.priority", draft.priority.value))
    if st.session_state.get("kanban.form.has_due", draft.due_date is not None):
        draft.due_date = st.session_state.get("kanban.form.due") or draft.due_date or today
    else:
        draft.due_date = None
    draft.assignee = st.session_state.get("kanban.form.assignee", draft.assignee or "") or None


def _close_editor():
    for key in list(st.session_state.keys()):
        if str(key).startswith("kanban.form.") or key in {"kanban.draft", "kanban.editing"}:
            del st.session_state[key]


def _render_task_form(board_id, tasks, ctx):
    editing = st.session_state.get("kanban.editing")
    task = next((item for item in tasks if item.id == editing), None)
    if "kanban.draft" not in st.session_state:
        st.session_state["kanban.draft"] = TaskDraft.from_task(task) if task else TaskDraft()
    draft = st.session_state["kanban.draft"]

    st.markdown(f"<div class='section-title'>{'Edit task' if task else 'New task'}</div>", unsafe_allow_html=True)
    st.text_input("Title", value=draft.title, key="kanban.form.title")
    st.text_area("Description", value=draft.description, key="kanban.form.description")
    form_cols = st.columns(3)
    status_values = [status.value for status in STATUSES]
    priority_values = [priority.value for priority in PRIORITIES]
    with form_cols[0]:
        st.selectbox(
            "Status",
            status_values,
            index=status_values.index(draft.status.value),
            format_func=lambda value: STATUS_LABELS[Status(value)],
            key="kanban.form.status",
        )
    with form_cols[1]:
        st.selectbox(
            "Priority",
            priority_values,
            index=priority_values.index(draft.priority.value),
            format_func=lambda value: PRIORITY_LABELS[Priority(value)],
            key="kanban.form.priority",
        )
    with form_cols[2]:
        assignee_values = [""] + [user.email for user in ctx.users]
        if draft.assignee and draft.assignee not in assignee_values:
            assignee_values.append(draft.assignee)
        st.selectbox(
            "Assignee",
            assignee_values,
            index=assignee_values.index(draft.assignee or ""),
            format_func=lambda value: ctx.user_label(value) if value else "Unassigned",
            key="kanban.form.assignee",
        )
    has_due = st.checkbox("Has due date", value=draft.due_date is not None, key="kanban.form.has_due")
    if has_due:
        st.date_input("Due date", value=draft.due_date or ctx.today, key="kanban.form.due", format="DD/MM/YYYY")
    _sync_draft(draft, ctx.today)

    st.markdown("<div class='small-label'>Checklist</div>", unsafe_allow_html=True)
    for index, item in enumerate(list(draft.checklist)):
        item_cols = st.columns([0.1, 0.8, 0.1])
        with item_cols[0]:
            st.checkbox(
                "done",
                value=item.done,
                key=f"kanban.form.check.{index}.{item.text}",
                label_visibility="collapsed",
                on_change=draft.toggle_checklist_item,
                args=(index,),
            )
        with item_cols[1]:
            st.write(item.text)
        with item_cols[2]:
            st.button("✕", key=f"kanban.form.check.remove.{index}", on_click=draft.remove_checklist_item, args=(index,))
    add_cols = st.columns([0.8, 0.2])
    with add_cols[0]:
        st.text_input("New item", key="kanban.form.new_item", label_visibility="collapsed", placeholder="Add item...")
    with add_cols[1]:
        if st.button("Add", key="kanban.form.add_item"):
            if draft.add_checklist_item(st.session_state.get("kanban.form.new_item", "")):
                st.session_state.pop("kanban.form.new_item", None)
                st.rerun()

    button_cols = st.columns([0.2, 0.2, 0.6])
    with button_cols[0]:
        save_clicked = st.button("Save", key="kanban.form.save", type="primary", disabled=not draft.is_submittable())
    with button_cols[1]:
        cancel_clicked = st.button("Cancel", key="kanban.form.cancel")
    with button_cols[2]:
        delete_clicked = bool(task) and st.button("Delete task", key="kanban.form.delete")

    if cancel_clicked:
        _close_editor()
        st.rerun()
    if save_clicked:
        try:
            repositories.save_task(draft, board_id, task)
        except MUTATION_ERRORS as exc:
            logger.exception("Failed to save task")
            st.error(f"Could not save task: {exc}")
            return
        _close_editor()
        st.rerun()
    if delete_clicked:
        try:
            repositories.delete_task(task.id)
        except MUTATION_ERRORS as exc:
            logger.exception("Failed to delete task %s", task.id)
            st.error(f"Could not delete task: {exc}")
            return
        _close_editor()
        st.rerun()


def render_kanban_tab(ctx):
    st.markdown("<div class='section-title'>Kanban</div>", unsafe_allow_html=True)
    try:
        boards = loaders.load_boards()
    except MUTATION_ERRORS as exc:
        logger.exception("Failed to load boards")
        st.error(f"Could not load boards: {exc}")
        return
    if not boards:
        st.info("Create a board to get started.")
        return

    header_cols = st.columns([0.7, 0.3])
    with header_cols[0]:
        board_id = _select_board(boards)
    with header_cols[1]:
        st.button("New task", key="kanban.new", on_click=_open_editor, args=("new",))

    try:
        tasks = loaders.load_tasks(board_id)
    except MUTATION_ERRORS as exc:
        logger.exception("Failed to load tasks for board %s", board_id)
        st.error(f"Could not load tasks: {exc}")
        return

    error = st.session_state.pop("kanban.error", None)
    if error:
        st.error(error)

    if st.session_state.get("kanban.editing"):
        with st.container(border=True):
            _render_task_form(board_id, tasks, ctx)

    due_bucket, assignee, count_slot = _render_filters(ctx)
    visible = filter_tasks(tasks, due_bucket, assignee, today=ctx.today)
    count_slot.caption(f"{len(visible)} {'task' if len(visible) == 1 else 'tasks'}")

    columns = project_columns(visible)
    column_widgets = st.columns(len(STATUSES))
    for widget, status in zip(column_widgets, STATUSES):
        with widget:
            column_tasks = columns[status]
            st.markdown(f"**{STATUS_LABELS[status]}** `{len(column_tasks)}`")
            for index, task in enumerate(column_tasks):
                _render_card(task, index, ctx)
