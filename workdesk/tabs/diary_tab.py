import logging

import requests
import streamlit as st

from workdesk.constants import (
    CATEGORY_ALL,
    CATEGORY_ICONS,
    DEFAULT_CATEGORY_ICON,
    DEFAULT_DIARY_CATEGORY,
    DIARY_WINDOW_LABELS,
    DiaryWindow,
)
from workdesk.data import loaders, repositories
from workdesk.diary import category_icon, days_with_entries, entries_on_day, filter_entries
from workdesk.models import DiaryDraft
from workdesk.state import session_slices

logger = logging.getLogger(__name__)

MUTATION_ERRORS = (RuntimeError, requests.RequestException)


def _open_editor(entry_id):
    st.session_state["diary.editing"] = entry_id
    st.session_state.pop("diary.draft", None)


def _close_editor():
    for key in list(st.session_state.keys()):
        if str(key).startswith("diary.form.") or key in {"diary.draft", "diary.editing"}:
            del st.session_state[key]


def _delete_entry(entry_id):
    try:
        repositories.delete_diary_entry(entry_id)
    except MUTATION_ERRORS as exc:
        logger.exception("Failed to delete diary entry %s", entry_id)
        st.session_state["diary.error"] = f"Could not delete entry: {exc}"


def _render_category_creator(draft):
    with st.popover("New category"):
        st.text_input("Name", key="diary.form.category_name")
        icon_names = list(CATEGORY_ICONS)
        st.selectbox(
            "Icon",
            icon_names,
            index=icon_names.index(DEFAULT_CATEGORY_ICON),
            format_func=lambda name: f"{CATEGORY_ICONS[name]} {name}",
            key="diary.form.category_icon",
        )
        name = (st.session_state.get("diary.form.category_name") or "").strip()
        if st.button("Create", key="diary.form.category_create", disabled=not name):
            try:
                category = repositories.create_diary_category(
                    name,
                    st.session_state.get("diary.form.category_icon", DEFAULT_CATEGORY_ICON),
                )
            except MUTATION_ERRORS as exc:
                logger.exception("Failed to create diary category")
                st.error(f"Could not create category: {exc}")
                return
            if category:
                draft.category = category.name
                st.session_state.pop("diary.form.category", None)
                st.session_state.pop("diary.form.category_name", None)
                st.rerun()


def _render_editor(entries, categories):
    editing = st.session_state.get("diary.editing")
    entry = next((item for item in entries if item.id == editing), None)
    if "diary.draft" not in st.session_state:
        st.session_state["diary.draft"] = DiaryDraft.from_entry(entry) if entry else DiaryDraft()
    draft = st.session_state["diary.draft"]

    st.markdown(f"<div class='section-title'>{'Edit entry' if entry else 'New entry'}</div>", unsafe_allow_html=True)
    draft.title = st.text_input("Title", value=draft.title, key="diary.form.title")
    draft.content = st.text_area("Content", value=draft.content, height=220, key="diary.form.content")

    category_names = [category.name for category in categories] or [DEFAULT_DIARY_CATEGORY]
    if draft.category not in category_names:
        category_names.append(draft.category)
    cols = st.columns([0.5, 0.25, 0.25])
    with cols[0]:
        draft.category = st.selectbox(
            "Category",
            category_names,
            index=category_names.index(draft.category),
            format_func=lambda name: f"{category_icon(name, categories)} {name}",
            key="diary.form.category",
        )
    with cols[1]:
        _render_category_creator(draft)
    with cols[2]:
        draft.favorite = st.checkbox("Favorite", value=draft.favorite, key="diary.form.favorite")

    tag_cols = st.columns([0.8, 0.2])
    with tag_cols[0]:
        st.text_input("Tag", key="diary.form.tag", label_visibility="collapsed", placeholder="Add tag...")
    with tag_cols[1]:
        if st.button("Add tag", key="diary.form.tag_add"):
            if draft.add_tag(st.session_state.get("diary.form.tag", "")):
                st.session_state.pop("diary.form.tag", None)
                st.rerun()
    if draft.tags:
        tag_buttons = st.columns(len(draft.tags))
        for widget, tag in zip(tag_buttons, list(draft.tags)):
            widget.button(f"#{tag} ✕", key=f"diary.form.tag_remove.{tag}", on_click=draft.remove_tag, args=(tag,))

    button_cols = st.columns([0.2, 0.2, 0.6])
    with button_cols[0]:
        save_clicked = st.button("Save", key="diary.form.save", type="primary", disabled=not draft.is_submittable())
    with button_cols[1]:
        cancel_clicked = st.button("Cancel", key="diary.form.cancel")

    if cancel_clicked:
        _close_editor()
        st.rerun()
    if save_clicked:
        try:
            repositories.save_diary_entry(draft, entry)
        except MUTATION_ERRORS as exc:
            logger.exception("Failed to save diary entry")
            st.error(f"Could not save entry: {exc}")
            return
        _close_editor()
        st.rerun()


def _render_entry(entry, categories):
    with st.container(border=True):
        star = " ⭐" if entry.favorite else ""
        st.markdown(f"**{entry.title}**{star}")
        created = entry.created_at.strftime("%d/%m/%Y %H:%M") if entry.created_at else ""
        st.caption(f"{category_icon(entry.category, categories)} {entry.category} · {created}")
        st.write(entry.content)
        if entry.tags:
            st.caption(" ".join(f"#{tag}" for tag in entry.tags))
        cols = st.columns([0.15, 0.15, 0.7])
        cols[0].button("Edit", key=f"diary.edit.{entry.id}", on_click=_open_editor, args=(entry.id,))
        with cols[1]:
            with st.popover("Delete"):
                st.write("Delete this entry?")
                st.button("Confirm", key=f"diary.delete.{entry.id}", on_click=_delete_entry, args=(entry.id,))


def render_diary_tab(ctx):
    st.markdown("<div class='section-title'>Diary</div>", unsafe_allow_html=True)
    try:
        entries = loaders.load_diary_entries()
        categories = loaders.load_diary_categories()
    except MUTATION_ERRORS as exc:
        logger.exception("Failed to load diary")
        st.error(f"Could not load diary: {exc}")
        return

    error = st.session_state.pop("diary.error", None)
    if error:
        st.error(error)

    st.button("New entry", key="diary.new", on_click=_open_editor, args=("new",))
    if st.session_state.get("diary.editing"):
        with st.container(border=True):
            _render_editor(entries, categories)

    category_values = [CATEGORY_ALL] + [category.name for category in categories]
    window_values = [window.value for window in DiaryWindow]
    current_category = session_slices.get_value(session_slices.DIARY, "category", CATEGORY_ALL)
    if current_category not in category_values:
        current_category = CATEGORY_ALL
    current_window = session_slices.get_value(session_slices.DIARY, "window", DiaryWindow.ALL.value)

    cols = st.columns([1, 1, 1])
    with cols[0]:
        category = st.selectbox(
            "Category",
            category_values,
            index=category_values.index(current_category),
            format_func=lambda value: "All categories" if value == CATEGORY_ALL else value,
            key="diary.filter.category",
        )
    with cols[1]:
        window = st.selectbox(
            "Period",
            window_values,
            index=window_values.index(current_window),
            format_func=lambda value: DIARY_WINDOW_LABELS[DiaryWindow(value)],
            key="diary.filter.window",
        )
    with cols[2]:
        selected_day = st.date_input("Day", value=ctx.today, key="diary.day", format="DD/MM/YYYY")
    session_slices.update_slice(session_slices.DIARY, {"category": category, "window": window})

    filtered = filter_entries(entries, category, window)
    noun = "entry" if len(filtered) == 1 else "entries"
    st.caption(f"{len(filtered)} {noun}")
    highlighted = days_with_entries(filtered)
    if highlighted:
        st.caption("Days with entries: " + ", ".join(day.strftime("%d/%m") for day in highlighted[-14:]))

    day_entries = entries_on_day(filtered, selected_day)
    if not day_entries:
        st.info("No entries for this day.")
    for entry in day_entries:
        _render_entry(entry, categories)
