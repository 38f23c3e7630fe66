import streamlit as st

from workdesk.data import api_client, repositories


@st.cache_data(ttl=300, show_spinner=False)
def load_boards_cached(api_base):
    return repositories.list_boards()


@st.cache_data(ttl=300, show_spinner=False)
def load_users_cached(api_base):
    return repositories.list_users()


@st.cache_data(ttl=60, show_spinner=False)
def load_tasks_cached(api_base, board_id):
    return repositories.list_tasks(board_id)


@st.cache_data(ttl=60, show_spinner=False)
def load_diary_entries_cached(api_base):
    return repositories.list_diary_entries()


@st.cache_data(ttl=300, show_spinner=False)
def load_diary_categories_cached(api_base):
    return repositories.list_diary_categories()


def load_boards():
    return load_boards_cached(api_client.api_base_url())


def load_users():
    return load_users_cached(api_client.api_base_url())


def load_tasks(board_id):
    if not board_id:
        return []
    return load_tasks_cached(api_client.api_base_url(), board_id)


def load_diary_entries():
    return load_diary_entries_cached(api_client.api_base_url())


def load_diary_categories():
    return load_diary_categories_cached(api_client.api_base_url())


def clear_caches():
    load_tasks_cached.clear()
    load_boards_cached.clear()
    load_users_cached.clear()
    load_diary_entries_cached.clear()
    load_diary_categories_cached.clear()
