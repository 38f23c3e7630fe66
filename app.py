import logging
import os

import requests
import streamlit as st

from workdesk.clock import local_today
from workdesk.context import DashboardContext
from workdesk.data import api_client, loaders, repositories
from workdesk.logging_config import configure_logging
from workdesk.router import render_router

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "API_KEY"): "API_KEY",
}

PAGE_CSS = """
<style>
.section-title { font-size: 1.6rem; font-weight: 700; margin: 0.4rem 0 0.8rem 0; }
.small-label { font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.06em; opacity: 0.7; }
</style>
"""

logger = logging.getLogger("workdesk.app")


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except FileNotFoundError:
        return default
    return current


def main():
    configure_logging()
    st.set_page_config(page_title="Workdesk", page_icon="🗂️", layout="wide")
    st.markdown(PAGE_CSS, unsafe_allow_html=True)

    api_client.configure(get_secret)
    repositories.configure(invalidate_callback=loaders.clear_caches)

    if not repositories.api_enabled():
        st.error("API_BASE_URL and API_KEY must be configured to load your workspace.")
        st.stop()

    try:
        users = loaders.load_users()
    except (RuntimeError, requests.RequestException) as exc:
        logger.warning("User directory unavailable: %s", exc)
        users = []
        st.warning("User directory unavailable, assignees are shown by id.")

    ctx = DashboardContext(today=local_today(), users=users)
    render_router(ctx)


main()
