"""
Campus Portal

Role-based dashboards for admins, teachers and students: population
breakdowns, grades, attendance, schedules and announcements.
"""

import logging

import streamlit as st

from config.settings import get_settings
from src.data import get_backend
from src.viz.layout import ROLE_PAGES, current_user, render_sidebar

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Campus Portal",
    page_icon="🏫",
    layout="wide",
    initial_sidebar_state="expanded",
)


def _login_form():
    st.subheader("Sign in")
    with st.form("login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if not submitted:
        return
    if not username or not password:
        st.error("Username and password are required.")
        return

    user = get_backend().authenticate(username.strip(), password)
    if user is None:
        st.error("Invalid username or password.")
        return

    logger.info("Signed in %s as %s", user.username, user.role)
    st.session_state.user = user
    st.rerun()


def main():
    st.title("🏫 Campus Portal")

    settings = get_settings()
    if settings.USE_MOCK_API:
        st.caption("Using the built-in demo data. Set USE_MOCK_API=false to use the API backend.")

    user = current_user()
    if user is None:
        _login_form()
        return

    render_sidebar(user)
    st.markdown(f"Welcome, **{user.username}**. Pick a page to get started:")
    for path, label, icon in ROLE_PAGES.get(user.role, []):
        st.page_link(path, label=label, icon=icon)


if __name__ == "__main__":
    main()
