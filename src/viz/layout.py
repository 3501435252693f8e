"""Shared Streamlit page helpers: sign-in state and role navigation."""

import streamlit as st

_FLASH_KEY = "flash_message"

# Pages each role may open, in sidebar order
ROLE_PAGES = {
    "Admin": [
        ("pages/1_admin_dashboard.py", "Dashboard", "🏠"),
        ("pages/2_student_population.py", "Student Population", "🎓"),
        ("pages/3_faculty_population.py", "Faculty Population", "🏢"),
        ("pages/7_manage_records.py", "Manage Records", "🗂️"),
    ],
    "Teacher": [
        ("pages/4_grades.py", "Grades", "📝"),
        ("pages/6_schedule.py", "Schedule", "📅"),
        ("pages/8_announcements.py", "Announcements", "📣"),
    ],
    "Student": [
        ("pages/4_grades.py", "Grades", "📝"),
        ("pages/5_attendance.py", "Attendance", "✅"),
        ("pages/6_schedule.py", "Schedule", "📅"),
        ("pages/8_announcements.py", "Announcements", "📣"),
    ],
}


def current_user():
    """The LoginResult stored at sign-in, or None."""
    return st.session_state.get("user")


def require_role(*roles: str):
    """Stop the page unless someone with one of the roles is signed in."""
    user = current_user()
    if user is None:
        st.warning("Please sign in on the home page first.")
        st.stop()
    if roles and user.role not in roles:
        st.error(f"This page is only available to: {', '.join(roles)}.")
        st.stop()
    render_sidebar(user)
    return user


def render_sidebar(user) -> None:
    st.sidebar.markdown(f"Signed in as **{user.username}** ({user.role})")
    for path, label, icon in ROLE_PAGES.get(user.role, []):
        st.sidebar.page_link(path, label=label, icon=icon)
    if st.sidebar.button("Sign out"):
        st.session_state.pop("user", None)
        st.rerun()


def flash(message: str) -> None:
    """Keep a success message for the next run; st.rerun() clears the current one."""
    st.session_state[_FLASH_KEY] = message


def show_flash() -> None:
    message = st.session_state.pop(_FLASH_KEY, None)
    if message:
        st.success(message)
