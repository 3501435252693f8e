"""Announcements Page - posts addressed to the signed-in user."""

import streamlit as st

from src.data import get_backend
from src.reports.dashboard import announcements_for
from src.viz.layout import require_role

st.set_page_config(
    page_title="Announcements | Campus Portal",
    page_icon="📣",
    layout="wide",
)

user = require_role("Student", "Teacher")

st.title("📣 Announcements")

backend = get_backend()
announcements = backend.get_announcements(role=user.role)

if user.role == "Student":
    student = next((s for s in backend.get_students() if s.id == user.user_id), None)
    if student is not None:
        announcements = announcements_for(announcements, student.course, student.year, student.section)

if not announcements:
    st.info("No announcements for you right now.")
    st.stop()

for a in announcements:
    with st.container(border=True):
        st.markdown(f"### {a.title}")
        st.caption(f"{a.date:%B %d, %Y} • {a.author or 'Admin'}")
        st.write(a.content)
