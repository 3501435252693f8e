"""
Admin Dashboard - headline counts, administrators and recent announcements.
"""

import streamlit as st

from src.data import get_backend
from src.reports.dashboard import admin_directory
from src.viz.layout import require_role

st.set_page_config(
    page_title="Dashboard - Campus Portal",
    page_icon="🏠",
    layout="wide",
)


def main():
    require_role("Admin")
    st.title("🏠 Admin Dashboard")

    backend = get_backend()
    stats = backend.get_dashboard_stats()

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric(label="Students", value=f"{stats.total_students:,}")
        st.page_link("pages/2_student_population.py", label="Population breakdown")
    with col2:
        st.metric(label="Teaching Staff", value=f"{stats.total_teachers:,}")
        st.page_link("pages/3_faculty_population.py", label="Faculty breakdown")
    with col3:
        st.metric(label="Admins", value=f"{stats.total_admins:,}")
        st.caption("Super admin plus administrative faculty")
    with col4:
        st.metric(label="Upcoming Events", value=f"{stats.upcoming_events:,}")

    st.divider()
    st.subheader("Administrators")
    admins = backend.get_admins()
    if admins:
        st.dataframe(admin_directory(admins), hide_index=True, width="stretch")
    else:
        st.info("No administrator accounts found.")

    st.divider()
    st.subheader("Recent Announcements")

    announcements = backend.get_announcements(role="Admin")
    if not announcements:
        st.info("No announcements yet.")
    for a in announcements[:5]:
        with st.container(border=True):
            st.markdown(f"**{a.title}**")
            st.caption(f"{a.date:%B %d, %Y} • {a.author or 'Admin'}")
            st.write(a.content)


main()
