"""
Manage Records - add students, faculty and sections, and post announcements.

Only available with the built-in demo data; the API backend has its own
admin screens.
"""

import streamlit as st

from config.settings import get_settings
from src.data import get_backend
from src.viz.layout import require_role

st.set_page_config(
    page_title="Manage Records - Campus Portal",
    page_icon="🗂️",
    layout="wide",
)


def _add_student(backend, programs):
    settings = get_settings()
    with st.form("add_student", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("First name")
            program = st.selectbox("Program", options=programs, format_func=lambda p: p.name)
        with col2:
            last_name = st.text_input("Last name")
            year = st.selectbox("Year level", options=settings.YEAR_LEVELS)
        email = st.text_input("Email (optional)")
        submitted = st.form_submit_button("Add student")

    if submitted:
        try:
            student = backend.create_student(
                first_name.strip(),
                last_name.strip(),
                course=program.id if program else "",
                year=year,
                email=email or None,
            )
        except ValueError as e:
            st.error(str(e))
            return
        st.success(
            f"Added {student.full_name}: ID {student.student_id}, "
            f"username {student.username}, section {student.section}."
        )


def _add_faculty(backend):
    settings = get_settings()
    with st.form("add_faculty", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("First name")
            department = st.selectbox("Department", options=settings.DEPARTMENTS)
        with col2:
            last_name = st.text_input("Last name")
            employment_type = st.selectbox("Employment type", options=settings.EMPLOYMENT_TYPES)
        submitted = st.form_submit_button("Add faculty")

    if submitted:
        try:
            faculty = backend.create_faculty(
                first_name.strip(),
                last_name.strip(),
                department=department,
                employment_type=employment_type,
            )
        except ValueError as e:
            st.error(str(e))
            return
        st.success(f"Added {faculty.full_name}: ID {faculty.teacher_id}, username {faculty.username}.")


def _add_section(backend, programs):
    settings = get_settings()
    with st.form("add_section"):
        program = st.selectbox("Program", options=programs, format_func=lambda p: p.name, key="section_program")
        year = st.selectbox("Year level", options=settings.YEAR_LEVELS, key="section_year")
        submitted = st.form_submit_button("Open section")

    if submitted:
        try:
            section = backend.create_section(program.id, year)
        except (LookupError, ValueError) as e:
            st.error(str(e))
            return
        st.success(f"Opened section {section.section_code} ({section.program_name}, {section.year_level}).")

    st.dataframe(
        [
            {
                "Section": s.section_code,
                "Program": s.program_name,
                "Year Level": s.year_level,
                "Adviser": s.adviser_name or "",
                "Students": s.student_count,
            }
            for s in backend.get_sections()
        ],
        hide_index=True,
        width="stretch",
    )


def _post_announcement(backend, programs):
    settings = get_settings()
    with st.form("post_announcement", clear_on_submit=True):
        title = st.text_input("Title")
        content = st.text_area("Content")
        col1, col2 = st.columns(2)
        with col1:
            course = st.selectbox("Program", options=["all"] + [p.id for p in programs])
        with col2:
            year = st.selectbox("Year level", options=["all"] + settings.YEAR_LEVELS)
        submitted = st.form_submit_button("Post")

    if submitted:
        try:
            backend.post_announcement(title, content, target_course=course, target_year_level=year)
        except ValueError as e:
            st.error(str(e))
            return
        st.success("Announcement posted.")


def main():
    require_role("Admin")
    st.title("🗂️ Manage Records")

    backend = get_backend()
    if not hasattr(backend, "create_student"):
        st.info("Record management is only available with the built-in demo data.")
        return

    programs = backend.get_programs()
    students_tab, faculty_tab, sections_tab, announcements_tab = st.tabs(
        ["Students", "Faculty", "Sections", "Announcements"]
    )
    with students_tab:
        _add_student(backend, programs)
    with faculty_tab:
        _add_faculty(backend)
    with sections_tab:
        _add_section(backend, programs)
    with announcements_tab:
        _post_announcement(backend, programs)


main()
