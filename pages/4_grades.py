"""
Grades Page - students see their term grades, teachers review and enter them.
"""

import pandas as pd
import streamlit as st

from config.settings import get_settings
from src.data import get_backend
from src.reports.status import COMPLETE, InvalidScoreError, grade_remark
from src.viz.charts import create_grade_status_chart, create_term_grades_chart, result_color
from src.viz.layout import flash, require_role, show_flash

st.set_page_config(
    page_title="Grades - Campus Portal",
    page_icon="📝",
    layout="wide",
)


def _grades_frame(records, include_student: bool) -> pd.DataFrame:
    settings = get_settings()
    rows = []
    for r in records:
        row = {}
        if include_student:
            row["Student"] = r.student_name
            row["Section"] = r.section
        row["Subject"] = r.subject_name
        for term, score in zip(settings.TERMS, r.scores):
            row[term] = score
        row["Status"] = r.status
        row["Remarks"] = grade_remark(r.scores, settings.PASSING_GRADE)
        rows.append(row)
    return pd.DataFrame(rows)


def _grade_input(label: str, current, key: str):
    return st.number_input(
        label,
        min_value=0.0,
        max_value=100.0,
        value=float(current) if current is not None else None,
        step=1.0,
        key=key,
        placeholder="Not graded",
    )


def _teacher_editor(backend, records):
    st.subheader("Enter Grades")
    if not hasattr(backend, "update_grades"):
        st.info("Grade entry is handled by the API backend's teacher portal.")
        return

    options = {f"{r.student_name} - {r.subject_name}": r for r in records}
    choice = st.selectbox("Student and subject:", options=list(options))
    record = options[choice]

    with st.form("grade_entry"):
        col1, col2, col3 = st.columns(3)
        with col1:
            prelim = _grade_input("Prelim", record.prelim_grade, f"prelim-{record.assignment_id}")
        with col2:
            midterm = _grade_input("Midterm", record.midterm_grade, f"midterm-{record.assignment_id}")
        with col3:
            final = _grade_input("Final", record.final_grade, f"final-{record.assignment_id}")
        remarks = st.text_input("Final remarks", value=record.final_remarks)
        submitted = st.form_submit_button("Save grades")

    if submitted:
        try:
            updated = backend.update_grades(
                record.assignment_id,
                record.student_id,
                prelim_grade=prelim,
                midterm_grade=midterm,
                final_grade=final,
                final_remarks=remarks,
            )
        except (LookupError, ValueError) as e:
            st.error(f"Could not save grades: {e}")
            return
        flash(f"Saved. Status is now {updated.status}.")
        st.rerun()


def main():
    user = require_role("Student", "Teacher")
    settings = get_settings()
    backend = get_backend()

    st.title("📝 Grades")

    show_flash()

    try:
        records = backend.get_grade_records(role=user.role, user_id=user.user_id)
    except InvalidScoreError as e:
        st.error(f"Grade data from the server is malformed: {e}")
        st.stop()

    if not records:
        st.info("No grade records found.")
        st.stop()

    if user.role == "Student":
        complete = [r for r in records if r.status == COMPLETE]
        st.caption(
            f"{len(complete)} of {len(records)} subjects have final grades. "
            f"Passing grade is {settings.PASSING_GRADE:g}."
        )
        styled = _grades_frame(records, include_student=False).style.map(
            lambda remark: f"color: {result_color(remark)}", subset=["Remarks"]
        )
        st.dataframe(styled, hide_index=True, width="stretch")
        st.plotly_chart(
            create_term_grades_chart(records, settings.TERMS, settings.PASSING_GRADE),
            width="stretch",
        )
        return

    col1, col2 = st.columns([2, 1])
    with col1:
        sections = sorted({r.section for r in records})
        section = st.selectbox("Section:", options=["All"] + sections)
        shown = records if section == "All" else [r for r in records if r.section == section]
        st.dataframe(_grades_frame(shown, include_student=True), hide_index=True, width="stretch")
    with col2:
        st.plotly_chart(create_grade_status_chart(shown), width="stretch")

    st.divider()
    _teacher_editor(backend, shown)


main()
