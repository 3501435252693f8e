"""Attendance Page - a student's attendance marks and weighted rate per subject."""

import pandas as pd
import streamlit as st

from src.data import get_backend
from src.reports.status import summarize_attendance
from src.viz.charts import create_attendance_chart
from src.viz.layout import require_role

st.set_page_config(
    page_title="Attendance | Campus Portal",
    page_icon="✅",
    layout="wide",
)

user = require_role("Student")

st.title("✅ My Attendance")
st.caption("Rate counts Present as a full day, Late as half, Excused as 0.8 and Absent as zero.")

records = get_backend().get_attendance(student_id=user.user_id)

if not records:
    st.info("No attendance records found.")
    st.stop()

by_subject: dict[str, list] = {}
for r in records:
    by_subject.setdefault(r.subject_name or r.subject_id, []).append(r)

for subject in sorted(by_subject):
    subject_records = by_subject[subject]
    summary = summarize_attendance(subject_records)

    st.subheader(subject)
    col1, col2 = st.columns([1, 2])
    with col1:
        st.metric(label="Attendance Rate", value=f"{summary['rate']:.1f}%")
        st.markdown(
            f"- **Present:** {summary['Present']} days\n"
            f"- **Absent:** {summary['Absent']} days\n"
            f"- **Late:** {summary['Late']} days\n"
            f"- **Excused:** {summary['Excused']} days"
        )
        st.plotly_chart(create_attendance_chart(summary, subject), width="stretch")
    with col2:
        df = pd.DataFrame(
            [
                {"Date": r.date, "Status": r.status, "Remarks": r.remarks}
                for r in sorted(subject_records, key=lambda r: r.date, reverse=True)
            ]
        )
        st.dataframe(df, hide_index=True, width="stretch")
