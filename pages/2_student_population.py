"""Student population broken down by program and year level."""

import streamlit as st

from src.data import get_backend
from src.reports.breakdown import student_population
from src.viz.charts import create_population_chart
from src.viz.layout import require_role

st.set_page_config(
    page_title="Student Population | Campus Portal",
    page_icon="🎓",
    layout="wide",
)

require_role("Admin")

st.title("🎓 Student Population Breakdown")

backend = get_backend()
with st.spinner("Loading student population data..."):
    students = backend.get_students()
    programs = backend.get_programs()

table = student_population(students, programs)

if table.grand_total == 0:
    st.info("No student data available. Add students to see the population breakdown.")
    st.stop()

st.metric(label="Overall Student Population", value=f"{table.grand_total:,}")
st.caption("Total enrolled students across all programs and year levels.")

st.plotly_chart(
    create_population_chart(table, "Students by Program and Year Level"),
    width="stretch",
)

cols = st.columns(3)
for i, group in enumerate(table):
    with cols[i % 3]:
        with st.container(border=True):
            st.markdown(f"#### {group.display_name}")
            st.caption(f"Total Students: **{group.total}**")
            for year, count in group.cells:
                st.markdown(f"- {year}: **{count}** student{'s' if count != 1 else ''}")
