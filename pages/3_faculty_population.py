"""Faculty population broken down by department and employment type."""

import streamlit as st

from src.data import get_backend
from src.reports.breakdown import breakdown_to_frame, faculty_population
from src.viz.charts import create_population_chart
from src.viz.layout import require_role

st.set_page_config(
    page_title="Faculty Population | Campus Portal",
    page_icon="🏢",
    layout="wide",
)

require_role("Admin")

st.title("🏢 Faculty Population Breakdown")

with st.spinner("Loading faculty data..."):
    faculty = get_backend().get_faculty()

table = faculty_population(faculty)

if table.grand_total == 0:
    st.info("No faculty data available. Add faculty members to see the breakdown.")
    st.stop()

st.metric(label="Overall Faculty Population", value=f"{table.grand_total:,}")

st.plotly_chart(
    create_population_chart(
        table,
        "Faculty by Department and Employment Type",
        group_label="Department",
        category_label="Employment Type",
    ),
    width="stretch",
)

df = breakdown_to_frame(table, primary_column="Department", secondary_column="Employment Type")
st.dataframe(df, hide_index=True, width="stretch")
