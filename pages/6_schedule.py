"""Schedule Page - this week's classes for the signed-in student or teacher."""

import pandas as pd
import streamlit as st

from src.data import get_backend
from src.viz.layout import require_role

st.set_page_config(
    page_title="Schedule | Campus Portal",
    page_icon="📅",
    layout="wide",
)

user = require_role("Student", "Teacher")

st.title("📅 My Schedule")

entries = sorted(get_backend().get_schedule(role=user.role, user_id=user.user_id), key=lambda e: e.start)

if not entries:
    st.info("No classes scheduled.")
    st.stop()

rows = []
for e in entries:
    row = {
        "Day": f"{e.start:%A}",
        "Date": e.start.date(),
        "Time": f"{e.start:%H:%M} - {e.end:%H:%M}",
        "Class": e.title,
        "Location": e.location or "",
    }
    if user.role == "Teacher":
        row["Section"] = e.section or ""
    else:
        row["Teacher"] = e.teacher or ""
    rows.append(row)

st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")
