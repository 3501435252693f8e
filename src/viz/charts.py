"""Plotly chart generators for campus dashboards."""

from typing import Optional
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from src.data.models import GradeRecord
from src.reports.breakdown import BreakdownTable, breakdown_to_frame
from src.reports.status import TERM_STATUS_ORDER, PASSED, FAILED


# Color palette for consistent styling
COLORS = {
    "Present": "#2ca02c",  # green
    "Absent": "#d62728",  # red
    "Late": "#ff7f0e",  # orange
    "Excused": "#1f77b4",  # blue
    "Not Submitted": "#999999",
    "Incomplete": "#ff7f0e",
    "Complete": "#1f77b4",
    "Passed": "#2ca02c",
    "Failed": "#d62728",
    "passing_line": "#d62728",
}

# Color sequence for secondary categories in breakdowns
CATEGORY_COLORS = px.colors.qualitative.Set2


def create_population_chart(
    table: BreakdownTable,
    title: str,
    group_label: str = "Program",
    category_label: str = "Year Level",
) -> go.Figure:
    """
    Create stacked bar chart of a population breakdown.

    Args:
        table: Breakdown ordered for display
        title: Chart title
        group_label: Axis label for the primary categories
        category_label: Legend title for the secondary categories
    """
    df = breakdown_to_frame(table, primary_column=group_label, secondary_column=category_label)
    if df.empty:
        return _empty_chart("No population data available")

    fig = px.bar(
        df,
        x=group_label,
        y="Count",
        color=category_label,
        barmode="stack",
        color_discrete_sequence=CATEGORY_COLORS,
        title=title,
        category_orders={
            group_label: [group.display_name for group in table],
            category_label: list(dict.fromkeys(df[category_label])),
        },
    )

    fig.update_layout(
        xaxis_title="",
        yaxis_title="People",
        legend_title=category_label,
    )

    return fig


def create_grade_status_chart(records: list[GradeRecord]) -> go.Figure:
    """Bar chart of how many grade records are in each submission status."""
    if not records:
        return _empty_chart("No grade records available")

    counts = {status: 0 for status in TERM_STATUS_ORDER}
    for record in records:
        counts[record.status] += 1

    df = pd.DataFrame({"Status": list(counts), "Records": list(counts.values())})

    fig = px.bar(
        df,
        x="Status",
        y="Records",
        color="Status",
        color_discrete_map={status: COLORS[status] for status in TERM_STATUS_ORDER},
        title="Grade Submission Status",
    )
    fig.update_layout(showlegend=False, xaxis_title="", yaxis_title="Records")
    return fig


def create_term_grades_chart(
    records: list[GradeRecord],
    terms: Optional[list[str]] = None,
    passing_grade: float = 75,
) -> go.Figure:
    """
    Create grouped bar chart of term grades per subject.

    Args:
        records: Grade records of one student
        terms: Term labels in order (default: Prelim, Midterm, Final)
        passing_grade: Drawn as a horizontal reference line
    """
    if terms is None:
        terms = ["Prelim", "Midterm", "Final"]

    rows = []
    for record in records:
        for term, score in zip(terms, record.scores):
            if score is not None:
                rows.append({"Subject": record.subject_name, "Term": term, "Grade": score})

    if not rows:
        return _empty_chart("No grades submitted yet")

    df = pd.DataFrame(rows)

    fig = px.bar(
        df,
        x="Subject",
        y="Grade",
        color="Term",
        barmode="group",
        color_discrete_sequence=CATEGORY_COLORS,
        category_orders={"Term": terms},
        title="Grades by Term",
    )
    fig.add_hline(
        y=passing_grade,
        line_dash="dash",
        line_color=COLORS["passing_line"],
        annotation_text=f"Passing ({passing_grade:g})",
    )
    fig.update_layout(yaxis_range=[0, 100], xaxis_title="", legend_title="")
    return fig


def create_attendance_chart(summary: dict, subject: str = "") -> go.Figure:
    """
    Create donut chart of attendance marks.

    Args:
        summary: Output of summarize_attendance (status counts, total, rate)
        subject: Subject name for the title
    """
    statuses = [s for s in ("Present", "Late", "Excused", "Absent") if summary.get(s)]
    if not summary.get("total"):
        return _empty_chart("No attendance records available")

    fig = go.Figure(
        go.Pie(
            labels=statuses,
            values=[summary[s] for s in statuses],
            hole=0.5,
            marker=dict(colors=[COLORS[s] for s in statuses]),
            sort=False,
        )
    )
    title = f"Attendance: {subject}" if subject else "Attendance"
    fig.update_layout(
        title=title,
        annotations=[
            dict(text=f"{summary['rate']:.1f}%", x=0.5, y=0.5, showarrow=False, font=dict(size=20))
        ],
    )
    return fig


def result_color(result: Optional[str]) -> str:
    """Color for a Passed/Failed remark, gray while grades are pending."""
    if result in (PASSED, FAILED):
        return COLORS[result]
    return COLORS["Not Submitted"]


def _empty_chart(message: str) -> go.Figure:
    """Create an empty chart with a message."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font=dict(size=16, color="gray"),
    )
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        height=300,
    )
    return fig
