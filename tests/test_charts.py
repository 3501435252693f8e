"""Tests for chart generators."""

from datetime import date

from src.data.models import AttendanceRecord, GradeRecord, Student
from src.reports.breakdown import BreakdownTable, student_population
from src.reports.status import summarize_attendance
from src.viz.charts import (
    COLORS,
    create_attendance_chart,
    create_grade_status_chart,
    create_population_chart,
    create_term_grades_chart,
    result_color,
)


def _record(subject, prelim=None, midterm=None, final=None):
    return GradeRecord(
        assignment_id=subject,
        student_id=1,
        student_name="Alice Smith",
        subject_id=subject,
        subject_name=subject,
        prelim_grade=prelim,
        midterm_grade=midterm,
        final_grade=final,
    )


def _annotation_texts(fig):
    return [a.text for a in fig.layout.annotations]


class TestPopulationChart:
    def test_one_trace_per_category(self):
        students = [
            Student(id=1, student_id="101", first_name="A", last_name="B", course="CS", year="1st Year"),
            Student(id=2, student_id="102", first_name="C", last_name="D", course="CS", year="2nd Year"),
            Student(id=3, student_id="103", first_name="E", last_name="F", course="IT", year="1st Year"),
        ]
        fig = create_population_chart(student_population(students), "Students")
        assert sorted(trace.name for trace in fig.data) == ["1st Year", "2nd Year"]

    def test_empty(self):
        fig = create_population_chart(BreakdownTable(), "Students")
        assert len(fig.data) == 0
        assert _annotation_texts(fig) == ["No population data available"]


class TestGradeStatusChart:
    def test_counts_each_status(self):
        records = [_record("A", 90, 90, 90), _record("B", 80), _record("C")]
        fig = create_grade_status_chart(records)
        totals = {trace.name: sum(trace.y) for trace in fig.data}
        assert totals == {"Not Submitted": 1, "Incomplete": 1, "Complete": 1}

    def test_empty(self):
        assert _annotation_texts(create_grade_status_chart([])) == ["No grade records available"]


class TestTermGradesChart:
    def test_only_submitted_terms_plotted(self):
        fig = create_term_grades_chart([_record("Math", 85, 90)])
        assert sorted(trace.name for trace in fig.data) == ["Midterm", "Prelim"]

    def test_passing_line(self):
        fig = create_term_grades_chart([_record("Math", 85)], passing_grade=75)
        assert fig.layout.shapes[0].y0 == 75

    def test_no_grades(self):
        fig = create_term_grades_chart([_record("Math")])
        assert _annotation_texts(fig) == ["No grades submitted yet"]


class TestAttendanceChart:
    def test_rate_annotation(self):
        records = [AttendanceRecord(date=date(2024, 9, d), status="Present") for d in (1, 2, 3)]
        records.append(AttendanceRecord(date=date(2024, 9, 4), status="Absent"))
        fig = create_attendance_chart(summarize_attendance(records), "Math")
        assert _annotation_texts(fig) == ["75.0%"]
        assert list(fig.data[0].labels) == ["Present", "Absent"]

    def test_empty(self):
        fig = create_attendance_chart(summarize_attendance([]))
        assert _annotation_texts(fig) == ["No attendance records available"]


class TestResultColor:
    def test_passed_and_failed(self):
        assert result_color("Passed") == COLORS["Passed"]
        assert result_color("Failed") == COLORS["Failed"]

    def test_pending(self):
        assert result_color(None) == COLORS["Not Submitted"]
