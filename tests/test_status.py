"""Tests for derived grade and attendance status."""

from datetime import date
import math

import pytest

from src.data.models import AttendanceRecord
from src.reports.status import (
    COMPLETE,
    FAILED,
    INCOMPLETE,
    NOT_SUBMITTED,
    PASSED,
    TERM_STATUS_ORDER,
    InvalidScoreError,
    count_attendance,
    grade_remark,
    resolve_attendance_rate,
    resolve_pass_fail,
    resolve_term_status,
    summarize_attendance,
    validate_score,
)


def _records(**counts):
    records = []
    day = 1
    for status, n in counts.items():
        for _ in range(n):
            records.append(AttendanceRecord(date=date(2024, 9, day), status=status))
            day += 1
    return records


class TestResolveTermStatus:
    def test_one_score_is_incomplete(self):
        assert resolve_term_status([90, None, None]) == INCOMPLETE

    def test_no_scores_is_not_submitted(self):
        assert resolve_term_status([None, None, None]) == NOT_SUBMITTED

    def test_all_scores_is_complete(self):
        assert resolve_term_status([92, 88, 90]) == COMPLETE

    def test_final_only_is_incomplete(self):
        assert resolve_term_status([None, None, 80]) == INCOMPLETE

    def test_zero_counts_as_present(self):
        assert resolve_term_status([0, 0, 0]) == COMPLETE

    def test_other_period_counts(self):
        assert resolve_term_status([70, 80]) == COMPLETE
        assert resolve_term_status([70, None, None, None]) == INCOMPLETE

    def test_rejects_non_numeric(self):
        with pytest.raises(InvalidScoreError):
            resolve_term_status(["A-", None, None])

    def test_adding_a_score_never_moves_backward(self):
        scores = [None, None, None]
        previous = TERM_STATUS_ORDER.index(resolve_term_status(scores))
        for i, value in enumerate([85, 90, 88]):
            scores[i] = value
            current = TERM_STATUS_ORDER.index(resolve_term_status(scores))
            assert current >= previous
            previous = current
        assert resolve_term_status(scores) == COMPLETE


class TestResolvePassFail:
    def test_passing(self):
        assert resolve_pass_fail(90) == PASSED

    def test_threshold_is_inclusive(self):
        assert resolve_pass_fail(75) == PASSED

    def test_just_below(self):
        assert resolve_pass_fail(74.99) == FAILED

    def test_out_of_range_does_not_raise(self):
        assert resolve_pass_fail(150) == PASSED
        assert resolve_pass_fail(-5) == FAILED

    def test_custom_passing_grade(self):
        assert resolve_pass_fail(70, passing_grade=60) == PASSED


class TestGradeRemark:
    def test_complete_shows_result(self):
        assert grade_remark([92, 88, 90]) == PASSED
        assert grade_remark([92, 88, 60]) == FAILED

    def test_pending_shows_status(self):
        assert grade_remark([90, None, None]) == INCOMPLETE
        assert grade_remark([None, None, None]) == NOT_SUBMITTED


class TestValidateScore:
    def test_none_is_absent(self):
        assert validate_score(None) is None

    def test_int_becomes_float(self):
        assert validate_score(85) == 85.0

    def test_float(self):
        assert validate_score(88.5) == 88.5

    @pytest.mark.parametrize("value", ["85", "", "INC", True, False, [90], float("nan")])
    def test_rejects(self, value):
        with pytest.raises(InvalidScoreError):
            validate_score(value)

    def test_error_is_value_error(self):
        assert issubclass(InvalidScoreError, ValueError)


class TestResolveAttendanceRate:
    def test_weighted_rate(self):
        records = _records(Present=6, Absent=2, Late=1, Excused=1)
        assert resolve_attendance_rate(records) == 73.0

    def test_empty_is_zero(self):
        assert resolve_attendance_rate([]) == 0.0

    def test_all_present(self):
        assert resolve_attendance_rate(_records(Present=3)) == 100.0

    def test_all_absent(self):
        assert resolve_attendance_rate(_records(Absent=4)) == 0.0

    def test_rounded_to_one_decimal(self):
        # 2 present, 1 late of 3 -> 83.333...
        assert resolve_attendance_rate(_records(Present=2, Late=1)) == 83.3

    def test_accepts_generator(self):
        records = _records(Present=1, Excused=1)
        assert math.isclose(resolve_attendance_rate(r for r in records), 90.0)


class TestSummarizeAttendance:
    def test_counts_and_rate(self):
        summary = summarize_attendance(_records(Present=6, Absent=2, Late=1, Excused=1))
        assert summary["Present"] == 6
        assert summary["Absent"] == 2
        assert summary["Late"] == 1
        assert summary["Excused"] == 1
        assert summary["total"] == 10
        assert summary["rate"] == 73.0

    def test_empty(self):
        summary = summarize_attendance([])
        assert summary["total"] == 0
        assert summary["rate"] == 0.0
        assert summary["Present"] == 0

    def test_count_includes_zero_statuses(self):
        counts = count_attendance(_records(Late=2))
        assert counts == {"Present": 0, "Late": 2, "Excused": 0, "Absent": 0}
