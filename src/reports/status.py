"""Derived grade and attendance status.

Statuses are always computed from the underlying scores or attendance marks,
never stored next to them, so the two can't disagree.
"""

import math
from numbers import Real
from typing import Iterable, Optional, Sequence

from config.settings import get_settings

NOT_SUBMITTED = "Not Submitted"
INCOMPLETE = "Incomplete"
COMPLETE = "Complete"

PASSED = "Passed"
FAILED = "Failed"

# Forward order a record moves through as scores are entered
TERM_STATUS_ORDER = (NOT_SUBMITTED, INCOMPLETE, COMPLETE)


class InvalidScoreError(ValueError):
    """Raised when a score is neither a number nor explicitly absent."""


def validate_score(value) -> Optional[float]:
    """Return the score as a float, or None when it is absent.

    Anything else (strings, booleans, NaN) raises InvalidScoreError rather
    than being coerced, since a coerced value would change whether the record
    counts as complete.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidScoreError(f"Score must be a number or None, got {value!r}")
    score = float(value)
    if math.isnan(score):
        raise InvalidScoreError("Score must be a number or None, got NaN")
    return score


def resolve_term_status(scores: Sequence[Optional[float]]) -> str:
    """Classify a set of grading-period scores.

    None of the periods graded is "Not Submitted", all of them is "Complete",
    anything in between is "Incomplete".
    """
    present = sum(1 for score in scores if validate_score(score) is not None)
    if present == 0:
        return NOT_SUBMITTED
    if present == len(scores):
        return COMPLETE
    return INCOMPLETE


def resolve_pass_fail(final_score: float, passing_grade: Optional[float] = None) -> str:
    """Passed when the final score reaches the passing grade (inclusive).

    Out-of-range scores are not rejected here; only the magnitude is compared.
    """
    if passing_grade is None:
        passing_grade = get_settings().PASSING_GRADE
    return PASSED if final_score >= passing_grade else FAILED


def grade_remark(scores: Sequence[Optional[float]], passing_grade: Optional[float] = None) -> str:
    """Text for the Remarks column: Passed/Failed once complete, else the status."""
    status = resolve_term_status(scores)
    if status != COMPLETE:
        return status
    return resolve_pass_fail(scores[-1], passing_grade)


def count_attendance(records: Iterable) -> dict[str, int]:
    """Count records per attendance status, including statuses with zero records."""
    counts = {status: 0 for status in get_settings().ATTENDANCE_WEIGHTS}
    for record in records:
        counts[record.status] = counts.get(record.status, 0) + 1
    return counts


def resolve_attendance_rate(records: Iterable) -> float:
    """Weighted attendance percentage rounded to one decimal.

    Present counts 1, Late 0.5, Excused 0.8 and Absent 0. An empty list
    gives 0.0.
    """
    weights = get_settings().ATTENDANCE_WEIGHTS
    counts = count_attendance(records)
    total = sum(counts.values())
    if total == 0:
        return 0.0
    attended = sum(weights.get(status, 0.0) * count for status, count in counts.items())
    return round(attended / total * 100, 1)


def summarize_attendance(records: Iterable) -> dict:
    """Per-status day counts plus total and weighted rate for one subject."""
    records = list(records)
    counts = count_attendance(records)
    return {
        **counts,
        "total": len(records),
        "rate": resolve_attendance_rate(records),
    }
