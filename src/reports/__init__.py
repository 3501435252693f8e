from .breakdown import (
    BreakdownGroup,
    BreakdownTable,
    aggregate,
    breakdown_to_frame,
    dedupe_by_id,
    faculty_population,
    order_breakdown,
    student_population,
)
from .status import (
    InvalidScoreError,
    resolve_attendance_rate,
    resolve_pass_fail,
    resolve_term_status,
)

__all__ = [
    "BreakdownGroup",
    "BreakdownTable",
    "aggregate",
    "breakdown_to_frame",
    "dedupe_by_id",
    "faculty_population",
    "order_breakdown",
    "student_population",
    "InvalidScoreError",
    "resolve_attendance_rate",
    "resolve_pass_fail",
    "resolve_term_status",
]
