from .charts import (
    create_population_chart,
    create_grade_status_chart,
    create_term_grades_chart,
    create_attendance_chart,
)

__all__ = [
    "create_population_chart",
    "create_grade_status_chart",
    "create_term_grades_chart",
    "create_attendance_chart",
]
