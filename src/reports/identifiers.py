"""Public IDs, usernames and section codes derived from storage ids.

These assume storage ids are unique and increasing, and that the existing
section count passed in is current when called.
"""

STUDENT_ID_OFFSET = 100
STAFF_ID_OFFSET = 1000

YEAR_PREFIXES = {
    "1st Year": "10",
    "2nd Year": "20",
    "3rd Year": "30",
    "4th Year": "40",
}
DEFAULT_YEAR_PREFIX = "10"
SECTION_LETTERS = "ABCDEFGH"


def generate_student_id(db_id: int) -> str:
    return str(STUDENT_ID_OFFSET + db_id)


def generate_student_username(student_id: str) -> str:
    return f"s{student_id}"


def generate_teacher_id(db_id: int) -> str:
    return str(STAFF_ID_OFFSET + db_id)


def generate_teacher_username(teacher_id: str, department: str = "Teaching") -> str:
    """Administrative faculty get an "a" prefix, everyone else "t"."""
    prefix = "a" if department == "Administrative" else "t"
    return f"{prefix}{teacher_id}"


def generate_admin_username(db_id: int) -> str:
    return f"a{STAFF_ID_OFFSET + db_id}"


def generate_section_code(year_level: str, existing_count: int = 0) -> str:
    """Year prefix plus a letter cycling A..H by how many sections already exist.

    >>> generate_section_code("2nd Year", 1)
    '20B'
    """
    prefix = YEAR_PREFIXES.get(year_level, DEFAULT_YEAR_PREFIX)
    return f"{prefix}{SECTION_LETTERS[existing_count % len(SECTION_LETTERS)]}"
