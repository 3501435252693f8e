"""Data models for campus people, classes and records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from src.reports.status import resolve_pass_fail, resolve_term_status, COMPLETE

ATTENDANCE_STATUSES = ("Present", "Absent", "Late", "Excused")
STUDENT_STATUSES = ("New", "Transferee", "Continuing", "Returnee")


@dataclass
class Student:
    """An enrolled student."""

    id: int
    student_id: str
    first_name: str
    last_name: str
    course: str = ""  # program id or name
    status: str = "New"
    year: Optional[str] = None
    section: str = ""
    username: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_address: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Faculty:
    """A faculty member. Administrative faculty also act as sub admins."""

    id: int
    teacher_id: str
    first_name: str
    last_name: str
    department: Optional[str] = None  # "Teaching" or "Administrative"
    employment_type: Optional[str] = None  # "Regular" or "Part Time"
    username: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.department == "Administrative"


@dataclass
class Course:
    """A course that can be assigned to a program year level."""

    id: str
    name: str
    description: str = ""
    type: str = "Major"  # "Major" or "Minor"
    program_id: Optional[str] = None
    year_level: Optional[str] = None


@dataclass
class Program:
    """A degree program with its curriculum per year level."""

    id: str
    name: str
    description: str = ""
    courses: dict[str, list[Course]] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass
class Section:
    """A class section of one program and year level."""

    id: str
    section_code: str
    program_id: str
    year_level: str
    program_name: str = ""
    adviser_id: Optional[int] = None
    adviser_name: Optional[str] = None
    student_count: int = 0


@dataclass
class SectionSubjectAssignment:
    """A teacher assigned to teach a subject in a section."""

    id: str
    section_id: str
    subject_id: str
    teacher_id: int
    subject_name: Optional[str] = None
    teacher_name: Optional[str] = None


@dataclass
class GradeRecord:
    """Prelim, midterm and final grades for one student in one subject.

    The status is computed from the scores on access and is never stored.
    """

    assignment_id: str
    student_id: int
    student_name: str
    subject_id: str
    subject_name: str
    section: str = ""
    year: str = ""
    prelim_grade: Optional[float] = None
    prelim_remarks: str = ""
    midterm_grade: Optional[float] = None
    midterm_remarks: str = ""
    final_grade: Optional[float] = None
    final_remarks: str = ""

    @property
    def scores(self) -> list[Optional[float]]:
        return [self.prelim_grade, self.midterm_grade, self.final_grade]

    @property
    def status(self) -> str:
        return resolve_term_status(self.scores)

    @property
    def result(self) -> Optional[str]:
        """Passed/Failed once all terms are graded, otherwise None."""
        if self.status != COMPLETE:
            return None
        return resolve_pass_fail(self.final_grade)


@dataclass
class AttendanceRecord:
    """Attendance for one student on one day of a subject."""

    date: date
    status: str
    subject_id: str = ""
    subject_name: str = ""
    student_id: Optional[int] = None
    remarks: str = ""


@dataclass
class Announcement:
    """A posted announcement. Empty or "all" target fields match everyone."""

    id: str
    title: str
    content: str
    date: datetime
    target_course: Optional[str] = None
    target_year_level: Optional[str] = None
    target_section: Optional[str] = None
    author: Optional[str] = None


@dataclass
class ScheduleEntry:
    """A calendar item on a student or teacher schedule."""

    id: str
    title: str
    start: datetime
    end: datetime
    type: str = "class"  # "class", "event" or "exam"
    location: Optional[str] = None
    teacher: Optional[str] = None
    section: Optional[str] = None


@dataclass
class AdminUser:
    """An administrator account."""

    id: int
    username: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    role: str = "Sub Admin"
    is_super_admin: bool = False


@dataclass
class DashboardStats:
    """Headline counts for the admin dashboard."""

    total_students: int = 0
    total_teachers: int = 0
    total_admins: int = 0
    upcoming_events: int = 0


@dataclass
class LoginResult:
    """Outcome of a successful login."""

    username: str
    role: str  # "Admin", "Student" or "Teacher"
    user_id: int
