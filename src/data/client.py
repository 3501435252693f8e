"""HTTP client for the campus backend API."""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

import requests

from config.settings import get_settings
from src.reports.status import InvalidScoreError, validate_score

from .models import (
    AdminUser,
    Announcement,
    AttendanceRecord,
    DashboardStats,
    Faculty,
    GradeRecord,
    LoginResult,
    Program,
    ScheduleEntry,
    Section,
    Student,
)

logger = logging.getLogger(__name__)


class CampusClient:
    """Client for reading campus data from the PHP backend."""

    def __init__(self):
        settings = get_settings()
        self.base_url = settings.api_base_url
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Lazy-loaded HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET a JSON document. Returns None if the request or decoding fails."""
        url = self._url(path)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", url, e)
        return None

    def _query(self, path: str, params: Optional[dict] = None) -> list[dict]:
        """GET a list of records. Failures and non-list payloads give []."""
        data = self._get(path, params)
        # Some endpoints wrap rows as {"records": [...]}
        if isinstance(data, dict) and isinstance(data.get("records"), list):
            data = data["records"]
        if not isinstance(data, list):
            if data is not None:
                logger.warning("Expected a list from %s, got %s", path, type(data).__name__)
            return []
        return data

    # -------------------------------------------------------------------------
    # People
    # -------------------------------------------------------------------------

    def get_students(self) -> list[Student]:
        """Fetch all students."""
        students = []
        for r in self._query("students/read.php"):
            student_id = _safe_int(r.get("id"))
            if student_id is None:
                logger.warning("Skipping student row without id: %s", r)
                continue
            students.append(
                Student(
                    id=student_id,
                    student_id=str(r.get("studentId", "")),
                    first_name=r.get("firstName", ""),
                    last_name=r.get("lastName", ""),
                    course=r.get("program") or r.get("course") or "",
                    status=r.get("enrollmentType") or r.get("status") or "New",
                    year=r.get("year") or None,
                    section=r.get("section") or "",
                    username=r.get("username") or "",
                    email=r.get("email"),
                    phone=r.get("phone"),
                    emergency_contact_name=r.get("emergencyContactName"),
                    emergency_contact_relationship=r.get("emergencyContactRelationship"),
                    emergency_contact_phone=r.get("emergencyContactPhone"),
                    emergency_contact_address=r.get("emergencyContactAddress"),
                )
            )
        return students

    def get_faculty(self) -> list[Faculty]:
        """Fetch all faculty members."""
        faculty = []
        for r in self._query("teachers/read.php"):
            faculty_id = _safe_int(r.get("id"))
            if faculty_id is None:
                logger.warning("Skipping faculty row without id: %s", r)
                continue
            faculty.append(
                Faculty(
                    id=faculty_id,
                    teacher_id=str(r.get("teacherId", "")),
                    first_name=r.get("firstName", ""),
                    last_name=r.get("lastName", ""),
                    department=r.get("department") or None,
                    employment_type=r.get("employmentType") or None,
                    username=r.get("username") or "",
                    email=r.get("email"),
                    phone=r.get("phone"),
                )
            )
        return faculty

    def get_admins(self) -> list[AdminUser]:
        """Fetch the super admin and faculty-derived sub admins."""
        admins = []
        for r in self._query("admins/read.php"):
            admin_id = _safe_int(r.get("id"))
            if admin_id is None:
                continue
            admins.append(
                AdminUser(
                    id=admin_id,
                    username=r.get("username", ""),
                    first_name=r.get("firstName") or "",
                    last_name=r.get("lastName") or "",
                    email=r.get("email"),
                    role=r.get("role") or "Sub Admin",
                    is_super_admin=bool(r.get("isSuperAdmin", False)),
                )
            )
        return admins

    # -------------------------------------------------------------------------
    # Programs and sections
    # -------------------------------------------------------------------------

    def get_programs(self) -> list[Program]:
        """Fetch programs. Curriculum detail is not loaded here."""
        return [
            Program(
                id=str(r.get("id", "")),
                name=r.get("name", ""),
                description=r.get("description") or "",
            )
            for r in self._query("programs/read.php")
        ]

    def get_sections(self) -> list[Section]:
        """Fetch class sections."""
        return [
            Section(
                id=str(r.get("id", "")),
                section_code=r.get("sectionCode", ""),
                program_id=r.get("programId") or r.get("course") or "",
                program_name=r.get("programName") or r.get("course") or "",
                year_level=r.get("yearLevel", ""),
                adviser_id=_safe_int(r.get("adviserId")),
                adviser_name=r.get("adviserName"),
                student_count=_safe_int(r.get("studentCount")) or 0,
            )
            for r in self._query("sections/read.php")
        ]

    # -------------------------------------------------------------------------
    # Grades and attendance
    # -------------------------------------------------------------------------

    def get_grade_records(self, role: str = "Teacher", user_id: Optional[int] = None) -> list[GradeRecord]:
        """
        Fetch grade records.

        Teachers get every student in their assigned subjects; students get
        their own grades with one row per subject. The backend resolves the
        user from the session, so user_id is only sent as a hint. Any stored
        status field is ignored since the status is derived from the scores.
        """
        if role == "Student":
            path = "student/grades/read.php"
        else:
            path = "teacher/assignments/grades/read.php"

        params = {"userId": user_id} if user_id is not None else None
        records = []
        for r in self._query(path, params):
            subject_id = str(r.get("subjectId") or r.get("id") or "")
            records.append(
                GradeRecord(
                    assignment_id=str(r.get("assignmentId") or subject_id),
                    student_id=_safe_int(r.get("studentId")) or 0,
                    student_name=r.get("studentName", ""),
                    subject_id=subject_id,
                    subject_name=r.get("subjectName", ""),
                    section=r.get("section") or "",
                    year=r.get("year") or "",
                    prelim_grade=_safe_score(r.get("prelimGrade")),
                    prelim_remarks=r.get("prelimRemarks") or "",
                    midterm_grade=_safe_score(r.get("midtermGrade")),
                    midterm_remarks=r.get("midtermRemarks") or "",
                    final_grade=_safe_score(r.get("finalGrade")),
                    final_remarks=r.get("finalRemarks") or "",
                )
            )
        return records

    def get_attendance(self, student_id: Optional[int] = None) -> list[AttendanceRecord]:
        """Fetch attendance records for the signed-in student."""
        params = {"studentId": student_id} if student_id is not None else None
        records = []
        for r in self._query("student/attendance/read.php", params):
            day = _safe_date(r.get("date"))
            if day is None:
                logger.warning("Skipping attendance row with bad date: %s", r)
                continue
            records.append(
                AttendanceRecord(
                    date=day,
                    status=r.get("status", ""),
                    subject_id=str(r.get("subjectId") or ""),
                    subject_name=r.get("subjectName") or "",
                    student_id=_safe_int(r.get("studentId")),
                    remarks=r.get("remarks") or "",
                )
            )
        return records

    # -------------------------------------------------------------------------
    # Schedules, announcements and dashboard
    # -------------------------------------------------------------------------

    def get_schedule(self, role: str = "Student", user_id: Optional[int] = None) -> list[ScheduleEntry]:
        """Fetch the schedule of the signed-in student or teacher."""
        path = "teacher/schedule/read.php" if role == "Teacher" else "student/schedule/read.php"
        params = {"userId": user_id} if user_id is not None else None
        entries = []
        for r in self._query(path, params):
            start = _safe_datetime(r.get("start"))
            end = _safe_datetime(r.get("end"))
            if start is None or end is None:
                logger.warning("Skipping schedule entry with bad times: %s", r)
                continue
            entries.append(
                ScheduleEntry(
                    id=str(r.get("id", "")),
                    title=r.get("title", ""),
                    start=start,
                    end=end,
                    type=r.get("type") or "class",
                    location=r.get("location"),
                    teacher=r.get("teacher"),
                    section=r.get("section"),
                )
            )
        return entries

    def get_announcements(self, role: str = "Admin") -> list[Announcement]:
        """Fetch announcements visible to the given role, newest first."""
        if role == "Student":
            path = "student/announcements/read.php"
        elif role == "Teacher":
            path = "teacher/announcements/read.php"
        else:
            path = "announcements/read.php"

        announcements = []
        for r in self._query(path):
            target = r.get("target") or {}
            announcements.append(
                Announcement(
                    id=str(r.get("id", "")),
                    title=r.get("title", ""),
                    content=r.get("content", ""),
                    date=_safe_datetime(r.get("date")) or datetime.min,
                    target_course=target.get("course"),
                    target_year_level=target.get("yearLevel"),
                    target_section=target.get("section"),
                    author=r.get("author"),
                )
            )
        return sorted(announcements, key=lambda a: a.date, reverse=True)

    def get_dashboard_stats(self) -> DashboardStats:
        """Fetch admin dashboard counts. Zeros when the backend is unavailable."""
        data = self._get("admin/dashboard-stats.php")
        if not isinstance(data, dict):
            return DashboardStats()
        return DashboardStats(
            total_students=_safe_int(data.get("totalStudents")) or 0,
            total_teachers=_safe_int(data.get("totalTeachers")) or 0,
            total_admins=_safe_int(data.get("totalAdmins")) or 0,
            upcoming_events=_safe_int(data.get("upcomingEvents")) or 0,
        )

    def authenticate(self, username: str, password: str) -> Optional[LoginResult]:
        """Log in against the backend. Returns None for bad credentials or errors."""
        url = self._url("login.php")
        try:
            response = self.session.post(
                url,
                json={"username": username, "password": password},
                timeout=self.timeout,
            )
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Login request to %s failed: %s", url, e)
            return None
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", url, e)
            return None

        if not response.ok or not isinstance(data, dict) or not data.get("success"):
            logger.info("Login rejected for %s", username)
            return None
        return LoginResult(
            username=username,
            role=data.get("role", ""),
            user_id=_safe_int(data.get("userId")) or 0,
        )


def _safe_int(value) -> Optional[int]:
    """Safely convert value to int."""
    if value is None:
        return None
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return None


def _safe_score(value) -> Optional[float]:
    """Convert a grade from JSON, rejecting anything that isn't a number or blank.

    PHP may send numeric columns as strings, so "85.50" is accepted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise InvalidScoreError(f"Score must be a number or None, got {value!r}") from None
    return validate_score(value)


def _safe_date(value) -> Optional[date]:
    """Parse an ISO date (or datetime) string."""
    parsed = _safe_datetime(value)
    return parsed.date() if parsed is not None else None


def _safe_datetime(value) -> Optional[datetime]:
    """Parse an ISO datetime string as naive UTC, accepting a trailing Z."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


# Singleton instance
_client: Optional[CampusClient] = None


def get_client() -> CampusClient:
    """Get or create the campus API client singleton."""
    global _client
    if _client is None:
        _client = CampusClient()
    return _client
