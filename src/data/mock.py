"""In-memory backend used when the PHP API is not running.

Seeded with a small campus and supports the same reads as CampusClient,
plus the creates and grade updates the admin and teacher pages need.
"""

import copy
import logging
from datetime import date, datetime, timedelta
from typing import Optional

from src.reports.breakdown import dedupe_by_id
from src.reports import dashboard
from src.reports.identifiers import (
    generate_section_code,
    generate_student_id,
    generate_student_username,
    generate_teacher_id,
    generate_teacher_username,
)
from src.reports.status import validate_score

from .models import (
    AdminUser,
    Announcement,
    AttendanceRecord,
    Course,
    DashboardStats,
    Faculty,
    GradeRecord,
    LoginResult,
    Program,
    ScheduleEntry,
    Section,
    SectionSubjectAssignment,
    Student,
)

logger = logging.getLogger(__name__)

# username -> (password, role, user id)
TEST_USERS = {
    "admin": ("defadmin", "Admin", 0),
    "s101": ("password", "Student", 1),
    "t1001": ("password", "Teacher", 1),
    "a1002": ("password", "Teacher", 2),
}


def _seed_attendance() -> list[AttendanceRecord]:
    marks = [
        "Present", "Present", "Late", "Present", "Absent",
        "Present", "Excused", "Present", "Absent", "Present",
    ]
    start = date(2024, 8, 19)
    return [
        AttendanceRecord(
            date=start + timedelta(days=i),
            status=mark,
            subject_id="CS201",
            subject_name="Data Structures",
            student_id=1,
        )
        for i, mark in enumerate(marks)
    ]


class MockBackend:
    """A mutable in-memory campus with the CampusClient read interface."""

    def __init__(self):
        courses = [
            Course("CS101", "Introduction to Programming", "Fundamentals of programming.", "Major", "CS", "1st Year"),
            Course("IT101", "IT Fundamentals", "Basics of IT.", "Major", "IT", "1st Year"),
            Course("CS201", "Data Structures", "Study of data organization.", "Major", "CS", "2nd Year"),
            Course("GEN001", "Purposive Communication", "Effective communication skills", "Minor"),
        ]
        self.courses = courses
        self.programs = [
            Program(
                id="CS",
                name="Computer Science",
                description="Focuses on algorithms, data structures, and software development.",
                courses={"1st Year": [courses[0]], "2nd Year": [courses[2]], "3rd Year": [], "4th Year": []},
            ),
            Program(
                id="IT",
                name="Information Technology",
                description="Focuses on network administration, system management, and web technologies.",
                courses={"1st Year": [courses[1]], "2nd Year": [], "3rd Year": [], "4th Year": []},
            ),
        ]
        self.students = [
            Student(
                id=1, student_id="101", username="s101", first_name="Alice", last_name="Smith",
                course="CS", status="Returnee", year="2nd Year", section="20A",
                email="alice@example.com", phone="123-456-7890",
                emergency_contact_name="John Smith", emergency_contact_relationship="Father",
                emergency_contact_phone="111-222-3333", emergency_contact_address="123 Main St",
            ),
            Student(
                id=2, student_id="102", username="s102", first_name="Bob", last_name="Johnson",
                course="IT", status="New", year="1st Year", section="10A",
                email="bob@example.com", phone="987-654-3210",
            ),
        ]
        self.faculty = [
            Faculty(
                id=1, teacher_id="1001", username="t1001", first_name="David", last_name="Lee",
                department="Teaching", employment_type="Regular",
                email="david.lee@example.com", phone="555-1234",
            ),
            Faculty(
                id=2, teacher_id="1002", username="a1002", first_name="Eve", last_name="Davis",
                department="Administrative", employment_type="Part Time",
                email="eve.davis@example.com",
            ),
        ]
        self.sections = [
            Section("CS-10A", "10A", "CS", "1st Year", "Computer Science", adviser_id=1, adviser_name="David Lee"),
            Section("CS-20A", "20A", "CS", "2nd Year", "Computer Science", adviser_id=1, adviser_name="David Lee", student_count=1),
            Section("IT-10A", "10A", "IT", "1st Year", "Information Technology", student_count=1),
        ]
        self.assignments = [
            SectionSubjectAssignment("CS-20A-CS201", "CS-20A", "CS201", 1, "Data Structures", "David Lee"),
            SectionSubjectAssignment("IT-10A-IT101", "IT-10A", "IT101", 2, "IT Fundamentals", "Eve Davis"),
        ]
        self.grades = [
            GradeRecord(
                assignment_id="1-CS201", student_id=1, student_name="Alice Smith",
                subject_id="CS201", subject_name="Data Structures", section="20A", year="2nd Year",
                prelim_grade=85, prelim_remarks="Good start",
                midterm_grade=90, midterm_remarks="Excellent",
                final_grade=88, final_remarks="Very Good",
            ),
            GradeRecord(
                assignment_id="2-IT101", student_id=2, student_name="Bob Johnson",
                subject_id="IT101", subject_name="IT Fundamentals", section="10A", year="1st Year",
            ),
        ]
        self.announcements = [
            Announcement(
                id="ann1",
                title="Welcome Back Students!",
                content="Welcome to the new academic year.",
                date=datetime(2024, 8, 15),
                target_course="all",
                author="Admin",
            ),
        ]
        self.attendance = _seed_attendance()
        self.admins = [
            AdminUser(0, "admin", "Super", "Admin", "superadmin@example.com", "Super Admin", is_super_admin=True),
        ]
        self._next_student_id = 3
        self._next_faculty_id = 3

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_students(self) -> list[Student]:
        return copy.deepcopy(dedupe_by_id(self.students))

    def get_faculty(self) -> list[Faculty]:
        return copy.deepcopy(dedupe_by_id(self.faculty))

    def get_programs(self) -> list[Program]:
        return copy.deepcopy(self.programs)

    def get_sections(self) -> list[Section]:
        names = {p.id: p.name for p in self.programs}
        sections = copy.deepcopy(self.sections)
        for section in sections:
            section.program_name = names.get(section.program_id, section.program_id)
        return sections

    def get_admins(self) -> list[AdminUser]:
        """The super admin plus every Administrative faculty member."""
        admins = [a for a in self.admins if a.is_super_admin]
        for f in self.faculty:
            if f.is_admin:
                admins.append(
                    AdminUser(
                        id=f.id,
                        username=f.username,
                        first_name=f.first_name,
                        last_name=f.last_name,
                        email=f.email,
                    )
                )
        return copy.deepcopy(admins)

    def get_grade_records(self, role: str = "Teacher", user_id: int = 1) -> list[GradeRecord]:
        """Grades of one student, or of every student taught by one teacher."""
        if role == "Student":
            records = [g for g in self.grades if g.student_id == user_id]
        else:
            # Section codes repeat across programs, so match on the program too
            taught = {
                (*self._section_key(a.section_id), a.subject_id)
                for a in self.assignments
                if a.teacher_id == user_id and self._section_key(a.section_id) is not None
            }
            courses = {s.id: s.course for s in self.students}
            records = [
                g for g in self.grades
                if (courses.get(g.student_id), g.section, g.subject_id) in taught
            ]
        return copy.deepcopy(records)

    def get_attendance(self, student_id: Optional[int] = None) -> list[AttendanceRecord]:
        return [
            copy.copy(r) for r in self.attendance
            if student_id is None or r.student_id == student_id
        ]

    def get_schedule(self, role: str = "Student", user_id: int = 1, today: Optional[date] = None) -> list[ScheduleEntry]:
        """Weekly class slots for this week: one class a day from 8:00, Monday onward."""
        if role == "Teacher":
            assignments = [a for a in self.assignments if a.teacher_id == user_id]
        else:
            student = self._find(self.students, user_id)
            key = (student.course, student.section) if student and student.section else None
            assignments = [a for a in self.assignments if self._section_key(a.section_id) == key]

        today = today or date.today()
        monday = today - timedelta(days=today.weekday())
        entries = []
        for index, assignment in enumerate(assignments):
            day = monday + timedelta(days=index % 5)
            start = datetime(day.year, day.month, day.day, 8 + index)
            entries.append(
                ScheduleEntry(
                    id=f"{assignment.id}-{day.isoformat()}",
                    title=f"{assignment.subject_name or assignment.subject_id} - {assignment.section_id}",
                    start=start,
                    end=start + timedelta(hours=1),
                    location=f"Room {101 + index}",
                    teacher=assignment.teacher_name if role != "Teacher" else None,
                    section=assignment.section_id if role == "Teacher" else None,
                )
            )
        return entries

    def get_announcements(self, role: str = "Admin") -> list[Announcement]:
        return sorted(copy.deepcopy(self.announcements), key=lambda a: a.date, reverse=True)

    def get_dashboard_stats(self) -> DashboardStats:
        return dashboard.compute_dashboard_stats(self.get_students(), self.get_faculty(), upcoming_events=1)

    def authenticate(self, username: str, password: str) -> Optional[LoginResult]:
        user = TEST_USERS.get(username)
        if user is None or user[0] != password:
            logger.info("Mock login rejected for %s", username)
            return None
        return LoginResult(username=username, role=user[1], user_id=user[2])

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_student(
        self,
        first_name: str,
        last_name: str,
        course: str = "",
        year: Optional[str] = None,
        status: str = "New",
        **details,
    ) -> Student:
        """Add a student with the next ids, in the last open section of their program and year.

        A section is opened when none exists yet; an unknown program leaves it empty.
        """
        if not first_name or not last_name:
            raise ValueError("First and last name are required.")
        db_id = self._next_student_id
        self._next_student_id += 1

        student_id = generate_student_id(db_id)
        year_level = year or "1st Year"
        open_sections = [
            s for s in self.sections
            if s.program_id == course and s.year_level == year_level
        ]
        if not open_sections and self._find(self.programs, course) is not None:
            opened = self.create_section(course, year_level)
            open_sections = [self._find(self.sections, opened.id)]

        section_code = ""
        if open_sections:
            section_code = open_sections[-1].section_code
            open_sections[-1].student_count += 1

        student = Student(
            id=db_id,
            student_id=student_id,
            username=generate_student_username(student_id),
            first_name=first_name,
            last_name=last_name,
            course=course,
            status=status,
            year=year,
            section=section_code,
            **details,
        )
        self.students.append(student)
        logger.info("Mock created student %s (%s)", student.username, student.full_name)
        return copy.deepcopy(student)

    def create_faculty(
        self,
        first_name: str,
        last_name: str,
        department: str = "Teaching",
        employment_type: Optional[str] = None,
        **details,
    ) -> Faculty:
        """Add a faculty member. Administrative faculty get an admin-style username."""
        if not first_name or not last_name:
            raise ValueError("First and last name are required.")
        db_id = self._next_faculty_id
        self._next_faculty_id += 1

        teacher_id = generate_teacher_id(db_id)
        department = department or "Teaching"
        faculty = Faculty(
            id=db_id,
            teacher_id=teacher_id,
            username=generate_teacher_username(teacher_id, department),
            first_name=first_name,
            last_name=last_name,
            department=department,
            employment_type=employment_type,
            **details,
        )
        self.faculty.append(faculty)
        logger.info("Mock created faculty %s (%s)", faculty.username, faculty.full_name)
        return copy.deepcopy(faculty)

    def create_section(self, program_id: str, year_level: str) -> Section:
        """Open a new section, lettered after those already open for the program and year."""
        program = self._find(self.programs, program_id)
        if program is None:
            raise LookupError(f"Program {program_id} not found.")
        existing = sum(
            1 for s in self.sections
            if s.program_id == program_id and s.year_level == year_level
        )
        code = generate_section_code(year_level, existing)
        section = Section(
            id=f"{program_id}-{code}",
            section_code=code,
            program_id=program_id,
            year_level=year_level,
            program_name=program.name,
        )
        if self._find(self.sections, section.id) is not None:
            raise ValueError(f"Section {section.id} already exists.")
        self.sections.append(section)
        logger.info("Mock created section %s", section.id)
        return copy.deepcopy(section)

    def update_grades(self, assignment_id: str, student_id: int, **changes) -> GradeRecord:
        """Update term grades and remarks of one record. Grades are validated first."""
        record = next(
            (g for g in self.grades if g.assignment_id == assignment_id and g.student_id == student_id),
            None,
        )
        if record is None:
            raise LookupError(f"No grade record {assignment_id} for student {student_id}.")

        allowed = {
            "prelim_grade", "midterm_grade", "final_grade",
            "prelim_remarks", "midterm_remarks", "final_remarks",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown grade fields: {', '.join(sorted(unknown))}")

        validated = {
            key: validate_score(value) if key.endswith("_grade") else value
            for key, value in changes.items()
        }
        for key, value in validated.items():
            setattr(record, key, value)
        return copy.deepcopy(record)

    def post_announcement(
        self,
        title: str,
        content: str,
        target_course: Optional[str] = None,
        target_year_level: Optional[str] = None,
        target_section: Optional[str] = None,
        author: str = "Admin",
    ) -> Announcement:
        if not title or not content:
            raise ValueError("Title and content are required.")
        announcement = Announcement(
            id=f"ann{len(self.announcements) + 1}",
            title=title,
            content=content,
            date=datetime.now(),
            target_course=target_course,
            target_year_level=target_year_level,
            target_section=target_section,
            author=author,
        )
        self.announcements.insert(0, announcement)
        return copy.deepcopy(announcement)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _section_key(self, section_id: str) -> Optional[tuple[str, str]]:
        section = self._find(self.sections, section_id)
        return (section.program_id, section.section_code) if section else None

    @staticmethod
    def _find(items, item_id):
        return next((item for item in items if item.id == item_id), None)
