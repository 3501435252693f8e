"""Admin dashboard counts, admin directory and announcement targeting."""

from typing import Iterable, Optional

import pandas as pd

from src.data.models import AdminUser, Announcement, DashboardStats

ALL = "all"


def compute_dashboard_stats(students: Iterable, faculty: Iterable, upcoming_events: int = 0) -> DashboardStats:
    """Headline counts. Admins are the super admin plus Administrative faculty."""
    faculty = list(faculty)
    teaching = sum(1 for f in faculty if f.department == "Teaching")
    administrative = sum(1 for f in faculty if f.department == "Administrative")
    return DashboardStats(
        total_students=len(list(students)),
        total_teachers=teaching,
        total_admins=1 + administrative,
        upcoming_events=upcoming_events,
    )


def _target_matches(target: Optional[str], value: Optional[str]) -> bool:
    if target is None or target == "" or target == ALL:
        return True
    return target == value


def announcements_for(
    announcements: Iterable[Announcement],
    course: Optional[str] = None,
    year_level: Optional[str] = None,
    section: Optional[str] = None,
) -> list[Announcement]:
    """Announcements addressed to a student in the given course, year and section, newest first."""
    matched = [
        a for a in announcements
        if _target_matches(a.target_course, course)
        and _target_matches(a.target_year_level, year_level)
        and _target_matches(a.target_section, section)
    ]
    return sorted(matched, key=lambda a: a.date, reverse=True)


def admin_directory(admins: Iterable[AdminUser]) -> pd.DataFrame:
    """Admin accounts for display, super admins first then by username."""
    ordered = sorted(admins, key=lambda a: (not a.is_super_admin, a.username))
    return pd.DataFrame(
        [
            {
                "Username": a.username,
                "Name": f"{a.first_name} {a.last_name}".strip(),
                "Email": a.email or "",
                "Role": a.role,
            }
            for a in ordered
        ],
        columns=["Username", "Name", "Email", "Role"],
    )
