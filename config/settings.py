"""Application settings and configuration management."""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Data source
    USE_MOCK_API: bool = _env_flag("USE_MOCK_API", True)
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

    # Grading
    TERMS: list = ["Prelim", "Midterm", "Final"]
    PASSING_GRADE: float = float(os.getenv("PASSING_GRADE", "75"))

    # Attendance weights (Present counts fully, Absent not at all)
    ATTENDANCE_WEIGHTS: dict = {
        "Present": 1.0,
        "Late": 0.5,
        "Excused": 0.8,
        "Absent": 0.0,
    }

    YEAR_LEVELS: list = ["1st Year", "2nd Year", "3rd Year", "4th Year"]
    DEPARTMENTS: list = ["Teaching", "Administrative"]
    EMPLOYMENT_TYPES: list = ["Regular", "Part Time"]

    # Labels substituted for missing categories in population breakdowns
    UNSPECIFIED_PROGRAM: str = "Program Not Specified"
    UNSPECIFIED_YEAR: str = "Year Not Specified"
    UNSPECIFIED_DEPARTMENT: str = "Unspecified Department"
    UNSPECIFIED_EMPLOYMENT_TYPE: str = "Unspecified Type"

    @property
    def api_base_url(self) -> str:
        return self.API_BASE_URL.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
