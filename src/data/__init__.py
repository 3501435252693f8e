from typing import Optional, Union

from config.settings import get_settings

from .client import CampusClient, get_client
from .mock import MockBackend
from .models import Student, Faculty, Program, GradeRecord, AttendanceRecord

Backend = Union[CampusClient, MockBackend]

_mock: Optional[MockBackend] = None


def get_backend() -> Backend:
    """The mock store or the HTTP client, depending on USE_MOCK_API."""
    global _mock
    if not get_settings().USE_MOCK_API:
        return get_client()
    if _mock is None:
        _mock = MockBackend()
    return _mock


__all__ = [
    "Backend",
    "CampusClient",
    "MockBackend",
    "get_backend",
    "get_client",
    "Student",
    "Faculty",
    "Program",
    "GradeRecord",
    "AttendanceRecord",
]
