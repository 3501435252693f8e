"""Sort keys for presenting breakdown tables."""

import re
from typing import Callable, Iterable, Optional

_ORDINAL_PATTERN = re.compile(r"\d+")


def label_sort_key(label: str, sentinel: Optional[str] = None) -> tuple:
    """Lexicographic order with the sentinel label pushed to the end."""
    return (label == sentinel, label)


def year_level_sort_key(label: str, sentinel: Optional[str] = None) -> tuple:
    """Order year labels by their embedded number ("2nd Year" before "10th Year").

    Labels without a number follow the numbered ones alphabetically, and the
    sentinel comes last.
    """
    if label == sentinel:
        return (2, 0, label)
    match = _ORDINAL_PATTERN.search(label)
    if match is None:
        return (1, 0, label)
    return (0, int(match.group()), label)


def sort_primary_keys(
    keys: Iterable[str],
    sentinel: Optional[str] = None,
    display_name: Optional[Callable[[str], str]] = None,
) -> list[str]:
    """Sort primary keys by display name, sentinel last whatever its spelling."""
    if display_name is None:
        display_name = _identity
    return sorted(keys, key=lambda key: (key == sentinel, display_name(key), key))


def sort_secondary_keys(
    keys: Iterable[str],
    sentinel: Optional[str] = None,
    by_year_level: bool = False,
) -> list[str]:
    """Sort secondary keys, by year ordinal when they are year levels."""
    if by_year_level:
        return sorted(keys, key=lambda key: year_level_sort_key(key, sentinel))
    return sorted(keys, key=lambda key: label_sort_key(key, sentinel))


def _identity(key: str) -> str:
    return key
