"""Population breakdowns: counts of people by a primary and a secondary category."""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, TypeVar

import pandas as pd

from config.settings import get_settings
from .ordering import sort_primary_keys, sort_secondary_keys

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BreakdownGroup:
    """One primary category with its per-secondary counts."""

    key: str
    total: int
    cells: tuple[tuple[str, int], ...] = ()
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or self.key

    def count(self, secondary_key: str) -> int:
        for key, count in self.cells:
            if key == secondary_key:
                return count
        return 0

    @property
    def secondary_keys(self) -> list[str]:
        return [key for key, _ in self.cells]


@dataclass(frozen=True)
class BreakdownTable:
    """Ordered primary groups, each holding ordered secondary counts."""

    groups: tuple[BreakdownGroup, ...] = ()
    primary_default: str = ""
    secondary_default: str = ""

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def grand_total(self) -> int:
        return sum(group.total for group in self.groups)

    @property
    def primary_keys(self) -> list[str]:
        return [group.key for group in self.groups]

    def get(self, primary_key: str) -> Optional[BreakdownGroup]:
        for group in self.groups:
            if group.key == primary_key:
                return group
        return None

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Nested mapping form: primary -> {secondary: count, "total": total}."""
        return {
            group.key: {**dict(group.cells), "total": group.total}
            for group in self.groups
        }


def _resolve_key(value, default: str) -> str:
    if value is None:
        return default
    value = str(value)
    if not value.strip():
        return default
    return value


def aggregate(
    entities: Iterable[T],
    primary_key_of: Callable[[T], Optional[str]],
    secondary_key_of: Callable[[T], Optional[str]],
    primary_default: str,
    secondary_default: str,
) -> BreakdownTable:
    """
    Count entities into primary -> secondary cells.

    Missing or blank keys fall back to the given defaults, so every entity is
    counted exactly once. Duplicates are not removed here; see dedupe_by_id.
    Groups come back sorted by key with the default labels last; use
    order_breakdown for display names or year-level ordering.
    """
    counts: dict[str, dict[str, int]] = {}
    for entity in entities:
        primary = _resolve_key(primary_key_of(entity), primary_default)
        secondary = _resolve_key(secondary_key_of(entity), secondary_default)
        cells = counts.setdefault(primary, {})
        cells[secondary] = cells.get(secondary, 0) + 1

    groups = []
    for primary in sort_primary_keys(counts, sentinel=primary_default):
        cells = counts[primary]
        ordered = sort_secondary_keys(cells, sentinel=secondary_default)
        groups.append(
            BreakdownGroup(
                key=primary,
                total=sum(cells.values()),
                cells=tuple((key, cells[key]) for key in ordered),
            )
        )

    return BreakdownTable(
        groups=tuple(groups),
        primary_default=primary_default,
        secondary_default=secondary_default,
    )


def order_breakdown(
    table: BreakdownTable,
    display_name: Optional[Callable[[str], str]] = None,
    by_year_level: bool = False,
) -> BreakdownTable:
    """Reorder a table for display.

    Primary groups sort by display name with the default label last.
    Secondary cells sort alphabetically, or by year ordinal when
    by_year_level is set, again with the default label last.
    """
    by_key = {group.key: group for group in table.groups}

    groups = []
    for primary in sort_primary_keys(by_key, sentinel=table.primary_default, display_name=display_name):
        group = by_key[primary]
        cells = dict(group.cells)
        ordered = sort_secondary_keys(cells, sentinel=table.secondary_default, by_year_level=by_year_level)
        groups.append(
            replace(
                group,
                cells=tuple((key, cells[key]) for key in ordered),
                label=display_name(primary) if display_name else "",
            )
        )
    return replace(table, groups=tuple(groups))


def dedupe_by_id(entities: Iterable[T], id_of: Callable[[T], object] = lambda e: e.id) -> list[T]:
    """Drop repeated records, keeping the last one seen for each id.

    Output keeps the position of each id's first appearance.
    """
    latest: dict = {}
    for entity in entities:
        latest[id_of(entity)] = entity
    return list(latest.values())


def student_population(students: Iterable, programs: Iterable = ()) -> BreakdownTable:
    """Students by program and year level, ordered for display.

    A student's course may hold either a program id or its name; ids are
    shown by the program's name.
    """
    settings = get_settings()
    students = dedupe_by_id(students)
    names = {}
    for program in programs:
        names[program.id] = program.display_name

    table = aggregate(
        students,
        lambda s: s.course,
        lambda s: s.year,
        settings.UNSPECIFIED_PROGRAM,
        settings.UNSPECIFIED_YEAR,
    )
    logger.debug("Student population: %d students in %d programs", table.grand_total, len(table))
    return order_breakdown(table, display_name=lambda key: names.get(key, key), by_year_level=True)


def faculty_population(faculty: Iterable) -> BreakdownTable:
    """Faculty by department and employment type, ordered for display."""
    settings = get_settings()
    table = aggregate(
        dedupe_by_id(faculty),
        lambda f: f.department,
        lambda f: f.employment_type,
        settings.UNSPECIFIED_DEPARTMENT,
        settings.UNSPECIFIED_EMPLOYMENT_TYPE,
    )
    logger.debug("Faculty population: %d faculty in %d departments", table.grand_total, len(table))
    return order_breakdown(table)


def breakdown_to_frame(
    table: BreakdownTable,
    primary_column: str = "Group",
    secondary_column: str = "Category",
) -> pd.DataFrame:
    """Flatten a table to one row per cell, in table order."""
    rows = []
    for group in table:
        for key, count in group.cells:
            rows.append(
                {
                    primary_column: group.display_name,
                    secondary_column: key,
                    "Count": count,
                }
            )
    return pd.DataFrame(rows, columns=[primary_column, secondary_column, "Count"])
