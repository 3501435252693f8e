"""Tests for population breakdowns: counting, defaults, ordering and flattening."""

from dataclasses import dataclass
from typing import Optional

import pytest

from src.data.models import Faculty, Program, Student
from src.reports.breakdown import (
    BreakdownTable,
    aggregate,
    breakdown_to_frame,
    dedupe_by_id,
    faculty_population,
    order_breakdown,
    student_population,
)


@dataclass
class Person:
    id: int
    group: Optional[str]
    kind: Optional[str]


def _people():
    return [
        Person(1, "BSIT", "1st Year"),
        Person(2, "BSIT", "2nd Year"),
        Person(3, "BSCS", "1st Year"),
        Person(4, None, "3rd Year"),
        Person(5, "BSIT", None),
        Person(6, "BSIT", "1st Year"),
        Person(7, "", ""),
    ]


def _aggregate(people):
    return aggregate(
        people,
        lambda p: p.group,
        lambda p: p.kind,
        "Program Not Specified",
        "Year Not Specified",
    )


def _student(id, course="CS", year="1st Year"):
    return Student(id=id, student_id=str(100 + id), first_name="First", last_name="Last", course=course, year=year)


def _faculty(id, department="Teaching", employment_type="Regular"):
    return Faculty(
        id=id,
        teacher_id=str(1000 + id),
        first_name="First",
        last_name="Last",
        department=department,
        employment_type=employment_type,
    )


class TestAggregate:
    def test_grand_total_equals_entity_count(self):
        people = _people()
        table = _aggregate(people)
        assert table.grand_total == len(people)

    def test_all_cells_sum_to_entity_count(self):
        people = _people()
        table = _aggregate(people)
        assert sum(count for group in table for _, count in group.cells) == len(people)

    def test_group_total_equals_sum_of_cells(self):
        for group in _aggregate(_people()):
            assert group.total == sum(count for _, count in group.cells)

    def test_counts_per_cell(self):
        table = _aggregate(_people())
        bsit = table.get("BSIT")
        assert bsit.total == 4
        assert bsit.count("1st Year") == 2
        assert bsit.count("2nd Year") == 1
        assert bsit.count("Year Not Specified") == 1

    def test_missing_primary_uses_default(self):
        table = _aggregate([Person(1, None, "1st Year")])
        assert table.primary_keys == ["Program Not Specified"]
        assert table.get("Program Not Specified").count("1st Year") == 1

    def test_blank_keys_use_defaults(self):
        table = _aggregate([Person(1, "  ", "")])
        group = table.get("Program Not Specified")
        assert group.count("Year Not Specified") == 1

    def test_empty_input_gives_empty_table(self):
        table = _aggregate([])
        assert len(table) == 0
        assert table.grand_total == 0
        assert table.to_dict() == {}

    def test_accepts_generator(self):
        table = _aggregate(p for p in _people())
        assert table.grand_total == 7

    def test_idempotent(self):
        people = _people()
        assert _aggregate(people) == _aggregate(people)

    def test_order_of_input_does_not_change_counts(self):
        people = _people()
        assert _aggregate(people).to_dict() == _aggregate(list(reversed(people))).to_dict()

    def test_duplicates_are_counted(self):
        table = _aggregate([Person(1, "BSIT", "1st Year"), Person(1, "BSIT", "1st Year")])
        assert table.grand_total == 2

    def test_default_primary_sorted_last(self):
        table = _aggregate(_people())
        assert table.primary_keys == ["BSCS", "BSIT", "Program Not Specified"]

    def test_to_dict_includes_totals(self):
        table = _aggregate([Person(1, "BSCS", "1st Year")])
        assert table.to_dict() == {"BSCS": {"1st Year": 1, "total": 1}}

    def test_does_not_mutate_input(self):
        people = _people()
        snapshot = [Person(p.id, p.group, p.kind) for p in people]
        _aggregate(people)
        assert people == snapshot


class TestOrderBreakdown:
    def test_sentinel_primary_last_regardless_of_alphabet(self):
        people = [
            Person(1, "BSIT", "1st Year"),
            Person(2, None, "1st Year"),
            Person(3, "BSCS", "1st Year"),
        ]
        table = order_breakdown(_aggregate(people))
        assert table.primary_keys == ["BSCS", "BSIT", "Program Not Specified"]

    def test_sorts_by_display_name(self):
        people = [Person(1, "IT", "1st Year"), Person(2, "CS", "1st Year"), Person(3, "AR", "1st Year")]
        names = {"IT": "Information Technology", "CS": "Computer Science", "AR": "Zoology"}
        table = order_breakdown(_aggregate(people), display_name=lambda k: names.get(k, k))
        assert table.primary_keys == ["CS", "IT", "AR"]
        assert [g.display_name for g in table] == ["Computer Science", "Information Technology", "Zoology"]

    def test_year_levels_by_ordinal(self):
        people = [
            Person(1, "BSIT", "10th Year"),
            Person(2, "BSIT", "2nd Year"),
            Person(3, "BSIT", None),
            Person(4, "BSIT", "1st Year"),
        ]
        table = order_breakdown(_aggregate(people), by_year_level=True)
        assert table.get("BSIT").secondary_keys == ["1st Year", "2nd Year", "10th Year", "Year Not Specified"]

    def test_reordering_keeps_counts(self):
        table = _aggregate(_people())
        ordered = order_breakdown(table, by_year_level=True)
        assert ordered.to_dict() == table.to_dict()
        assert ordered.grand_total == table.grand_total

    def test_returns_new_table(self):
        table = _aggregate(_people())
        ordered = order_breakdown(table, display_name=str.lower)
        assert ordered is not table
        assert all(g.label == "" for g in table)


class TestDedupeById:
    def test_last_value_wins(self):
        people = [Person(1, "BSIT", "1st Year"), Person(2, "BSCS", "1st Year"), Person(1, "BSCS", "2nd Year")]
        deduped = dedupe_by_id(people)
        assert len(deduped) == 2
        assert deduped[0] == Person(1, "BSCS", "2nd Year")

    def test_keeps_first_position(self):
        people = [Person(2, "A", None), Person(1, "B", None), Person(2, "C", None)]
        assert [p.id for p in dedupe_by_id(people)] == [2, 1]

    def test_custom_id(self):
        rows = [{"key": "a", "v": 1}, {"key": "a", "v": 2}]
        assert dedupe_by_id(rows, id_of=lambda r: r["key"]) == [{"key": "a", "v": 2}]

    def test_empty(self):
        assert dedupe_by_id([]) == []


class TestStudentPopulation:
    def test_program_names_from_lookup(self):
        programs = [Program(id="CS", name="Computer Science"), Program(id="IT", name="Information Technology")]
        students = [_student(1, "IT"), _student(2, "CS"), _student(3, "CS", "2nd Year")]
        table = student_population(students, programs)
        assert [g.display_name for g in table] == ["Computer Science", "Information Technology"]
        assert table.get("CS").secondary_keys == ["1st Year", "2nd Year"]

    def test_unknown_program_uses_raw_key(self):
        table = student_population([_student(1, "Nursing")], [])
        assert table.get("Nursing").display_name == "Nursing"

    def test_missing_program_and_year(self):
        table = student_population([_student(1, "", None), _student(2, "CS", "1st Year")])
        assert table.primary_keys[-1] == "Program Not Specified"
        assert table.get("Program Not Specified").count("Year Not Specified") == 1

    def test_duplicate_ids_counted_once(self):
        students = [_student(1, "CS"), _student(1, "IT")]
        table = student_population(students)
        assert table.grand_total == 1
        assert table.primary_keys == ["IT"]


class TestFacultyPopulation:
    def test_department_by_employment_type(self):
        faculty = [
            _faculty(1, "Teaching", "Regular"),
            _faculty(2, "Administrative", "Part Time"),
            _faculty(3, "Teaching", "Part Time"),
            _faculty(4, None, None),
        ]
        table = faculty_population(faculty)
        assert table.primary_keys == ["Administrative", "Teaching", "Unspecified Department"]
        assert table.get("Teaching").secondary_keys == ["Part Time", "Regular"]
        assert table.get("Unspecified Department").count("Unspecified Type") == 1
        assert table.grand_total == 4


class TestBreakdownToFrame:
    def test_one_row_per_cell(self):
        table = order_breakdown(_aggregate(_people()), by_year_level=True)
        df = breakdown_to_frame(table, primary_column="Program", secondary_column="Year")
        assert list(df.columns) == ["Program", "Year", "Count"]
        assert df["Count"].sum() == 7
        assert len(df) == sum(len(g.cells) for g in table)

    def test_empty_table(self):
        df = breakdown_to_frame(BreakdownTable())
        assert df.empty
        assert list(df.columns) == ["Group", "Category", "Count"]

    def test_uses_display_names(self):
        table = order_breakdown(_aggregate([Person(1, "CS", "1st Year")]), display_name=lambda k: "Computer Science")
        df = breakdown_to_frame(table)
        assert df.iloc[0]["Group"] == "Computer Science"
