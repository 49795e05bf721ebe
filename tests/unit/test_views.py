"""Tests for derived case orderings and filters."""

from datetime import date

from advocate_diary.core.views import (
    filter_cases,
    overdue_hearings,
    sort_by_next_hearing,
    upcoming_hearings,
)
from advocate_diary.models.case import CaseStatus
from tests.unit.fakes import make_case

TODAY = date(2024, 3, 10)

CASES = [
    make_case("tbd", title="Undated", next_hearing_date=""),
    make_case("late", title="Later", next_hearing_date="2024-04-01", court_name="District Court"),
    make_case("soon", title="Soon", next_hearing_date="2024-03-12", reference_number="OS 5/2024"),
    make_case("past", title="Past", next_hearing_date="2024-03-01"),
    make_case("done", title="Done", next_hearing_date="2024-03-11", status=CaseStatus.DISPOSED),
]


def test_sort_puts_undated_cases_last() -> None:
    ids = [c.id for c in sort_by_next_hearing(CASES)]

    assert ids == ["past", "done", "soon", "late", "tbd"]


def test_filter_ongoing() -> None:
    ids = [c.id for c in filter_cases(CASES, case_filter="ongoing", today=TODAY)]

    assert ids == ["past", "soon", "late", "tbd"]


def test_filter_week_window() -> None:
    ids = [c.id for c in filter_cases(CASES, case_filter="week", today=TODAY)]

    assert ids == ["done", "soon"]


def test_filter_query_matches_title_reference_and_court() -> None:
    assert [c.id for c in filter_cases(CASES, query="later", today=TODAY)] == ["late"]
    assert [c.id for c in filter_cases(CASES, query="os 5", today=TODAY)] == ["soon"]
    assert [c.id for c in filter_cases(CASES, query="district", today=TODAY)] == ["late"]


def test_upcoming_and_overdue_only_consider_ongoing() -> None:
    assert [c.id for c in upcoming_hearings(CASES, TODAY)] == ["soon", "late"]
    assert [c.id for c in overdue_hearings(CASES, TODAY)] == ["past"]


def test_unreadable_dates_are_treated_as_undated() -> None:
    cases = [
        make_case("odd", next_hearing_date="next week"),
        make_case("ok", next_hearing_date="2024-03-20"),
    ]

    assert [c.id for c in sort_by_next_hearing(cases)] == ["ok", "odd"]
    assert overdue_hearings(cases, TODAY) == []
