"""Derived orderings and filters over cases, for display."""

from collections.abc import Iterable
from datetime import date, timedelta
from typing import Literal

from advocate_diary.models.case import Case, CaseStatus

CaseFilter = Literal["all", "ongoing", "week"]


def hearing_date(case: Case) -> date | None:
    """Parse the next hearing date; None when unset or unreadable."""
    if not case.next_hearing_date:
        return None
    try:
        return date.fromisoformat(case.next_hearing_date[:10])
    except ValueError:
        return None


def sort_by_next_hearing(cases: Iterable[Case]) -> list[Case]:
    """Soonest hearing first; cases without a date go last in their original order."""
    cases = list(cases)
    dated = [c for c in cases if hearing_date(c) is not None]
    undated = [c for c in cases if hearing_date(c) is None]
    return sorted(dated, key=lambda c: hearing_date(c) or date.max) + undated


def _matches(case: Case, query: str) -> bool:
    q = query.lower()
    return (
        q in case.title.lower()
        or q in case.reference_number.lower()
        or q in case.court_name.lower()
    )


def filter_cases(
    cases: Iterable[Case],
    *,
    case_filter: CaseFilter = "all",
    query: str = "",
    today: date | None = None,
) -> list[Case]:
    """Filter sorted cases by status/week window and a free-text query.

    Args:
        cases: Cases to filter.
        case_filter: "all", "ongoing" (status Ongoing), or "week" (hearing within
            the next seven days, today included).
        query: Case-insensitive match on title, reference number, or court.
        today: Reference day for the week window.
    """
    today = today or date.today()
    result = sort_by_next_hearing(cases)

    if case_filter == "ongoing":
        result = [c for c in result if c.status == CaseStatus.ONGOING]
    elif case_filter == "week":
        week_later = today + timedelta(days=7)
        result = [
            c for c in result if (d := hearing_date(c)) is not None and today <= d <= week_later
        ]

    if query:
        result = [c for c in result if _matches(c, query)]
    return result


def upcoming_hearings(cases: Iterable[Case], today: date | None = None) -> list[Case]:
    """Ongoing cases with a hearing today or later, soonest first."""
    today = today or date.today()
    return [
        c
        for c in sort_by_next_hearing(cases)
        if c.status == CaseStatus.ONGOING and (d := hearing_date(c)) is not None and d >= today
    ]


def overdue_hearings(cases: Iterable[Case], today: date | None = None) -> list[Case]:
    """Ongoing cases whose hearing date has passed without being updated."""
    today = today or date.today()
    return [
        c
        for c in sort_by_next_hearing(cases)
        if c.status == CaseStatus.ONGOING and (d := hearing_date(c)) is not None and d < today
    ]
