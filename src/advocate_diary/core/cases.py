"""Create, edit, and remove cases in a dataset."""

import uuid
from dataclasses import replace
from datetime import date, datetime

from advocate_diary.core.backup import iso_timestamp
from advocate_diary.models.case import Case, CaseStatus, Dataset, Hearing


def _new_id() -> str:
    return str(uuid.uuid4())


def format_date(value: str) -> str:
    """Format an ISO date for display, e.g. "Jan 10, 2024". Empty means "TBD"."""
    if not value:
        return "TBD"
    try:
        d = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return f"{d:%b} {d.day}, {d.year}"


def new_case(
    *,
    title: str,
    court_name: str,
    reference_number: str = "",
    description: str = "",
    status: CaseStatus = CaseStatus.ONGOING,
    next_hearing_date: str = "",
    now: datetime | None = None,
) -> Case:
    """Create a case with a fresh id and creation time.

    Raises:
        ValueError: If title or court name is empty.
    """
    if not title.strip() or not court_name.strip():
        msg = "Case title and court are required"
        raise ValueError(msg)
    return Case(
        id=_new_id(),
        title=title,
        court_name=court_name,
        reference_number=reference_number,
        description=description,
        status=status,
        next_hearing_date=next_hearing_date,
        history=(),
        created_at=iso_timestamp(now),
    )


def edit_case(
    case: Case,
    *,
    title: str | None = None,
    court_name: str | None = None,
    reference_number: str | None = None,
    description: str | None = None,
    status: CaseStatus | None = None,
    next_hearing_date: str | None = None,
    hearing_note: str = "",
) -> Case:
    """Return an edited copy of case.

    Moving a fixed hearing date to a different one logs the old date in the
    history. Setting a date on a case that had none does not.
    """
    history = case.history
    if (
        next_hearing_date is not None
        and case.next_hearing_date
        and next_hearing_date != case.next_hearing_date
    ):
        note = hearing_note or f"Hearing rescheduled to {format_date(next_hearing_date)}"
        history = (*history, Hearing(id=_new_id(), date=case.next_hearing_date, note=note))

    edited = replace(
        case,
        title=case.title if title is None else title,
        court_name=case.court_name if court_name is None else court_name,
        reference_number=case.reference_number if reference_number is None else reference_number,
        description=case.description if description is None else description,
        status=case.status if status is None else status,
        next_hearing_date=(
            case.next_hearing_date if next_hearing_date is None else next_hearing_date
        ),
        history=history,
    )
    if not edited.title.strip() or not edited.court_name.strip():
        msg = "Case title and court are required"
        raise ValueError(msg)
    return edited


def upsert_case(dataset: Dataset, case: Case) -> Dataset:
    """Replace the case with the same id in place, or put a new case first."""
    cases = list(dataset.cases)
    for i, existing in enumerate(cases):
        if existing.id == case.id:
            cases[i] = case
            break
    else:
        cases.insert(0, case)
    return replace(dataset, cases=tuple(cases))


def delete_case(dataset: Dataset, case_id: str) -> Dataset:
    """Remove a case by id.

    Raises:
        KeyError: If no case has that id.
    """
    remaining = tuple(c for c in dataset.cases if c.id != case_id)
    if len(remaining) == len(dataset.cases):
        msg = f"No case with id {case_id!r}"
        raise KeyError(msg)
    return replace(dataset, cases=remaining)
