"""Shared test fixtures."""

import pytest

from advocate_diary.core.reminder import ReminderGate
from advocate_diary.core.store import DiaryStore
from advocate_diary.diary import Diary
from advocate_diary.models.case import Case, CaseStatus, Dataset, Hearing
from tests.unit.fakes import FakeClock, FakeSlotStore


@pytest.fixture
def sample_dataset() -> Dataset:
    """Return a dataset equal to SAMPLE_DOCUMENT."""
    return Dataset(
        cases=(
            Case(
                id="case-a",
                title="State v. Rao",
                reference_number="CRL 112/2023",
                court_name="Sessions Court, Pune",
                description="Bail matter",
                status=CaseStatus.ONGOING,
                next_hearing_date="2024-02-15",
                history=(
                    Hearing(id="h1", date="2023-12-01", note="Adjourned"),
                    Hearing(id="h2", date="2024-01-10", note="Hearing rescheduled to Feb 15, 2024"),
                ),
                created_at="2023-11-20T10:00:00.000Z",
            ),
            Case(
                id="case-b",
                title="Mehta v. Mehta",
                court_name="Family Court",
                status=CaseStatus.STAYED,
                created_at="2024-01-02T08:30:00.000Z",
            ),
        ),
        last_backup_date="2024-01-05T12:00:00.000Z",
        advocate_name="A. Sharma",
    )


@pytest.fixture
def slots() -> FakeSlotStore:
    return FakeSlotStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def diary(slots: FakeSlotStore, clock: FakeClock) -> Diary:
    """Return a loaded, empty diary backed by in-memory slots."""
    d = Diary(DiaryStore(slots), ReminderGate(slots, clock=clock))
    d.load()
    return d
