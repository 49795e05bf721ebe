"""Domain models for the advocate's diary."""

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_ADVOCATE_NAME = "Counsel"


class CaseStatus(StrEnum):
    """Procedural status of a case."""

    ONGOING = "Ongoing"
    DISPOSED = "Disposed"
    STAYED = "Stayed"
    APPEALED = "Appealed"
    DISMISSED = "Dismissed"


@dataclass(frozen=True)
class Hearing:
    """A past hearing date recorded when a case was rescheduled."""

    id: str
    date: str
    note: str = ""


@dataclass(frozen=True)
class Case:
    """A single tracked legal matter."""

    id: str
    title: str
    court_name: str
    created_at: str
    reference_number: str = ""
    description: str = ""
    status: CaseStatus = CaseStatus.ONGOING
    # ISO date, or "" when the next hearing is not yet fixed.
    next_hearing_date: str = ""
    # Oldest first.
    history: tuple[Hearing, ...] = ()


@dataclass(frozen=True)
class Dataset:
    """The persisted root: every case plus backup metadata and owner name."""

    cases: tuple[Case, ...] = ()
    last_backup_date: str | None = None
    advocate_name: str = DEFAULT_ADVOCATE_NAME

    def find(self, case_id: str) -> Case | None:
        """Return the case with the given id, or None."""
        for case in self.cases:
            if case.id == case_id:
                return case
        return None


def empty_dataset() -> Dataset:
    """Return the dataset used on first run, after purge, and on corrupt storage."""
    return Dataset(cases=(), last_backup_date=None, advocate_name=DEFAULT_ADVOCATE_NAME)
