"""The diary facade used by front-ends."""

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from loguru import logger

from advocate_diary.core import backup
from advocate_diary.core.backup import ParseResult
from advocate_diary.core.cases import delete_case, upsert_case
from advocate_diary.core.import_flow import ImportSession
from advocate_diary.core.merge import MergeStats, merge_with_stats
from advocate_diary.core.reminder import ReminderGate
from advocate_diary.core.store import DiaryStore
from advocate_diary.models.case import Case, Dataset, empty_dataset
from advocate_diary.storage.slots import FileSlotStore


class Diary:
    """Live dataset plus explicit handles to its store and reminder gate.

    Every mutation is persisted immediately as a whole document.
    """

    def __init__(self, store: DiaryStore, reminder: ReminderGate) -> None:
        self.store = store
        self.reminder = reminder
        self.data: Dataset = empty_dataset()

    def load(self) -> Dataset:
        """Reload the dataset from the store."""
        self.data = self.store.load()
        return self.data

    def save(self) -> None:
        """Persist the current dataset."""
        self.store.save(self.data)

    def _commit(self, dataset: Dataset) -> Dataset:
        self.data = dataset
        self.save()
        return dataset

    def save_case(self, case: Case) -> Case:
        """Add a new case, or replace the stored case with the same id."""
        self._commit(upsert_case(self.data, case))
        return case

    def delete_case(self, case_id: str) -> None:
        """Remove a case and its hearing history."""
        self._commit(delete_case(self.data, case_id))

    def set_advocate_name(self, name: str) -> None:
        self._commit(replace(self.data, advocate_name=name))

    def _record_backup(self, stamped: Dataset) -> None:
        self._commit(stamped)
        self.reminder.mark_prompted()

    def export_backup(self, *, now: datetime | None = None) -> bytes:
        """Serialize the diary for backup and record the backup time.

        The stamped dataset is persisted and the reminder is marked as shown.
        """
        payload, stamped = backup.export_backup(self.data, now=now)
        self._record_backup(stamped)
        return payload

    def export_to_directory(self, directory: str | Path, *, now: datetime | None = None) -> Path:
        """Write a backup file into directory; the backup time is recorded only once it exists."""
        payload, stamped = backup.export_backup(self.data, now=now)
        path = backup.write_backup_file(payload, directory, now=now)
        self._record_backup(stamped)
        return path

    def parse_import(self, text: str) -> ParseResult:
        """Parse backup text without touching the live dataset."""
        return backup.parse_import(text)

    def merge_imported(self, incoming: Dataset) -> MergeStats:
        """Merge a parsed backup into the live dataset and persist the result."""
        merged, stats = merge_with_stats(self.data, incoming)
        self._commit(merged)
        return stats

    def confirm_import(self, session: ImportSession) -> MergeStats:
        """Merge the dataset staged in session and persist the result."""
        self._commit(session.confirm(self.data))
        if session.last_stats is None:
            msg = "Import session did not report merge stats"
            raise RuntimeError(msg)
        return session.last_stats

    def should_prompt_backup(self) -> bool:
        return self.reminder.should_prompt()

    def mark_backup_prompted(self) -> None:
        self.reminder.mark_prompted()

    def backup_nudge_due(self) -> bool:
        """True when there is something worth backing up and the reminder is due."""
        return bool(self.data.cases) and self.reminder.should_prompt()

    def purge(self) -> None:
        """Erase every case, reset the profile, and forget the reminder time."""
        self._commit(empty_dataset())
        self.reminder.clear()
        logger.info("Diary purged")


def open_diary(datadir: str | Path) -> Diary:
    """Build a diary backed by files in datadir and load it."""
    slots = FileSlotStore(datadir)
    diary = Diary(DiaryStore(slots), ReminderGate(slots))
    diary.load()
    return diary
