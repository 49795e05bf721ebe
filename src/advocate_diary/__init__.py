"""Advocate's diary: local case tracking with JSON backup and merge-import."""

from advocate_diary.core.store import DiaryStore
from advocate_diary.core.reminder import ReminderGate
from advocate_diary.diary import Diary
from advocate_diary.protocols import SlotStoreProtocol
from advocate_diary.storage.slots import FileSlotStore

__all__ = ["Diary", "DiaryStore", "FileSlotStore", "ReminderGate", "SlotStoreProtocol"]
