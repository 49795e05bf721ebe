"""Exceptions raised by the diary core."""


class DiaryError(Exception):
    """Base exception for the advocate's diary."""


class StoreCorruptError(DiaryError):
    """The persisted dataset exists but cannot be decoded."""
