"""Throttle for the "please back up" nudge."""

import re
import time
from collections.abc import Callable

from loguru import logger

from advocate_diary.config import BACKUP_REMINDER_INTERVAL_MS, REMINDER_SLOT_KEY
from advocate_diary.protocols import SlotStoreProtocol

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class ReminderGate:
    """Remember when the user was last asked to back up.

    The gate tracks prompts, not backups: dismissing the reminder restarts the
    interval exactly like exporting does. The timestamp lives in its own slot and
    is never part of the exported dataset.
    """

    def __init__(
        self,
        slots: SlotStoreProtocol,
        *,
        clock: Callable[[], float] = time.time,
        interval_ms: int = BACKUP_REMINDER_INTERVAL_MS,
        key: str = REMINDER_SLOT_KEY,
    ) -> None:
        self._slots = slots
        self._clock = clock
        self._interval_ms = interval_ms
        self._key = key

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def last_prompted_ms(self) -> int | None:
        """Return the stored prompt time in epoch milliseconds, if any.

        Only the leading integer is read, so "1700000000000.0" counts as
        1700000000000. Anything without one counts as never prompted.
        """
        try:
            raw = self._slots.read(self._key)
        except UnicodeDecodeError:
            logger.warning("Ignoring undecodable reminder timestamp in slot {}", self._key)
            return None
        if raw is None or not raw.strip():
            return None
        match = _LEADING_INT_RE.match(raw)
        if match is None:
            logger.warning("Ignoring unreadable reminder timestamp {!r}", raw)
            return None
        return int(match.group(1))

    def should_prompt(self) -> bool:
        """Return True if never prompted, or if the last prompt is older than the interval."""
        last = self.last_prompted_ms()
        if last is None:
            return True
        return (self._now_ms() - last) > self._interval_ms

    def mark_prompted(self) -> None:
        """Record now as the last prompt time."""
        self._slots.write(self._key, str(self._now_ms()))

    def clear(self) -> None:
        """Forget the last prompt time."""
        self._slots.remove(self._key)
