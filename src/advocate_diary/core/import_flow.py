"""Two-step import: parse and stage a backup, then merge or discard it."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from loguru import logger

from advocate_diary.core.backup import ParseFailure, ParseOk, parse_import
from advocate_diary.core.merge import MergeStats, merge_with_stats
from advocate_diary.models.case import Dataset


class ImportState(StrEnum):
    IDLE = "idle"
    STAGED = "staged"
    MERGED = "merged"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class FileReadFailure:
    """The backup file itself could not be read."""

    reason: str


class ImportSession:
    """Hold a parsed backup until the user confirms or discards it.

    Transitions: IDLE -> STAGED -> MERGED or DISCARDED. Staging again from any
    state replaces a pending dataset. A failed read or parse leaves the state as it
    was, so a live dataset is never touched by a bad file.
    """

    def __init__(self) -> None:
        self.state = ImportState.IDLE
        self._staged: Dataset | None = None
        self.last_stats: MergeStats | None = None

    @property
    def staged(self) -> Dataset | None:
        """The dataset awaiting confirmation, if any."""
        return self._staged

    def stage_text(self, text: str) -> ParseOk | ParseFailure:
        """Parse backup text; on success, stage it for confirmation."""
        result = parse_import(text)
        if isinstance(result, ParseOk):
            self._staged = result.dataset
            self.state = ImportState.STAGED
            logger.debug("Staged import with {} cases", len(result.dataset.cases))
        return result

    def stage_file(self, path: str | Path) -> ParseOk | ParseFailure | FileReadFailure:
        """Read a backup file and stage its contents."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read {}: {}", path, e)
            return FileReadFailure(reason=str(e))
        return self.stage_text(text)

    def _require_staged(self) -> Dataset:
        if self.state != ImportState.STAGED or self._staged is None:
            msg = f"No import is staged (state: {self.state})"
            raise RuntimeError(msg)
        return self._staged

    def confirm(self, current: Dataset) -> Dataset:
        """Merge the staged dataset into current and return the result."""
        incoming = self._require_staged()
        merged, self.last_stats = merge_with_stats(current, incoming)
        self._staged = None
        self.state = ImportState.MERGED
        logger.info(
            "Imported {} new cases, skipped {} already present",
            self.last_stats.cases_added,
            self.last_stats.cases_skipped,
        )
        return merged

    def discard(self) -> None:
        """Drop the staged dataset without merging."""
        self._require_staged()
        self._staged = None
        self.state = ImportState.DISCARDED
        logger.debug("Discarded staged import")
