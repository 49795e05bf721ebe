"""File-backed key-value slots for the diary."""

import os
import re
import tempfile
from pathlib import Path

from loguru import logger

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileSlotStore:
    """Store each slot as a single file under a data directory.

    Writes replace the whole file atomically: the new contents go to a temporary
    file in the same directory, which is then renamed over the old one. A crash
    mid-write leaves either the old or the new document, never a mix.
    """

    def __init__(self, datadir: str | Path) -> None:
        self.datadir = str(Path(datadir).expanduser().resolve())
        logger.debug("Slot store ready, datadir {!r}", self.datadir)

    def _slot_path(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key.startswith("."):
            msg = f"Invalid slot key: {key!r}"
            raise ValueError(msg)
        fname = str(Path(self.datadir) / key)
        if not fname.startswith(self.datadir + "/"):
            msg = f"Path escapes datadir: {fname!r}"
            raise ValueError(msg)
        return Path(fname)

    def read(self, key: str) -> str | None:
        """Return the slot contents, or None if the slot was never written.

        Raises on all other errors.
        """
        path = self._slot_path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, value: str) -> None:
        """Replace the slot contents."""
        path = self._slot_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote slot {!r} ({} chars)", key, len(value))

    def remove(self, key: str) -> None:
        """Delete the slot file if it exists."""
        path = self._slot_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        logger.debug("Removed slot {!r}", key)
