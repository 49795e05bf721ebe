"""Configuration constants for advocate-diary."""

import os
from pathlib import Path

# Environment variable that overrides the data directory lookup.
DATA_DIR_ENV_VAR = "ADVOCATE_DIARY_HOME"

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/advocate-diary").expanduser(),
    Path("~/.advocate-diary").expanduser(),
    Path("~/.config/advocate-diary").expanduser(),
]

# Slot holding the whole diary dataset as one JSON document.
DATA_SLOT_KEY = "advocate_diary_data"

# Slot holding the epoch-millisecond time the backup reminder was last shown.
REMINDER_SLOT_KEY = "last_backup_prompt_ts"

# Minimum time between two backup reminders.
BACKUP_REMINDER_INTERVAL_MS = 24 * 60 * 60 * 1000

BACKUP_FILE_PREFIX = "diary_backup_"
BACKUP_FILE_SUFFIX = ".json"

# Environment variable naming a file that receives a timestamped copy of the log.
LOG_FILE_ENV_VAR = "ADVOCATE_DIARY_LOG"

# Log file is rotated at this size; this many rotated files are kept.
LOG_ROTATION = "1 MB"
LOG_RETENTION = 3


def resolve_data_directory() -> Path:
    """Return the diary data directory.

    The environment variable wins; otherwise the first existing candidate is used,
    falling back to the first candidate (created on first save).
    """
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
