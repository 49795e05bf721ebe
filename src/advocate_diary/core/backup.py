"""Convert the diary dataset to and from its JSON backup form."""

import json
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from loguru import logger

from advocate_diary.config import BACKUP_FILE_PREFIX, BACKUP_FILE_SUFFIX
from advocate_diary.models.case import Case, CaseStatus, Dataset, Hearing


@dataclass(frozen=True)
class ParseOk:
    """A backup document that passed the shape check."""

    dataset: Dataset


@dataclass(frozen=True)
class ParseFailure:
    """A backup document that was rejected, with a human-readable reason."""

    reason: str


ParseResult = ParseOk | ParseFailure


def iso_timestamp(now: datetime | None = None) -> str:
    """Format a time as ISO-8601 UTC with milliseconds, e.g. 2024-01-10T09:30:00.000Z."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def hearing_to_dict(hearing: Hearing) -> dict[str, Any]:
    return {"id": hearing.id, "date": hearing.date, "note": hearing.note}


def case_to_dict(case: Case) -> dict[str, Any]:
    return {
        "id": case.id,
        "title": case.title,
        "referenceNumber": case.reference_number,
        "courtName": case.court_name,
        "description": case.description,
        "status": str(case.status),
        "nextHearingDate": case.next_hearing_date,
        "history": [hearing_to_dict(h) for h in case.history],
        "createdAt": case.created_at,
    }


def dataset_to_dict(dataset: Dataset) -> dict[str, Any]:
    return {
        "cases": [case_to_dict(c) for c in dataset.cases],
        "lastBackupDate": dataset.last_backup_date,
        "advocateName": dataset.advocate_name,
    }


def _text(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _status(raw: dict[str, Any]) -> CaseStatus:
    value = raw.get("status")
    try:
        return CaseStatus(value)
    except ValueError:
        logger.warning("Unknown status {!r} on case {!r}, using Ongoing", value, raw.get("id"))
        return CaseStatus.ONGOING


def hearing_from_dict(raw: dict[str, Any]) -> Hearing:
    return Hearing(id=_text(raw, "id"), date=_text(raw, "date"), note=_text(raw, "note"))


def case_from_dict(raw: dict[str, Any]) -> Case:
    """Build a Case from its JSON form.

    Only the document shape is checked upstream, so every field is optional here:
    missing text becomes "", a malformed history is treated as empty.
    """
    raw_history = raw.get("history")
    history: list[Hearing] = []
    if isinstance(raw_history, list):
        for entry in raw_history:
            if isinstance(entry, dict):
                history.append(hearing_from_dict(entry))
            else:
                logger.warning("Dropping malformed hearing entry on case {!r}", raw.get("id"))

    return Case(
        id=_text(raw, "id"),
        title=_text(raw, "title"),
        reference_number=_text(raw, "referenceNumber"),
        court_name=_text(raw, "courtName"),
        description=_text(raw, "description"),
        status=_status(raw),
        next_hearing_date=_text(raw, "nextHearingDate"),
        history=tuple(history),
        created_at=_text(raw, "createdAt"),
    )


def check_shape(data: Any) -> str | None:
    """Return why a decoded document is not a dataset, or None if it is one.

    The check is deliberately shallow: the document must be an object with a list
    under "cases". Individual cases are not validated.
    """
    if not isinstance(data, dict):
        return f"expected a JSON object at top level, got {type(data).__name__}"
    if "cases" not in data:
        return "missing 'cases' field"
    if not isinstance(data["cases"], list):
        return f"'cases' must be a list, got {type(data['cases']).__name__}"
    return None


def dataset_from_dict(data: dict[str, Any], *, default_name: str = "") -> Dataset:
    """Build a Dataset from a document that passed check_shape().

    Args:
        data: Decoded JSON document.
        default_name: Advocate name used when the document has none.
    """
    cases: list[Case] = []
    for i, raw_case in enumerate(data["cases"]):
        if not isinstance(raw_case, dict):
            logger.warning("Dropping malformed case entry at index {}", i)
            continue
        cases.append(case_from_dict(raw_case))

    last_backup = data.get("lastBackupDate")
    name = data.get("advocateName")
    return Dataset(
        cases=tuple(cases),
        last_backup_date=last_backup if isinstance(last_backup, str) else None,
        advocate_name=name if isinstance(name, str) else default_name,
    )


def serialize_dataset(dataset: Dataset) -> bytes:
    """Encode the full dataset as pretty-printed UTF-8 JSON."""
    return (json.dumps(dataset_to_dict(dataset), indent=2, ensure_ascii=False) + "\n").encode(
        "utf-8"
    )


def export_backup(dataset: Dataset, *, now: datetime | None = None) -> tuple[bytes, Dataset]:
    """Produce backup bytes and a copy of the dataset stamped with the backup time.

    The bytes encode the dataset as given; the caller must persist the returned copy.
    """
    payload = serialize_dataset(dataset)
    stamped = replace(dataset, last_backup_date=iso_timestamp(now))
    logger.debug("Exported {} cases ({} bytes)", len(dataset.cases), len(payload))
    return payload, stamped


def backup_filename(now: datetime | None = None) -> str:
    """Return the conventional backup file name for the given export time."""
    now = now or datetime.now(UTC)
    day = now.astimezone(UTC).strftime("%Y-%m-%d")
    return f"{BACKUP_FILE_PREFIX}{day}{BACKUP_FILE_SUFFIX}"


def write_backup_file(
    payload: bytes, directory: str | Path, *, now: datetime | None = None
) -> Path:
    """Write backup bytes into directory, never overwriting an existing backup.

    Appends -1, -2, ... to the base name until it does not collide.

    Returns:
        Path of the written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    base = backup_filename(now).removesuffix(BACKUP_FILE_SUFFIX)

    unique_str = ""
    unique_count = 0
    while True:
        path = directory / (base + unique_str + BACKUP_FILE_SUFFIX)
        try:
            with open(path, "xb") as f:
                f.write(payload)
            break
        except FileExistsError:
            unique_count += 1
            unique_str = f"-{unique_count}"

    logger.info("Backup written to {}", path)
    return path


def parse_import(text: str) -> ParseResult:
    """Parse backup text into a dataset.

    Never raises: invalid JSON and documents failing the shape check come back as
    ParseFailure.
    """
    try:
        data = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning("Failed to import JSON: {}", e)
        return ParseFailure(reason=f"not valid JSON: {e}")

    problem = check_shape(data)
    if problem is not None:
        logger.warning("Rejected import: {}", problem)
        return ParseFailure(reason=problem)

    return ParseOk(dataset=dataset_from_dict(data))
