"""Tests for FileSlotStore, the file-backed key-value slots."""

from pathlib import Path

import pytest

from advocate_diary.protocols import SlotStoreProtocol
from advocate_diary.storage.slots import FileSlotStore


def test_file_slot_store_satisfies_protocol(tmp_path: Path) -> None:
    assert isinstance(FileSlotStore(tmp_path), SlotStoreProtocol)


def test_read_returns_none_for_missing_slot(tmp_path: Path) -> None:
    assert FileSlotStore(tmp_path).read("advocate_diary_data") is None


def test_write_then_read(tmp_path: Path) -> None:
    slots = FileSlotStore(tmp_path)

    slots.write("advocate_diary_data", '{"cases": []}')

    assert slots.read("advocate_diary_data") == '{"cases": []}'
    assert (tmp_path / "advocate_diary_data").read_text() == '{"cases": []}'


def test_write_replaces_previous_value_without_leftovers(tmp_path: Path) -> None:
    slots = FileSlotStore(tmp_path)

    slots.write("last_backup_prompt_ts", "1")
    slots.write("last_backup_prompt_ts", "2")

    assert slots.read("last_backup_prompt_ts") == "2"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["last_backup_prompt_ts"]


def test_write_creates_missing_data_directory(tmp_path: Path) -> None:
    datadir = tmp_path / "new" / "dir"
    slots = FileSlotStore(datadir)

    slots.write("advocate_diary_data", "{}")

    assert (datadir / "advocate_diary_data").exists()


def test_remove_deletes_slot_and_tolerates_missing(tmp_path: Path) -> None:
    slots = FileSlotStore(tmp_path)
    slots.write("k", "v")

    slots.remove("k")
    slots.remove("k")

    assert slots.read("k") is None


@pytest.mark.parametrize("key", ["../escape", "/etc/passwd", ".hidden", "a/b", ""])
def test_rejects_keys_outside_datadir(tmp_path: Path, key: str) -> None:
    slots = FileSlotStore(tmp_path)

    with pytest.raises(ValueError, match="Invalid slot key"):
        slots.write(key, "x")
