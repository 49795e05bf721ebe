"""Load and save the diary dataset as one whole document."""

import json

from loguru import logger

from advocate_diary.config import DATA_SLOT_KEY
from advocate_diary.core.backup import check_shape, dataset_from_dict, dataset_to_dict
from advocate_diary.errors import StoreCorruptError
from advocate_diary.models.case import DEFAULT_ADVOCATE_NAME, Dataset, empty_dataset
from advocate_diary.protocols import SlotStoreProtocol


class DiaryStore:
    """Persist the dataset in a single slot.

    There is no field-level update: every save rewrites the whole document.
    """

    def __init__(self, slots: SlotStoreProtocol, *, key: str = DATA_SLOT_KEY) -> None:
        self._slots = slots
        self._key = key

    def _read(self) -> str | None:
        try:
            return self._slots.read(self._key)
        except UnicodeDecodeError as e:
            msg = f"stored diary data is not valid UTF-8: {e}"
            raise StoreCorruptError(msg) from e

    def _decode(self, blob: str) -> Dataset:
        try:
            data = json.loads(blob)
        except (ValueError, RecursionError) as e:
            msg = f"stored diary data is not valid JSON: {e}"
            raise StoreCorruptError(msg) from e
        problem = check_shape(data)
        if problem is not None:
            msg = f"stored diary data has the wrong shape: {problem}"
            raise StoreCorruptError(msg)
        return dataset_from_dict(data, default_name=DEFAULT_ADVOCATE_NAME)

    def load(self) -> Dataset:
        """Return the stored dataset.

        A missing slot yields a fresh dataset. So does a corrupt one: the failure is
        logged and the empty dataset returned, never raised.
        """
        try:
            blob = self._read()
            if blob is None:
                logger.debug("No stored diary data, starting empty")
                return empty_dataset()
            dataset = self._decode(blob)
        except StoreCorruptError:
            logger.exception("Failed to parse stored diary data, starting empty")
            return empty_dataset()
        logger.debug("Loaded {} cases", len(dataset.cases))
        return dataset

    def save(self, dataset: Dataset) -> None:
        """Replace the stored document with the given dataset."""
        self._slots.write(self._key, json.dumps(dataset_to_dict(dataset), indent=2))

    def clear(self) -> None:
        """Remove the stored document; the next load() starts empty."""
        self._slots.remove(self._key)
