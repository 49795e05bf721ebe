"""Protocols for dependency injection in the diary core."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SlotStoreProtocol(Protocol):
    """Protocol for key-value stores holding whole serialized documents."""

    def read(self, key: str) -> str | None:
        """Return the stored value, or None if the slot is empty."""
        ...

    def write(self, key: str, value: str) -> None:
        """Replace the value of a slot."""
        ...

    def remove(self, key: str) -> None:
        """Empty a slot. Removing an empty slot is not an error."""
        ...
