"""Backing store interface."""

from typing import Protocol


class BackingStore(Protocol):
    """Interface for a synchronous blob store holding the whole entry collection."""

    def load(self) -> str | None:
        """Read the stored blob. Returns None if nothing has been stored."""
        ...

    def save(self, data: str) -> None:
        """Replace the stored blob. Raises PersistenceError if the write is rejected."""
        ...

    def clear(self) -> None:
        """Remove the stored blob."""
        ...
