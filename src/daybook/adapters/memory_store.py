"""In-memory backing store adapter."""

from daybook.errors import PersistenceError


class MemoryBackingStore:
    """
    In-process blob storage for tests and throwaway sessions.

    Implements BackingStore protocol. Set fail_writes to reject every save.
    """

    def __init__(
        self,
        initial: str | None = None,
        max_bytes: int | None = None,
        fail_writes: bool = False,
    ):
        self.data = initial
        self.max_bytes = max_bytes
        self.fail_writes = fail_writes
        self.save_count = 0

    def load(self) -> str | None:
        return self.data

    def save(self, data: str) -> None:
        if self.fail_writes:
            raise PersistenceError("Backing store rejected the write")
        size = len(data.encode("utf-8"))
        if self.max_bytes is not None and size > self.max_bytes:
            raise PersistenceError(f"Storage quota exceeded: {size} bytes > {self.max_bytes} bytes")
        self.data = data
        self.save_count += 1

    def clear(self) -> None:
        self.data = None
