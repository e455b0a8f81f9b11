"""Adapters - I/O implementations of ports."""

from .file_store import FileBackingStore
from .memory_store import MemoryBackingStore

__all__ = [
    "FileBackingStore",
    "MemoryBackingStore",
]
