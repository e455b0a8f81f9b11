"""Ports - interfaces/protocols for external dependencies."""

from .backing_store import BackingStore

__all__ = [
    "BackingStore",
]
