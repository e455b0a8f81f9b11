"""Exceptions raised by Daybook.

"Entry not found" is not an error here: lookups and mutations return None or
False for a missing id.
"""


class DaybookError(Exception):
    """Base class for Daybook errors."""

    pass


class ValidationError(DaybookError):
    """Raised when caller-supplied data is empty or structurally invalid."""

    pass


class PersistenceError(DaybookError):
    """Raised when the backing store rejects a read or a write."""

    pass
