from __future__ import annotations

"""
Error Taxonomy.

Internal failures are raised as these types and caught at the boundary of
each operation, where they are downgraded to a diagnostic. None of them is
meant to reach the code that called the logger.
"""

from typing import Optional


class AdminLogError(Exception):
    """Base class for every failure raised inside the logging core."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigLoadError(AdminLogError):
    """Persisted configuration is unreadable, malformed, or out of range."""


class ConfigSaveError(AdminLogError):
    """Configuration could not be written to its scope file."""


class SinkWriteError(AdminLogError):
    """A rendered line could not be delivered to its output channel."""


class RotationError(AdminLogError):
    """An archive rename or a retention delete failed."""
