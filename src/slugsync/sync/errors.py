"""
Failures the controller converts into structured update results.
"""

from __future__ import annotations


class SlugSyncError(RuntimeError):
    """Base class for synchronization failures."""


class FieldNotFoundError(SlugSyncError):
    """Raised when a source or target field cannot be resolved."""

    def __init__(self, role: str, field_name: str) -> None:
        super().__init__(f'{role.capitalize()} field "{field_name}" not found')
        self.role = role
        self.field_name = field_name


class ConcurrentUpdateError(SlugSyncError):
    """Raised when an update starts while another is still running."""

    def __init__(self) -> None:
        super().__init__("Update already in progress")


class TransformError(SlugSyncError):
    """Raised when extraction, encoding or write-back fails unexpectedly."""
