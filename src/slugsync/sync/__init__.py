"""
Source -> target field synchronization.
"""

from .errors import ConcurrentUpdateError, FieldNotFoundError, SlugSyncError, TransformError
from .triggers import UpdateTriggers
from .updater import (
    GENERATED,
    AutoUpdater,
    UpdateOutcome,
    UpdateResult,
    auto_update_field,
    create_auto_updater,
)

__all__ = [
    "ConcurrentUpdateError",
    "FieldNotFoundError",
    "SlugSyncError",
    "TransformError",
    "UpdateTriggers",
    "GENERATED",
    "AutoUpdater",
    "UpdateOutcome",
    "UpdateResult",
    "auto_update_field",
    "create_auto_updater",
]
