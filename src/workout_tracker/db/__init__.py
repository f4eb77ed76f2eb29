"""Database layer for workout-tracker."""

from .engine import get_db_path, init_db
from .repositories import SyncQueueRepository, SyncSettingsRepository

__all__ = [
    "get_db_path",
    "init_db",
    "SyncQueueRepository",
    "SyncSettingsRepository",
]
