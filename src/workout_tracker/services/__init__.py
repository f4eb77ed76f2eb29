"""Services for workout-tracker."""

from .sync_engine import BackgroundSync, SyncEngine

__all__ = ["BackgroundSync", "SyncEngine"]
