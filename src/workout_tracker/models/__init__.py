"""Data models for workout-tracker."""

from .comparison import ComparisonData, ComparisonStatistics
from .sync import (
    AnonymousDataPayload,
    AnonymousWorkout,
    DrainResult,
    QueueItem,
    QueueStatus,
    SyncSettings,
    SyncStatusSummary,
)
from .workout import BodyPart, BodyProfile, WorkoutRecord, WorkoutSet, parse_iso_datetime

__all__ = [
    "AnonymousDataPayload",
    "AnonymousWorkout",
    "BodyPart",
    "BodyProfile",
    "ComparisonData",
    "ComparisonStatistics",
    "DrainResult",
    "QueueItem",
    "QueueStatus",
    "SyncSettings",
    "SyncStatusSummary",
    "WorkoutRecord",
    "WorkoutSet",
    "parse_iso_datetime",
]
