"""Sync queue and anonymous payload models."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum


class QueueStatus(str, Enum):
    """Status of a sync queue item.

    Successfully sent items are deleted, so there is no terminal
    success status.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    FAILED = "failed"


@dataclass(frozen=True)
class AnonymousWorkout:
    """Aggregated, non-identifying view of one workout record."""

    date: str  # ISO 8601
    body_part: str
    exercise_name: str
    max_weight: float
    total_reps: int
    total_sets: int

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "date": self.date,
            "bodyPart": self.body_part,
            "exerciseName": self.exercise_name,
            "maxWeight": self.max_weight,
            "totalReps": self.total_reps,
            "totalSets": self.total_sets,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnonymousWorkout":
        """Create from the wire representation."""
        return cls(
            date=data["date"],
            body_part=data["bodyPart"],
            exercise_name=data["exerciseName"],
            max_weight=data["maxWeight"],
            total_reps=data["totalReps"],
            total_sets=data["totalSets"],
        )


@dataclass(frozen=True)
class AnonymousDataPayload:
    """Payload sent to the statistics backend."""

    profile_hash: str
    height: float
    weight: float
    weekly_frequency: int
    workouts: tuple[AnonymousWorkout, ...] = ()

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "profileHash": self.profile_hash,
            "height": self.height,
            "weight": self.weight,
            "weeklyFrequency": self.weekly_frequency,
            "workouts": [w.to_dict() for w in self.workouts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnonymousDataPayload":
        """Create from the wire representation."""
        return cls(
            profile_hash=data["profileHash"],
            height=data["height"],
            weight=data["weight"],
            weekly_frequency=data["weeklyFrequency"],
            workouts=tuple(AnonymousWorkout.from_dict(w) for w in data.get("workouts", [])),
        )


@dataclass
class QueueItem:
    """A pending unit of anonymized data awaiting transmission."""

    payload: AnonymousDataPayload
    status: QueueStatus = QueueStatus.PENDING
    retry_count: int = 0
    last_error: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    id: int | None = None


@dataclass
class SyncSettings:
    """Data sharing and retry policy."""

    enabled: bool = True
    auto_sync: bool = True
    max_retries: int = 3
    retry_delay: int = 5000  # milliseconds

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "enabled": self.enabled,
            "autoSync": self.auto_sync,
            "maxRetries": self.max_retries,
            "retryDelay": self.retry_delay,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SyncSettings":
        """Create from stored dictionary, filling gaps with defaults."""
        defaults = cls()
        return cls(
            enabled=bool(data.get("enabled", defaults.enabled)),
            auto_sync=bool(data.get("autoSync", defaults.auto_sync)),
            max_retries=int(data.get("maxRetries", defaults.max_retries)),
            retry_delay=int(data.get("retryDelay", defaults.retry_delay)),
        )

    def merged(self, **changes) -> "SyncSettings":
        """Return a copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown sync settings: {', '.join(sorted(unknown))}")
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update(changes)
        return SyncSettings(**data)


@dataclass
class DrainResult:
    """Outcome of one pass over the pending queue."""

    processed: int = 0
    succeeded: int = 0

    @property
    def failed(self) -> int:
        return self.processed - self.succeeded


@dataclass
class SyncStatusSummary:
    """Snapshot of queue and settings state."""

    settings: SyncSettings
    pending: int = 0
    processing: int = 0
    failed: int = 0
    last_drain_at: datetime | None = None

    @property
    def total(self) -> int:
        return self.pending + self.processing + self.failed
