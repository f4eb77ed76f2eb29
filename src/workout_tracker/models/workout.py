"""Workout and body profile records."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing "Z" for UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class BodyPart(str, Enum):
    """Trained body part."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    LEGS = "legs"
    CORE = "core"
    OTHER = "other"


@dataclass
class WorkoutSet:
    """A single set of an exercise."""

    set_number: int
    weight: float  # in kg
    reps: int
    completed: bool = True
    rm1: float | None = None  # calculated 1RM

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        data = {
            "setNumber": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "completed": self.completed,
        }
        if self.rm1 is not None:
            data["rm1"] = self.rm1
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        """Create from dictionary."""
        return cls(
            set_number=data.get("setNumber", 1),
            weight=float(data["weight"]),
            reps=int(data["reps"]),
            completed=data.get("completed", True),
            rm1=data.get("rm1"),
        )


@dataclass
class WorkoutRecord:
    """One recorded exercise on a given day."""

    id: str
    user_id: str
    date: datetime
    body_part: BodyPart
    exercise_name: str
    sets: list[WorkoutSet] = field(default_factory=list)
    images: list[str] = field(default_factory=list)  # image ids
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "bodyPart": self.body_part.value,
            "exerciseName": self.exercise_name,
            "sets": [s.to_dict() for s in self.sets],
            "images": self.images,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutRecord":
        """Create from an exported dictionary."""
        return cls(
            id=str(data["id"]),
            user_id=data["userId"],
            date=parse_iso_datetime(data["date"]),
            body_part=BodyPart(data["bodyPart"]),
            exercise_name=data["exerciseName"],
            sets=[WorkoutSet.from_dict(s) for s in data.get("sets", [])],
            images=data.get("images", []),
            notes=data.get("notes", ""),
        )


@dataclass
class BodyProfile:
    """User body profile."""

    user_id: str
    height: float  # in cm
    weight: float  # in kg
    weekly_frequency: int  # workouts per week
    goals: str = ""
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        return {
            "userId": self.user_id,
            "height": self.height,
            "weight": self.weight,
            "weeklyFrequency": self.weekly_frequency,
            "goals": self.goals,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyProfile":
        """Create from an exported dictionary."""
        updated_at = data.get("updatedAt")
        return cls(
            user_id=data["userId"],
            height=float(data["height"]),
            weight=float(data["weight"]),
            weekly_frequency=int(data["weeklyFrequency"]),
            goals=data.get("goals") or "",
            updated_at=parse_iso_datetime(updated_at) if updated_at else None,
        )
