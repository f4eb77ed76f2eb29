"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from workout_tracker.db import SyncQueueRepository, SyncSettingsRepository, init_db
from workout_tracker.models.workout import BodyPart, BodyProfile, WorkoutRecord, WorkoutSet
from workout_tracker.services.sync_engine import SyncEngine

from fakes import FakeTransport, RecordingSleep


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """Temporary database with the schema created."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def queue_repo(db_path):
    return SyncQueueRepository(db_path)


@pytest.fixture
def settings_repo(db_path):
    return SyncSettingsRepository(db_path)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def engine(queue_repo, settings_repo, transport, sleep):
    """Sync engine over a temporary database and a fake transport."""
    return SyncEngine(queue_repo, settings_repo, transport, sleep=sleep)


@pytest.fixture
def sample_profile():
    """Create a sample body profile for testing."""
    return BodyProfile(
        user_id="user-123",
        height=178.0,
        weight=76.5,
        weekly_frequency=4,
        goals="Bench 100kg by summer",
    )


@pytest.fixture
def sample_workouts():
    """Create sample workout records for testing."""
    return [
        WorkoutRecord(
            id="w1",
            user_id="user-123",
            date=datetime(2024, 3, 1, 18, 30),
            body_part=BodyPart.CHEST,
            exercise_name="Bench Press",
            sets=[
                WorkoutSet(set_number=1, weight=60, reps=10),
                WorkoutSet(set_number=2, weight=70, reps=8),
                WorkoutSet(set_number=3, weight=80, reps=5),
            ],
            images=["img-1"],
            notes="Felt strong, training with Alex",
        ),
        WorkoutRecord(
            id="w2",
            user_id="user-123",
            date=datetime(2024, 3, 3, 7, 0),
            body_part=BodyPart.LEGS,
            exercise_name="Squat",
            sets=[
                WorkoutSet(set_number=1, weight=100, reps=5),
                WorkoutSet(set_number=2, weight=100, reps=5),
            ],
        ),
    ]
