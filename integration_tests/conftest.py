"""Pytest configuration for integration tests."""

import json
from datetime import datetime

import httpx
import pytest

from workout_tracker.models.workout import BodyPart, BodyProfile, WorkoutRecord, WorkoutSet


def pytest_collection_modifyitems(items):
    """Mark everything under integration_tests as an integration test."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


class FakeBackend:
    """In-process statistics backend behind an httpx MockTransport."""

    def __init__(self):
        self.received: list[dict] = []
        self.down = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.down:
            return httpx.Response(503, json={"message": "maintenance"})
        if request.url.path == "/api/v1/health":
            return httpx.Response(200, json={"status": "ok"})
        self.received.append(json.loads(request.content))
        return httpx.Response(201, json={"success": True, "message": "stored"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def athlete():
    """A user id, profile and a week of workouts."""
    profile = BodyProfile(
        user_id="athlete-42",
        height=182,
        weight=84,
        weekly_frequency=3,
        goals="Compete next spring",
    )
    workouts = [
        WorkoutRecord(
            id=f"w{day}",
            user_id="athlete-42",
            date=datetime(2024, 5, day, 19, 0),
            body_part=BodyPart.LEGS,
            exercise_name="Squat",
            sets=[WorkoutSet(set_number=n, weight=120 + 5 * n, reps=5) for n in range(1, 4)],
            notes="Coach: keep knees out",
        )
        for day in (6, 8, 10)
    ]
    return "athlete-42", profile, workouts
