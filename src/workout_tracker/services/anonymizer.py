"""Anonymization of workout data before it leaves the device.

Identifiers are replaced by a SHA-256 digest and records are reduced to
aggregate numbers. Names, goals, notes, images and per-set detail are
never copied into a payload.
"""

import hashlib
import math
import re

from ..errors import InvalidInputError
from ..models.sync import AnonymousDataPayload, AnonymousWorkout
from ..models.workout import BodyProfile, WorkoutRecord, parse_iso_datetime

PROFILE_HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def hash_identifier(identifier: str) -> str:
    """Hash a user identifier with SHA-256.

    Args:
        identifier: Raw user identifier

    Returns:
        64-character lowercase hex digest

    Raises:
        InvalidInputError: If the identifier is empty or whitespace only
    """
    if not identifier or not identifier.strip():
        raise InvalidInputError("User identifier is empty")
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()


def anonymize_workout(record: WorkoutRecord) -> AnonymousWorkout:
    """Reduce a workout record to aggregate statistics.

    A record without sets yields max_weight 0.0.
    """
    weights = [s.weight for s in record.sets]
    return AnonymousWorkout(
        date=record.date.isoformat(),
        body_part=record.body_part.value,
        exercise_name=record.exercise_name,
        max_weight=max(weights) if weights else 0.0,
        total_reps=sum(s.reps for s in record.sets),
        total_sets=len(record.sets),
    )


def anonymize_profile(profile: BodyProfile) -> dict:
    """Project a body profile onto its comparable measurements."""
    return {
        "height": profile.height,
        "weight": profile.weight,
        "weekly_frequency": profile.weekly_frequency,
    }


def build_payload(
    identifier: str,
    profile: BodyProfile,
    records: list[WorkoutRecord],
) -> AnonymousDataPayload:
    """Build the complete anonymous payload for a user."""
    profile_hash = hash_identifier(identifier)
    return AnonymousDataPayload(
        profile_hash=profile_hash,
        workouts=tuple(anonymize_workout(r) for r in records),
        **anonymize_profile(profile),
    )


def validate_payload(payload: AnonymousDataPayload) -> bool:
    """Check that a payload has the shape of an anonymized payload."""
    if not isinstance(payload.profile_hash, str):
        return False
    if not PROFILE_HASH_PATTERN.match(payload.profile_hash):
        return False
    if not _non_negative(payload.height, payload.weight, payload.weekly_frequency):
        return False

    for workout in payload.workouts:
        try:
            parse_iso_datetime(workout.date)
        except (AttributeError, TypeError, ValueError):
            return False

        if not _non_negative(workout.max_weight, workout.total_reps, workout.total_sets):
            return False

    return True


def _non_negative(*values) -> bool:
    """Check values are finite, non-negative numbers. NaN fails."""
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value) or value < 0:
            return False
    return True
