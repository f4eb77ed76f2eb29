"""Similar-user matching for comparison statistics.

Two profiles are similar when height is within 5 cm, weight within
5 kg and weekly frequency within one workout. Comparison results are
shown only when at least ``MIN_SIMILAR_USERS`` similar users exist.
"""

from dataclasses import dataclass

from ..models.comparison import ComparisonData
from ..models.workout import BodyProfile

HEIGHT_RANGE = 5  # cm
WEIGHT_RANGE = 5  # kg
FREQUENCY_RANGE = 1  # workouts per week
MIN_SIMILAR_USERS = 10


def is_similar_profile(profile: BodyProfile, other: BodyProfile) -> bool:
    """Check whether two profiles fall within the similarity ranges."""
    return (
        abs(profile.height - other.height) <= HEIGHT_RANGE
        and abs(profile.weight - other.weight) <= WEIGHT_RANGE
        and abs(profile.weekly_frequency - other.weekly_frequency) <= FREQUENCY_RANGE
    )


def filter_similar_profiles(
    target: BodyProfile, profiles: list[BodyProfile]
) -> list[BodyProfile]:
    """Return the profiles similar to ``target``, excluding the target user."""
    return [
        p for p in profiles if p.user_id != target.user_id and is_similar_profile(target, p)
    ]


def similar_profile_count(target: BodyProfile, profiles: list[BodyProfile]) -> int:
    return len(filter_similar_profiles(target, profiles))


def has_sufficient_similar_users(target: BodyProfile, profiles: list[BodyProfile]) -> bool:
    """Check that enough similar users exist to show a comparison."""
    return similar_profile_count(target, profiles) >= MIN_SIMILAR_USERS


def has_sufficient_sample(data: ComparisonData | None) -> bool:
    """Check a backend comparison result covers enough users to display."""
    return data is not None and data.sample_size >= MIN_SIMILAR_USERS


@dataclass
class ComparisonRow:
    """One labelled value of a comparison table."""

    label: str
    weight: float


def comparison_rows(data: ComparisonData, user_value: float) -> list[ComparisonRow]:
    """Lay out the similar-user distribution next to the user's own value."""
    stats = data.statistics
    return [
        ComparisonRow("25th percentile", stats.percentile25),
        ComparisonRow("Median", stats.median),
        ComparisonRow("Mean", stats.mean),
        ComparisonRow("75th percentile", stats.percentile75),
        ComparisonRow("90th percentile", stats.percentile90),
        ComparisonRow("You", user_value),
    ]
