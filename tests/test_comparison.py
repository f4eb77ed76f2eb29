"""Tests for similar-user matching."""

import pytest

from workout_tracker.models.comparison import ComparisonData, ComparisonStatistics
from workout_tracker.models.workout import BodyProfile
from workout_tracker.services.comparison import (
    MIN_SIMILAR_USERS,
    comparison_rows,
    filter_similar_profiles,
    has_sufficient_sample,
    has_sufficient_similar_users,
    is_similar_profile,
    similar_profile_count,
)


def make_profile(user_id="other", height=175, weight=75, weekly_frequency=3) -> BodyProfile:
    return BodyProfile(
        user_id=user_id, height=height, weight=weight, weekly_frequency=weekly_frequency
    )


def make_data(sample_size: int) -> ComparisonData:
    return ComparisonData(
        body_part="legs",
        exercise_name="Squat",
        statistics=ComparisonStatistics(
            mean=100, median=95, percentile25=80, percentile75=115, percentile90=130
        ),
        sample_size=sample_size,
    )


class TestIsSimilarProfile:
    """Tests for is_similar_profile."""

    def test_bounds_inclusive(self):
        """Test differences exactly at each range still match."""
        me = make_profile("me")
        assert is_similar_profile(me, make_profile(height=180, weight=70, weekly_frequency=4))
        assert is_similar_profile(me, make_profile(height=170, weight=80, weekly_frequency=2))

    @pytest.mark.parametrize(
        "changes",
        [{"height": 180.5}, {"weight": 69.9}, {"weekly_frequency": 5}],
    )
    def test_outside_range(self, changes):
        assert not is_similar_profile(make_profile("me"), make_profile(**changes))

    def test_symmetric(self):
        a = make_profile("a", height=170)
        b = make_profile("b", height=174)
        assert is_similar_profile(a, b) == is_similar_profile(b, a)


class TestSimilarUsers:
    """Tests for filtering and the minimum group size."""

    def test_filter_excludes_self(self):
        """Test the target user is never counted as similar to themselves."""
        me = make_profile("me")
        profiles = [me, make_profile("a"), make_profile("b", height=190)]

        assert [p.user_id for p in filter_similar_profiles(me, profiles)] == ["a"]
        assert similar_profile_count(me, profiles) == 1

    def test_sufficient_similar_users(self):
        me = make_profile("me")
        others = [make_profile(f"u{i}") for i in range(MIN_SIMILAR_USERS - 1)]

        assert not has_sufficient_similar_users(me, others + [me])
        assert has_sufficient_similar_users(me, others + [make_profile("last")])

    def test_sufficient_sample(self):
        assert not has_sufficient_sample(None)
        assert not has_sufficient_sample(make_data(MIN_SIMILAR_USERS - 1))
        assert has_sufficient_sample(make_data(MIN_SIMILAR_USERS))


class TestComparisonRows:
    """Tests for comparison_rows."""

    def test_layout(self):
        rows = comparison_rows(make_data(20), 110)

        assert [r.label for r in rows] == [
            "25th percentile",
            "Median",
            "Mean",
            "75th percentile",
            "90th percentile",
            "You",
        ]
        assert [r.weight for r in rows] == [80, 95, 100, 115, 130, 110]
