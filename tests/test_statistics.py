"""Tests for statistics utilities."""

import pytest

from workout_tracker.errors import InvalidInputError
from workout_tracker.services.statistics import mean, median, percentile, summarize


class TestStatistics:
    """Tests for mean, median and percentile."""

    def test_mean(self):
        assert mean([60, 70, 80]) == 70
        assert mean([]) == 0

    def test_median_odd_and_even(self):
        assert median([80, 60, 70]) == 70
        assert median([60, 70, 80, 90]) == 75
        assert median([]) == 0

    def test_percentile_interpolates(self):
        """Test linear interpolation between ranks."""
        values = [10, 20, 30, 40, 50]
        assert percentile(values, 0) == 10
        assert percentile(values, 100) == 50
        assert percentile(values, 50) == 30
        assert percentile(values, 90) == pytest.approx(46)

    @pytest.mark.parametrize("p", [-1, 100.5, 150])
    def test_percentile_out_of_range(self, p):
        """Test percentiles outside 0-100 are rejected."""
        with pytest.raises(InvalidInputError):
            percentile([1, 2, 3], p)

    def test_summarize(self):
        """Test the full summary."""
        summary = summarize([100, 60, 80])

        assert summary.count == 3
        assert summary.min == 60
        assert summary.max == 100
        assert summary.median == 80
        assert summary.p25 == 70

    def test_summarize_empty(self):
        """Test an empty series gives zeros."""
        summary = summarize([])
        assert summary.count == 0
        assert summary.mean == 0
        assert summary.max == 0
