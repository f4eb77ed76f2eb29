"""Descriptive statistics over workout numbers."""

import math
from dataclasses import dataclass

from ..errors import InvalidInputError


@dataclass
class StatisticsSummary:
    """Summary of a series of values."""

    mean: float
    median: float
    p25: float
    p75: float
    p90: float
    min: float
    max: float
    count: int


def mean(values: list[float]) -> float:
    """Arithmetic mean, 0 for an empty series."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: list[float]) -> float:
    """Median, 0 for an empty series."""
    if not values:
        return 0.0

    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def percentile(values: list[float], p: float) -> float:
    """Percentile with linear interpolation between closest ranks.

    Args:
        values: Series of values
        p: Percentile in [0, 100]

    Raises:
        InvalidInputError: If p is outside [0, 100]
    """
    if not values:
        return 0.0
    if p < 0 or p > 100:
        raise InvalidInputError("Percentile must be between 0 and 100")

    ordered = sorted(values)
    index = (p / 100) * (len(ordered) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return ordered[lower]

    weight = index - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def summarize(values: list[float]) -> StatisticsSummary:
    """Compute the standard summary used for comparisons."""
    if not values:
        return StatisticsSummary(
            mean=0.0, median=0.0, p25=0.0, p75=0.0, p90=0.0, min=0.0, max=0.0, count=0
        )

    return StatisticsSummary(
        mean=mean(values),
        median=median(values),
        p25=percentile(values, 25),
        p75=percentile(values, 75),
        p90=percentile(values, 90),
        min=min(values),
        max=max(values),
        count=len(values),
    )
