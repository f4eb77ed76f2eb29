"""Comparison statistics returned by the backend."""

from dataclasses import dataclass
from datetime import datetime

from .workout import parse_iso_datetime


@dataclass(frozen=True)
class ComparisonStatistics:
    """Max weight distribution among similar users."""

    mean: float
    median: float
    percentile25: float
    percentile75: float
    percentile90: float

    @classmethod
    def from_dict(cls, data: dict) -> "ComparisonStatistics":
        return cls(
            mean=float(data["mean"]),
            median=float(data["median"]),
            percentile25=float(data["percentile25"]),
            percentile75=float(data["percentile75"]),
            percentile90=float(data["percentile90"]),
        )


@dataclass(frozen=True)
class ComparisonData:
    """Aggregated results for one exercise among similar users."""

    body_part: str
    exercise_name: str
    statistics: ComparisonStatistics
    sample_size: int
    range_start: datetime | None = None
    range_end: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ComparisonData":
        """Create from the backend response body."""
        time_range = data.get("timeRange") or {}
        start = time_range.get("start")
        end = time_range.get("end")
        return cls(
            body_part=data["bodyPart"],
            exercise_name=data["exerciseName"],
            statistics=ComparisonStatistics.from_dict(data["statistics"]),
            sample_size=int(data["sampleSize"]),
            range_start=parse_iso_datetime(start) if start else None,
            range_end=parse_iso_datetime(end) if end else None,
        )
