"""CLI commands for workout-tracker."""

from .compare import compare
from .init import init
from .sharing import sharing
from .stats import stats
from .sync import sync

__all__ = [
    "compare",
    "init",
    "sharing",
    "stats",
    "sync",
]
