"""workout-tracker: offline-first anonymized workout statistics sharing."""

__version__ = "0.1.0"
