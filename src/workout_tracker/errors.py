"""Exception types for workout-tracker."""


class WorkoutTrackerError(Exception):
    """Base class for all workout-tracker errors."""


class InvalidInputError(WorkoutTrackerError, ValueError):
    """Input rejected by validation. Never retried."""


class AnonymizationError(WorkoutTrackerError):
    """An anonymous payload could not be built."""


class PersistenceError(WorkoutTrackerError):
    """The local store rejected an operation."""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class ApiError(WorkoutTrackerError):
    """A request to the statistics backend failed."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        endpoint: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.endpoint = endpoint
