"""Base protocol for statistics backend transports."""

from typing import Protocol, runtime_checkable

from ..models.sync import AnonymousDataPayload


@runtime_checkable
class AnonymousDataTransport(Protocol):
    """Protocol for sending anonymous payloads to the backend."""

    async def send(self, payload: AnonymousDataPayload) -> dict:
        """Send one payload.

        Args:
            payload: Anonymized payload to transmit

        Returns:
            Backend response body

        Raises:
            ApiError: If the payload was not accepted
        """
        ...

    async def health_check(self) -> bool:
        """Return True if the backend is reachable."""
        ...
