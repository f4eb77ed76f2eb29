"""HTTP client for the anonymous statistics backend."""

import logging

import httpx

from ..config import get_settings
from ..errors import ApiError
from ..models.comparison import ComparisonData
from ..models.sync import AnonymousDataPayload

logger = logging.getLogger(__name__)

ANONYMOUS_DATA_ENDPOINT = "/api/v1/anonymous-data"
COMPARISON_DATA_ENDPOINT = "/api/v1/comparison-data"
HEALTH_ENDPOINT = "/api/v1/health"


class ApiClient:
    """Client for the anonymous statistics backend.

    A fresh ``httpx.AsyncClient`` is opened per request, so an instance
    holds no connection state and can be shared freely.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        health_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.health_timeout = (
            health_timeout if health_timeout is not None else settings.health_timeout
        )
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=self._transport,
        )

    async def _post(self, endpoint: str, body: dict) -> httpx.Response:
        """POST JSON and map every failure to ApiError."""
        try:
            async with self._client(self.timeout) as client:
                response = await client.post(endpoint, json=body)
        except httpx.TimeoutException as e:
            raise ApiError("Request timed out", endpoint=endpoint) from e
        except httpx.HTTPError as e:
            raise ApiError(f"Network error: {e}", endpoint=endpoint) from e

        if response.is_error:
            raise ApiError(
                self._error_message(response),
                status=response.status_code,
                endpoint=endpoint,
            )
        return response

    async def send(self, payload: AnonymousDataPayload) -> dict:
        """POST a payload to the anonymous data endpoint.

        Raises:
            ApiError: On timeout, network failure or a non-2xx response
        """
        response = await self._post(ANONYMOUS_DATA_ENDPOINT, payload.to_dict())
        try:
            return response.json()
        except ValueError:
            return {"success": True, "message": response.text}

    async def fetch_comparison_data(
        self, body_part: str, exercise_name: str, profile: dict
    ) -> ComparisonData:
        """Fetch max weight statistics of users similar to ``profile``.

        Args:
            body_part: Body part value, e.g. "chest"
            exercise_name: Exercise to compare
            profile: Anonymized profile with height, weight and weeklyFrequency

        Raises:
            ApiError: On a failed request or a response that cannot be read
        """
        response = await self._post(
            COMPARISON_DATA_ENDPOINT,
            {"bodyPart": body_part, "exerciseName": exercise_name, "profile": profile},
        )
        try:
            return ComparisonData.from_dict(response.json())
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ApiError(
                f"Invalid comparison response: {e}",
                status=response.status_code,
                endpoint=COMPARISON_DATA_ENDPOINT,
            ) from e

    async def health_check(self) -> bool:
        """Return True if the backend answers its health endpoint."""
        try:
            async with self._client(self.health_timeout) as client:
                response = await client.get(HEALTH_ENDPOINT)
        except httpx.HTTPError as e:
            logger.debug("Health check failed: %s", e)
            return False
        return response.is_success

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the backend's message over the bare status line."""
        try:
            data = response.json()
        except ValueError:
            data = {}
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"HTTP {response.status_code}: {response.reason_phrase}"
