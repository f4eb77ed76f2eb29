"""Tests for the statistics backend client."""

import json

import httpx
import pytest

from workout_tracker.clients.api import (
    ANONYMOUS_DATA_ENDPOINT,
    COMPARISON_DATA_ENDPOINT,
    ApiClient,
)
from workout_tracker.clients.base import AnonymousDataTransport
from workout_tracker.errors import ApiError
from workout_tracker.services.anonymizer import build_payload


@pytest.fixture
def payload(sample_profile, sample_workouts):
    return build_payload("user-123", sample_profile, sample_workouts)


def make_client(handler) -> ApiClient:
    return ApiClient(
        base_url="https://stats.test",
        timeout=1.0,
        health_timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestApiClient:
    """Tests for ApiClient."""

    def test_implements_transport_protocol(self):
        assert isinstance(make_client(lambda request: httpx.Response(200)), AnonymousDataTransport)

    async def test_send_posts_payload(self, payload):
        """Test the payload is posted as camelCase JSON."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "message": "stored"})

        result = await make_client(handler).send(payload)

        assert result == {"success": True, "message": "stored"}
        assert seen["method"] == "POST"
        assert seen["url"] == "https://stats.test/api/v1/anonymous-data"
        assert seen["body"] == payload.to_dict()
        assert "profileHash" in seen["body"]

    async def test_error_status_uses_backend_message(self, payload):
        """Test a non-2xx response raises with status and endpoint."""
        client = make_client(
            lambda request: httpx.Response(422, json={"message": "invalid payload"})
        )

        with pytest.raises(ApiError) as exc_info:
            await client.send(payload)

        assert exc_info.value.status == 422
        assert exc_info.value.endpoint == ANONYMOUS_DATA_ENDPOINT
        assert exc_info.value.message == "invalid payload"

    async def test_error_status_without_body(self, payload):
        """Test the status line is used when the body has no message."""
        client = make_client(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(ApiError) as exc_info:
            await client.send(payload)

        assert exc_info.value.status == 503
        assert exc_info.value.message == "HTTP 503: Service Unavailable"

    async def test_timeout(self, payload):
        """Test timeouts become ApiError without a status."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).send(payload)

        assert exc_info.value.status is None
        assert exc_info.value.message == "Request timed out"

    async def test_network_error(self, payload):
        """Test connection failures become ApiError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).send(payload)

        assert exc_info.value.message.startswith("Network error")
        assert exc_info.value.endpoint == ANONYMOUS_DATA_ENDPOINT

    async def test_health_check(self):
        """Test health check reflects the response status."""
        assert await make_client(lambda request: httpx.Response(200)).health_check() is True
        assert await make_client(lambda request: httpx.Response(500)).health_check() is False

    async def test_health_check_offline(self):
        """Test health check is False when the backend is unreachable."""

        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert await make_client(handler).health_check() is False


COMPARISON_RESPONSE = {
    "bodyPart": "chest",
    "exerciseName": "Bench Press",
    "statistics": {
        "mean": 72.5,
        "median": 70,
        "percentile25": 60,
        "percentile75": 85,
        "percentile90": 95,
    },
    "sampleSize": 42,
    "timeRange": {"start": "2024-01-01T00:00:00.000Z", "end": "2024-03-31T00:00:00.000Z"},
}


class TestFetchComparisonData:
    """Tests for ApiClient.fetch_comparison_data."""

    async def test_posts_query_and_parses_response(self):
        """Test only the exercise and body measurements are sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=COMPARISON_RESPONSE)

        profile = {"height": 178, "weight": 76.5, "weeklyFrequency": 4}
        data = await make_client(handler).fetch_comparison_data("chest", "Bench Press", profile)

        assert seen["path"] == COMPARISON_DATA_ENDPOINT
        assert seen["body"] == {
            "bodyPart": "chest",
            "exerciseName": "Bench Press",
            "profile": profile,
        }
        assert data.sample_size == 42
        assert data.statistics.median == 70.0
        assert data.range_end.year == 2024

    async def test_error_status(self):
        client = make_client(lambda request: httpx.Response(500))

        with pytest.raises(ApiError) as exc_info:
            await client.fetch_comparison_data("chest", "Bench Press", {})

        assert exc_info.value.status == 500
        assert exc_info.value.endpoint == COMPARISON_DATA_ENDPOINT
        assert exc_info.value.message == "HTTP 500: Internal Server Error"

    async def test_malformed_response(self):
        """Test a response missing statistics raises ApiError."""
        client = make_client(lambda request: httpx.Response(200, json={"sampleSize": 3}))

        with pytest.raises(ApiError, match="Invalid comparison response"):
            await client.fetch_comparison_data("chest", "Bench Press", {})
