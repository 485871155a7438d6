"""Tests for the default HTTP sender."""

import json

import httpx
import pytest

from logbatch.sender import HTTPSender

PAYLOAD = {
    "application": "web",
    "lines": [
        {
            "logger": "app",
            "at": "2024-01-15T10:30:00.000Z",
            "level": "info",
            "event": "started",
            "context": {"port": 8080},
        }
    ],
}


def _transport(status_code=200):
    """MockTransport that records requests and answers with *status_code*."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    return httpx.MockTransport(handler), requests


class TestHTTPSender:
    @pytest.mark.asyncio
    async def test_posts_json_payload(self):
        transport, requests = _transport()
        sender = HTTPSender("http://collector.local/logs", transport=transport)

        response = await sender(PAYLOAD)

        assert response.status_code == 200
        (request,) = requests
        assert request.method == "POST"
        assert str(request.url) == "http://collector.local/logs"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == PAYLOAD

    @pytest.mark.asyncio
    async def test_custom_headers(self):
        transport, requests = _transport()
        sender = HTTPSender(
            "http://collector.local/logs",
            headers={"Authorization": "Bearer secret"},
            transport=transport,
        )
        await sender(PAYLOAD)
        assert requests[0].headers["authorization"] == "Bearer secret"
        assert requests[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self):
        transport, _requests = _transport(status_code=503)
        sender = HTTPSender("http://collector.local/logs", transport=transport)
        with pytest.raises(httpx.HTTPStatusError):
            await sender(PAYLOAD)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        sender = HTTPSender(
            "http://collector.local/logs", transport=httpx.MockTransport(handler)
        )
        with pytest.raises(httpx.ConnectError):
            await sender(PAYLOAD)

    def test_endpoint_property(self):
        assert HTTPSender("http://collector.local/logs").endpoint == "http://collector.local/logs"
