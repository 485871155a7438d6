"""Senders — the delivery capability the agent flushes payloads into."""

import logging
from typing import Any, Awaitable, Optional, Protocol

import httpx

from logbatch.serializer import serialize_payload

logger = logging.getLogger(__name__)


class Sender(Protocol):
    """Anything awaitable that accepts a payload dict.

    Returning normally means the payload was delivered; raising means it was
    not. The agent never retries.
    """

    def __call__(self, payload: dict) -> Awaitable[Any]: ...


class HTTPSender:
    """POSTs payloads as JSON to a collector endpoint."""

    def __init__(
        self,
        endpoint: str,
        headers: Optional[dict] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._endpoint = endpoint
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def __call__(self, payload: dict) -> httpx.Response:
        """Deliver *payload*. Raises httpx.HTTPError on transport or HTTP errors."""
        body = serialize_payload(payload)
        # A client per call: deliveries may run on different event loops.
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(
                self._endpoint, content=body, headers=self._headers
            )
        response.raise_for_status()
        logger.debug(
            "Posted %d lines (%d bytes) to %s",
            len(payload.get("lines", ())),
            len(body),
            self._endpoint,
        )
        return response
