"""Payload serializer — JSON encoding of delivery payloads."""

import json


def serialize_payload(payload: dict) -> bytes:
    """Serialize a payload dict to UTF-8 JSON bytes.

    Values that are not JSON-native (datetimes, UUIDs, exceptions, ...) are
    encoded with ``str()`` rather than failing the whole delivery.
    """
    return json.dumps(payload, default=str).encode("utf-8")


def deserialize_payload(data: bytes) -> dict:
    """Decode bytes produced by *serialize_payload* back to a dict."""
    return json.loads(data)
