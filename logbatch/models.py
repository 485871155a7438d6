"""Log record model."""

import datetime
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class LogRecord:
    logger: str
    level: str
    event: str
    context: Mapping[str, Any] = field(default_factory=dict)
    at: str = field(default_factory=utc_timestamp)

    def __post_init__(self):
        # Read-only copy so a buffered record cannot change before delivery.
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))


def record_to_dict(record: LogRecord) -> dict:
    """Convert a LogRecord to its wire mapping.

    Context values are copied shallowly and left for the serializer to encode.
    """
    return {
        "logger": record.logger,
        "at": record.at,
        "level": record.level,
        "event": record.event,
        "context": dict(record.context),
    }
