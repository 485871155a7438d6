"""Line buffer — ordered, bounded, in-memory queue of pending log records."""

from logbatch.models import LogRecord


class LineBuffer:
    """Append-only queue of LogRecords that is emptied only by draining.

    The buffer does not flush by itself: ``append`` reports when capacity has
    been reached and the owner decides what to do. All operations are
    synchronous, so the queue is never seen half-updated by a coroutine.
    """

    def __init__(self, capacity: int = 50):
        self._lines: list[LogRecord] = []
        self._capacity = 0
        self.capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int):
        if value <= 0:
            raise ValueError(f"capacity must be positive, got {value}")
        self._capacity = value

    def append(self, record: LogRecord) -> bool:
        """Add *record* to the tail. Returns True once capacity is reached."""
        self._lines.append(record)
        return len(self._lines) >= self._capacity

    def drain_all(self) -> list[LogRecord]:
        """Take every pending record, leaving the buffer empty."""
        drained, self._lines = self._lines, []
        return drained

    def drop_oldest(self, n: int) -> int:
        """Remove up to *n* records from the head. Returns how many were removed."""
        if n <= 0:
            return 0
        dropped = min(n, len(self._lines))
        del self._lines[:dropped]
        return dropped

    def clear(self):
        self._lines = []

    def snapshot(self) -> tuple[LogRecord, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
