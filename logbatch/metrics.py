"""Metrics collector — counters and percentiles for flush and delivery."""

import threading
import time

FLUSH_TRIGGERS = ("size", "timer", "manual", "shutdown")


class MetricsCollector:
    """Collects and reports metrics about payload deliveries."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._payloads_sent: int = 0
        self._lines_sent: int = 0
        self._lines_dropped: int = 0
        self._lines_lost: int = 0
        self._delivery_failures: int = 0
        self._payload_sizes: list[int] = []
        self._send_times: list[float] = []
        self._flush_triggers: dict = {trigger: 0 for trigger in FLUSH_TRIGGERS}
        self._start_time = time.monotonic()

    def record_flush(self, trigger: str) -> None:
        """Count a flush that drained records, keyed by what caused it."""
        with self._lock:
            self._flush_triggers[trigger] = self._flush_triggers.get(trigger, 0) + 1

    def record_delivery(self, line_count: int, send_time_ms: float) -> None:
        """Record a payload the sender accepted.

        Args:
            line_count: Number of log records in the payload.
            send_time_ms: Time the sender took, in milliseconds.
        """
        with self._lock:
            self._payloads_sent += 1
            self._lines_sent += line_count
            self._payload_sizes.append(line_count)
            self._send_times.append(send_time_ms)

    def record_failure(self, line_count: int) -> None:
        """Record a payload the sender rejected; its lines are gone for good."""
        with self._lock:
            self._delivery_failures += 1
            self._lines_lost += line_count

    def record_dropped(self, line_count: int) -> None:
        """Record lines discarded while no sender was configured."""
        with self._lock:
            self._lines_dropped += line_count

    def snapshot(self) -> dict:
        """Return a point-in-time snapshot of all collected metrics.

        Returns:
            Dictionary containing counters, averages, percentiles,
            flush trigger counts, and uptime.
        """
        with self._lock:
            payload_sizes = list(self._payload_sizes)
            send_times = list(self._send_times)

            avg_payload = (
                sum(payload_sizes) / len(payload_sizes) if payload_sizes else 0.0
            )
            avg_send = (
                sum(send_times) / len(send_times) if send_times else 0.0
            )

            return {
                "payloads_sent": self._payloads_sent,
                "lines_sent": self._lines_sent,
                "lines_dropped": self._lines_dropped,
                "lines_lost": self._lines_lost,
                "delivery_failures": self._delivery_failures,
                "avg_payload_size": avg_payload,
                "p95_payload_size": self._percentile(payload_sizes, 95),
                "avg_send_time_ms": avg_send,
                "p95_send_time_ms": self._percentile(send_times, 95),
                "flush_triggers": dict(self._flush_triggers),
                "uptime_seconds": time.monotonic() - self._start_time,
            }

    @staticmethod
    def _percentile(data: list, pct: float) -> float:
        """Interpolated percentile of *data*, or 0.0 when it is empty."""
        if not data:
            return 0.0

        sorted_data = sorted(data)
        n = len(sorted_data)

        if n == 1:
            return float(sorted_data[0])

        idx = (pct / 100) * (n - 1)
        lower = int(idx)
        upper = lower + 1
        fraction = idx - lower

        if upper >= n:
            return float(sorted_data[-1])

        return float(sorted_data[lower] + fraction * (sorted_data[upper] - sorted_data[lower]))
