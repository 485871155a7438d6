"""Logging agent — buffering and flush state machine."""

import asyncio
import dataclasses
import logging
import time
from enum import Enum
from typing import Any, Mapping, Optional

from logbatch.buffer import LineBuffer
from logbatch.config import AgentConfig, DEFAULT_INTERVAL_MS, DEFAULT_LINE_BUFFER
from logbatch.levels import LevelFilter
from logbatch.logger import Logger
from logbatch.merge import merge
from logbatch.metrics import MetricsCollector
from logbatch.models import LogRecord, record_to_dict
from logbatch.scheduler import PeriodicFlusher
from logbatch.sender import HTTPSender, Sender

logger = logging.getLogger(__name__)


class AgentState(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    DISABLED = "disabled"


class LoggingAgent:
    """Buffers records from its loggers and flushes them to a sender.

    - UNCONFIGURED: records are buffered but there is no sender, so flushing
      only trims the buffer to capacity (oldest records are dropped).
    - CONFIGURED: records are delivered when the buffer reaches capacity,
      on every periodic tick, and on explicit ``flush()``.
    - DISABLED: the buffer is empty and every emit is a no-op until the
      agent is configured again.

    Each flush drains the buffer synchronously before handing the payload to
    the sender, so overlapping flushes never deliver a record twice. Failed
    deliveries are logged and never requeued.
    """

    def __init__(self) -> None:
        self._state = AgentState.UNCONFIGURED
        self._config = AgentConfig()
        self._request_fields: dict = {}
        self._sender: Optional[Sender] = None
        self._buffer = LineBuffer(DEFAULT_LINE_BUFFER)
        self._levels = LevelFilter()
        self._scheduler = PeriodicFlusher(self._on_tick)
        self._metrics = MetricsCollector()
        self._inflight: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, config: Optional[AgentConfig] = None, **options: Any) -> AgentConfig:
        """Replace the active configuration.

        Accepts an AgentConfig, keyword options, or both (options override
        fields of *config*). Returns the configuration now in effect.
        """
        if config is None:
            config = AgentConfig(**options)
        elif options:
            config = dataclasses.replace(config, **options)
        self._config = config

        if config.disabled:
            self._disable()
            return config

        self._levels.configure(config.level)
        self._request_fields = dict(config.request_fields or {})
        self._buffer.capacity = self._positive(
            "line_buffer", config.line_buffer, DEFAULT_LINE_BUFFER
        )
        self._sender = self._make_sender(config)
        self._state = AgentState.CONFIGURED
        self._scheduler.arm(
            self._positive("interval", config.interval, DEFAULT_INTERVAL_MS)
        )
        logger.info(
            "Logging configured: line_buffer=%d, interval=%dms, sender=%s",
            self._buffer.capacity,
            self._scheduler.interval_ms,
            type(self._sender).__name__ if self._sender else None,
        )

        if len(self._buffer) >= self._buffer.capacity:
            self._flush_in_background("size")
        return config

    def _disable(self):
        self._state = AgentState.DISABLED
        self._request_fields = {}
        self._sender = None
        self._buffer.clear()
        self._scheduler.disarm()
        logger.info("Logging disabled")

    @staticmethod
    def _positive(name: str, value: Optional[int], default: int) -> int:
        if value is None:
            return default
        if value <= 0:
            logger.warning("Invalid %s %r, using default %d", name, value, default)
            return default
        return value

    @staticmethod
    def _make_sender(config: AgentConfig) -> Optional[Sender]:
        if config.send_logs is not None:
            return config.send_logs
        if config.endpoint:
            return HTTPSender(config.endpoint, headers=config.headers, timeout=config.timeout)
        logger.warning("No endpoint or send_logs configured; logs will not be delivered")
        return None

    # ------------------------------------------------------------------
    # Emitting
    # ------------------------------------------------------------------

    def create_logger(self, name: str, fields: Optional[Mapping[str, Any]] = None) -> Logger:
        """Return a new Logger whose records carry *fields* in their context."""
        return Logger(self, name, fields)

    def should_emit(self, level: str) -> bool:
        return self._state is not AgentState.DISABLED and self._levels.allows(level)

    def emit(
        self,
        logger_name: str,
        level: str,
        event: str,
        *context_sources: Optional[Mapping[str, Any]],
    ):
        """Append a record, flushing if the buffer has reached capacity.

        *context_sources* are merged left to right into the record context.
        """
        if not self.should_emit(level):
            return
        record = LogRecord(
            logger=logger_name,
            level=level,
            event=event,
            context=merge(*context_sources),
        )
        self._scheduler.ensure_armed()
        if self._buffer.append(record):
            self._flush_in_background("size")

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------

    async def flush(self):
        """Deliver every pending record now.

        Raises whatever the sender raised; the records in that payload are
        not requeued.
        """
        self._scheduler.ensure_armed()
        sender = self._sender
        payload = self._take_payload("manual")
        if payload is not None:
            await self._deliver(payload, sender)

    async def shutdown(self):
        """Stop the periodic trigger, wait for in-flight sends, flush the rest."""
        self._scheduler.disarm()
        loop = asyncio.get_running_loop()
        pending = [task for task in self._inflight if task.get_loop() is loop]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        sender = self._sender
        payload = self._take_payload("shutdown")
        if payload is not None:
            await self._deliver(payload, sender, reraise=False)
        logger.info("Logging agent shut down: %s", self._metrics.snapshot())

    def _on_tick(self):
        self._flush_in_background("timer")

    def _flush_in_background(self, trigger: str):
        sender = self._sender
        payload = self._take_payload(trigger)
        if payload is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._deliver(payload, sender, reraise=False))
            return
        task = loop.create_task(self._deliver(payload, sender, reraise=False))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def _take_payload(self, trigger: str) -> Optional[dict]:
        """Drain the buffer into a payload, or trim it when there is no sender."""
        if not len(self._buffer):
            return None

        if self._sender is None:
            overflow = len(self._buffer) - self._buffer.capacity
            if overflow > 0:
                logger.warning(
                    "Dropping %d logs because logging is not configured", overflow
                )
                self._metrics.record_dropped(self._buffer.drop_oldest(overflow))
            return None

        lines = self._buffer.drain_all()
        self._metrics.record_flush(trigger)
        return merge(
            self._request_fields,
            {"lines": [record_to_dict(record) for record in lines]},
        )

    async def _deliver(self, payload: dict, sender: Sender, reraise: bool = True):
        count = len(payload["lines"])
        start = time.monotonic()
        try:
            await sender(payload)
        except asyncio.CancelledError:
            self._metrics.record_failure(count)
            logger.error("Send cancelled (%d lines lost)", count)
            raise
        except Exception as exc:
            self._metrics.record_failure(count)
            logger.error("Failed to send logs (%d lines lost): %s", count, exc)
            if reraise:
                raise
            return
        self._metrics.record_delivery(count, (time.monotonic() - start) * 1000)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> AgentState:
        return self._state

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def level_threshold(self) -> int:
        return self._levels.threshold

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def pending_count(self) -> int:
        return len(self._buffer)

    def pending_records(self) -> tuple[LogRecord, ...]:
        return self._buffer.snapshot()

    @property
    def periodic_armed(self) -> bool:
        return self._scheduler.armed

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    def stats(self) -> dict:
        return {
            **self._metrics.snapshot(),
            "pending": len(self._buffer),
            "state": self._state.value,
        }
