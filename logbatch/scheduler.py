"""Periodic flush trigger backed by a single asyncio task."""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicFlusher:
    """Calls *on_tick* every ``interval_ms`` milliseconds.

    At most one task is alive at a time. ``arm`` may be called before an
    event loop exists; the task is then started by the first ``ensure_armed``
    call made from inside a running loop. The tick callback is synchronous,
    so cancelling the task never interrupts a delivery it started.
    """

    def __init__(self, on_tick: Callable[[], None]):
        self._on_tick = on_tick
        self._interval_ms: Optional[int] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval_ms

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, interval_ms: int):
        """Replace any running trigger with one firing every *interval_ms*."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self.disarm()
        self._interval_ms = interval_ms
        if not self.ensure_armed():
            logger.warning(
                "No running event loop; periodic flush deferred until one starts"
            )

    def ensure_armed(self) -> bool:
        """Start the trigger on the running loop if it is due but not running."""
        if self._interval_ms is None:
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        if self.armed and self._task.get_loop() is loop:
            return True
        self._cancel_task()
        self._task = loop.create_task(self._run(self._interval_ms / 1000.0))
        logger.debug("Periodic flush armed every %d ms", self._interval_ms)
        return True

    def disarm(self):
        """Cancel the trigger and forget its interval."""
        self._interval_ms = None
        self._cancel_task()

    def _cancel_task(self):
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            task.cancel()
        except RuntimeError:
            # The loop owning the task has already been closed.
            pass

    async def _run(self, interval: float):
        while True:
            await asyncio.sleep(interval)
            try:
                self._on_tick()
            except Exception:
                logger.exception("Periodic flush failed")
