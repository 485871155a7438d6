"""Shared test helpers."""

import asyncio


class CapturingSender:
    """Records every payload; optionally fails or blocks until released."""

    def __init__(self, fail: bool = False, block: bool = False):
        self.payloads: list[dict] = []
        self.fail = fail
        self._release = asyncio.Event() if block else None

    async def __call__(self, payload: dict):
        self.payloads.append(payload)
        if self._release is not None:
            await self._release.wait()
        if self.fail:
            raise ConnectionError("collector unavailable")

    def release(self):
        self._release.set()

    def events(self) -> list[list[str]]:
        return [[line["event"] for line in p["lines"]] for p in self.payloads]


async def settle(rounds: int = 5):
    """Let scheduled background deliveries run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
