"""Time abstraction for real and simulated clocks.

The driving-distance ranker paces its routing calls through a TimeSource so
that tests can assert the pacing without actually waiting.

Real-time usage:
    ts = RealTimeSource()
    await ts.sleep(0.1)

Simulated time usage:
    ts = SimTimeSource(start=0.0)
    await ts.sleep(0.1)  # returns immediately
    assert ts.monotonic() == 0.1
    assert ts.sleeps == [0.1]
"""

from __future__ import annotations

import asyncio
import time
from typing import Protocol

__all__ = [
    "TimeSource",
    "RealTimeSource",
    "SimTimeSource",
]


class TimeSource(Protocol):
    """Protocol for clocks supporting monotonic time and async sleep."""

    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Sleep for the specified number of seconds."""
        ...


class RealTimeSource:
    """Real-time implementation using time.monotonic and asyncio.sleep."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class SimTimeSource:
    """Deterministic simulated clock.

    ``sleep`` advances simulated time by the requested amount and returns
    after a single event-loop yield. Every requested duration is recorded in
    ``sleeps`` in call order.
    """

    def __init__(self, *, start: float = 0.0) -> None:
        self._monotonic_time: float = float(start)
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self._monotonic_time

    def advance(self, dt: float) -> None:
        """Advance simulated time by delta.

        Raises:
            ValueError: If dt < 0
        """
        if dt < 0:
            raise ValueError(f"Cannot advance time backwards: dt={dt}")
        self._monotonic_time += dt

    async def sleep(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Sleep duration must be non-negative: {seconds}")
        self.sleeps.append(seconds)
        self.advance(seconds)
        # Allow other tasks to run
        await asyncio.sleep(0)
