"""
Game Loop - Fixed-rate tick driver for real-time games.

The loop:
1. Measures the real time elapsed since the previous tick (monotonic clock)
2. Awaits on_tick(delta)
3. Sleeps one interval and repeats until stopped

Turn-based games have no tick configuration and never get a loop.
"""

from __future__ import annotations
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from loguru import logger

MIN_INTERVAL = 0.01


@dataclass(frozen=True)
class TickConfiguration:
    """
    How a game is ticked.

    ``make_action`` turns the measured delta (seconds) into the game's tick
    action; grid games ignore it, Breakout integrates over it.
    """
    tick_rate: float
    make_action: Callable[[float], Any]

    @property
    def interval(self) -> float:
        return max(1.0 / self.tick_rate, MIN_INTERVAL)


class GameLoop:
    """
    Asyncio task that calls ``on_tick`` at a fixed rate.

    Usage:
        loop = GameLoop(tick_rate=7, on_tick=handle_tick)
        loop.start()     # inside a running event loop
        ...
        await loop.stop()

    A tick handler that raises is logged; the loop keeps going.
    """

    def __init__(self, tick_rate: float, on_tick: Callable[[float], Awaitable[Any]]):
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.tick_rate = tick_rate
        self.interval = max(1.0 / tick_rate, MIN_INTERVAL)
        self._on_tick = on_tick
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Requires a running event loop; no-op if running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish. Safe to call twice."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    async def _run(self) -> None:
        last = time.monotonic()
        while True:
            now = time.monotonic()
            delta, last = now - last, now
            try:
                await self._on_tick(delta)
            except Exception:
                logger.exception("Tick handler failed")
            await asyncio.sleep(self.interval)
