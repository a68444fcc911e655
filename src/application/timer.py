import asyncio
from typing import Callable, Optional

import structlog

from ..core.interfaces import Ticker

logger = structlog.get_logger(__name__)


def format_elapsed(seconds: int) -> str:
    """Render elapsed seconds as mm:ss."""
    seconds = max(int(seconds), 0)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def progress_percent(current_index: int, total: int) -> int:
    if total <= 0:
        return 0
    return (100 * (current_index + 1)) // total


class AsyncioTicker(Ticker):
    """
    Calls a callback every `interval` seconds from a task on the running
    event loop until stopped.
    """

    def __init__(self, interval: float = 1.0):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: Callable[[], None]) -> None:
        if self.running:
            raise RuntimeError("Ticker already started")
        self._task = asyncio.get_running_loop().create_task(self._run(callback))

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                callback()
            except Exception:
                logger.exception("tick_callback_failed")
                return


class NullTicker(Ticker):
    """Ticker that never fires; elapsed time only moves on explicit ticks."""

    def __init__(self):
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, callback: Callable[[], None]) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False
