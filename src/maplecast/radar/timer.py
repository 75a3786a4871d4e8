"""Cancellable recurring timer on the asyncio event loop."""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FrameTimer:
    """Calls a callback every interval seconds until cancelled.

    start() returns the running task as the handle; cancel() must be called
    on teardown or before restarting with new settings. Starting an already
    running timer cancels the previous task first, so at most one task is
    ever live.

    Example:
        >>> timer = FrameTimer(2.0, animator.tick)
        >>> timer.start()
        >>> ...
        >>> timer.cancel()
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the recurring callback on the running event loop.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Timer callback failed: {e}")
