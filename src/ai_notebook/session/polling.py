"""
Background polling task.

'PollingTask' runs a coroutine on a fixed interval inside the running event
loop until it is cancelled. A failing tick is logged and the loop carries on;
nothing escapes to the caller. The first tick runs one interval after 'start'.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

from loguru import logger


class PollingTask:
    def __init__(self, poll: Callable[[], Awaitable[None]], interval_seconds: float, name: str = "source-poll") -> None:
        self.poll = poll
        self.interval_seconds = interval_seconds
        self.name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug(f"Started {self.name} every {self.interval_seconds}s")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.poll()
            except Exception:
                logger.exception(f"{self.name} tick failed")

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()

    async def stop(self) -> None:
        """Cancel the task and wait until it has finished."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug(f"Stopped {self.name}")
