"""Cancelable repeating timers that drive the game engine."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class AsyncioTicker:
    """Calls ``callback`` every ``interval`` seconds on the running event loop.

    ``after`` is awaited once per tick, after the callback returns. The server
    uses it to push the fresh state to the page.
    """

    def __init__(self, interval: float, callback: Callable[[], None],
                 after: Optional[Callable[[], Awaitable[None]]] = None):
        self.interval = interval
        self.callback = callback
        self.after = after
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.active:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(_report_failure)

    def cancel(self):
        task, self._task = self._task, None
        if task is None:
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # Cancelled from inside its own tick: let ``after`` run, then stop.
        if task is not current:
            task.cancel()

    async def _run(self):
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            self.callback()
            if self.after is not None:
                await self.after()
        logger.debug("ticker stopped after final tick")


def _report_failure(task: asyncio.Task):
    if not task.cancelled() and task.exception() is not None:
        logger.warning("ticker stopped by %r", task.exception())


class ManualTicker:
    """Ticker stepped by hand with ``fire``; used by tests and replays."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.active = False
        self.fired = 0

    def start(self):
        self.active = True

    def cancel(self):
        self.active = False

    def fire(self, times: int = 1):
        for _ in range(times):
            if not self.active:
                break
            self.fired += 1
            self.callback()
