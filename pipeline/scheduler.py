# pipeline/scheduler.py
import asyncio
import logging
from typing import Awaitable, Callable, Coroutine, Set

log = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Runs coroutines without awaiting them while keeping them alive.

    ``wait_until`` returns as soon as the task is scheduled; ``drain`` is
    called on shutdown and waits for whatever is still running.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def wait_until(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error(f"[Background] ❌ Task failed: {task.exception()!r}")

    async def drain(self) -> None:
        if self._tasks:
            log.info(f"[Background] ⏳ Waiting for {len(self._tasks)} running task(s)")
            await asyncio.gather(*self._tasks, return_exceptions=True)


async def run_every(interval: float, on_tick: Callable[[], Awaitable[None]]) -> None:
    """Call ``on_tick`` every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            await on_tick()
        except Exception as e:
            log.error(f"[Cron] ❌ Tick failed: {e}")
