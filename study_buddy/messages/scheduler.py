"""Deferred execution of generation jobs on a small worker pool."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

JobHandler = Callable[[str], Awaitable[object]]


class GenerationScheduler:
    """Queue of conversation ids drained by ``workers`` background tasks.

    Jobs for the same conversation may run concurrently; nothing here
    serializes them. There is no cancellation of queued jobs.
    """

    def __init__(self, handler: JobHandler, workers: int = 2):
        self._handler = handler
        self._worker_count = max(1, workers)
        self._queue: asyncio.Queue[str] | None = None
        self._workers: list[asyncio.Task] = []

    async def start(self) -> None:
        self._queue = asyncio.Queue()
        self._workers = [
            asyncio.create_task(self._worker(i), name=f"generation-worker-{i}")
            for i in range(self._worker_count)
        ]
        logger.info("Started %d generation workers", self._worker_count)

    async def stop(self) -> None:
        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("Generation workers stopped")

    def run_after(self, delay: float, conversation_id: str) -> None:
        """Queue a job to start at or after ``delay`` seconds. Must be called on the scheduler's loop."""
        if self._queue is None:
            raise RuntimeError("Generation scheduler is not running")
        if delay <= 0:
            self._queue.put_nowait(conversation_id)
        else:
            asyncio.get_running_loop().call_later(delay, self._queue.put_nowait, conversation_id)

    async def join(self) -> None:
        """Wait until every queued job has finished."""
        if self._queue is not None:
            await self._queue.join()

    async def _worker(self, index: int) -> None:
        assert self._queue is not None
        while True:
            conversation_id = await self._queue.get()
            try:
                await self._handler(conversation_id)
            except Exception:
                logger.exception("Worker %d: generation job for %s failed", index, conversation_id)
            finally:
                self._queue.task_done()
