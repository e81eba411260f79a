"""Bounded worker pool: runs scrape jobs off the request path with queue-depth backpressure."""

from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Awaitable, Callable, Literal, TypeVar

from .errors import PoolSaturatedError

logger = logging.getLogger(__name__)

T = TypeVar("T")
WorkerType = Literal["thread", "process"]


def _prime() -> None:
    """No-op submitted at startup so executor workers exist before the first job."""


class WorkerPool:
    """Fixed-size pool of scrape slots in front of a CPU executor.

    At most ``max_workers`` jobs run at once and at most ``max_queue_size``
    submissions wait for a slot. A submission that finds the waiting room
    full, or that waits longer than ``queue_timeout`` seconds, fails with
    :class:`PoolSaturatedError` instead of queueing without bound.

    Jobs are coroutines so network I/O stays on the event loop; blocking
    work inside a job goes through :meth:`run_blocking`, which hands it to
    a thread or process executor sized to ``max_workers``.
    """

    def __init__(
        self,
        *,
        min_workers: int = 2,
        max_workers: int = 4,
        max_queue_size: int = 1000,
        queue_timeout: float = 30.0,
        terminate_timeout: float = 60.0,
        worker_type: WorkerType = "thread",
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if not 0 <= min_workers <= max_workers:
            raise ValueError("min_workers must be between 0 and max_workers")
        if max_queue_size < 0:
            raise ValueError("max_queue_size must not be negative")

        self._min_workers = min_workers
        self._max_workers = max_workers
        self._max_queue_size = max_queue_size
        self._queue_timeout = queue_timeout
        self._terminate_timeout = terminate_timeout
        self._worker_type = worker_type

        self._slots = asyncio.Semaphore(max_workers)
        self._waiting = 0
        self._inflight: set[asyncio.Task] = set()
        self._closing = False

        self._executor: Executor
        if worker_type == "process":
            self._executor = ProcessPoolExecutor(max_workers=max_workers)
        else:
            self._executor = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="scrape-worker"
            )

    @property
    def pending(self) -> int:
        """Submissions waiting for a free slot."""
        return self._waiting

    @property
    def active(self) -> int:
        """Jobs currently holding a slot."""
        return len(self._inflight)

    async def start(self) -> None:
        loop = asyncio.get_running_loop()
        await asyncio.gather(
            *(loop.run_in_executor(self._executor, _prime) for _ in range(self._min_workers))
        )
        logger.info(
            "worker pool started",
            extra={
                "worker_type": self._worker_type,
                "min_workers": self._min_workers,
                "max_workers": self._max_workers,
                "max_queue_size": self._max_queue_size,
            },
        )

    async def submit(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Run the coroutine function *fn* in a pool slot and return its result."""
        if self._closing:
            raise PoolSaturatedError("Worker pool is shutting down")
        if self._slots.locked() and self._waiting >= self._max_queue_size:
            logger.warning(
                "worker pool saturated",
                extra={"waiting": self._waiting, "max_queue_size": self._max_queue_size},
            )
            raise PoolSaturatedError(
                f"Worker pool queue is full ({self._max_queue_size} waiting)"
            )

        self._waiting += 1
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout=self._queue_timeout)
        except asyncio.TimeoutError:
            raise PoolSaturatedError(
                f"No worker became available within {self._queue_timeout:g}s"
            ) from None
        finally:
            self._waiting -= 1

        task = asyncio.ensure_future(fn(*args))
        self._inflight.add(task)
        try:
            return await task
        finally:
            self._inflight.discard(task)
            self._slots.release()

    async def run_blocking(self, fn: Callable[..., T], *args: Any) -> T:
        """Run the plain function *fn* on the executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(fn, *args))

    async def close(self) -> None:
        """Stop accepting jobs, drain in-flight ones, then force-terminate the rest."""
        self._closing = True
        if self._inflight:
            logger.info("draining worker pool", extra={"in_flight": len(self._inflight)})
            _, still_running = await asyncio.wait(
                set(self._inflight), timeout=self._terminate_timeout
            )
            for task in still_running:
                task.cancel()
            if still_running:
                logger.warning(
                    "worker pool terminated with jobs still running",
                    extra={"cancelled": len(still_running)},
                )
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.info("worker pool stopped")
