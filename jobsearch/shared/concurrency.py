"""
Async helpers for running blocking calls from the pipeline's event loop.

Blocking provider and model calls run on an AttemptExecutor owned by one
pipeline stage. Calls that exceed their timeout are abandoned: the worker
thread finishes on its own, its result is discarded, and closing the
executor never waits for it.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class AttemptExecutor:
    """
    Dedicated thread pool for time-bounded blocking calls.

    Size it so every call a stage may start, including abandoned ones, gets
    its own worker; a call never waits in the queue behind a hung sibling.

    Usage:
        with AttemptExecutor(max_workers=8, name="job-provider") as executor:
            jobs = await executor.run(fetch, query, timeout=30.0)
    """

    def __init__(self, max_workers: int, name: str = "attempt"):
        if not isinstance(max_workers, int) or max_workers <= 0:
            raise ValueError(f"max_workers must be a positive integer, got: {max_workers}")
        self.max_workers = max_workers
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=name
        )

    async def run(self, func: Callable[..., Any], *args: Any, timeout: float, **kwargs: Any) -> Any:
        """
        Run func in the pool, bounded by timeout.

        The timeout starts when a worker picks the call up, not when it is
        queued.

        Raises:
            TimeoutError: If the call runs longer than timeout
        """
        loop = asyncio.get_running_loop()
        started = asyncio.Event()

        def call() -> Any:
            try:
                loop.call_soon_threadsafe(started.set)
            except RuntimeError:
                # Loop already closed; nobody is waiting for this result
                return None
            return func(*args, **kwargs)

        future = loop.run_in_executor(self._executor, call)
        started_waiter = asyncio.ensure_future(started.wait())
        try:
            await asyncio.wait({future, started_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            started_waiter.cancel()
        return await asyncio.wait_for(future, timeout=timeout)

    def close(self) -> None:
        """Release the pool without joining abandoned calls."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> AttemptExecutor:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
