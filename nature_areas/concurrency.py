"""Bounded-concurrency execution of upstream fetches"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# The upstream geodata service answers 503 when hit harder than this.
UPSTREAM_CONCURRENCY = 2


async def run_with_concurrency(
    jobs: Sequence[Callable[[], Awaitable[T]]],
    limit: int = UPSTREAM_CONCURRENCY,
) -> List[T]:
    """Run job factories with at most ``limit`` in flight.

    A fixed pool of workers drains a shared queue of jobs. Each result lands
    in the slot matching its job's position, so the returned list follows
    input order regardless of completion order.

    The first failing job fails the whole batch: the remaining workers are
    cancelled and the exception propagates. No partial results are returned.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    results: List[T] = [None] * len(jobs)  # type: ignore[list-item]
    queue = iter(enumerate(jobs))

    async def worker() -> None:
        # Sharing the iterator is safe: next() never yields to the event loop
        for index, job in queue:
            results[index] = await job()

    workers = [asyncio.ensure_future(worker()) for _ in range(min(limit, len(jobs)))]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        raise

    return results
