"""Bounded fan-out over independent units of work."""
import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from gitlabctl.errors import GitLabCtlError

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class Outcome(Generic[K, V]):
    """Result of one unit of work: either a value or the error that ended it."""

    item: K
    value: Optional[V] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def fan_out(
    items: Iterable[K],
    worker: Callable[[K], Awaitable[V]],
    limit: int,
    recover: Tuple[Type[BaseException], ...] = (GitLabCtlError,),
) -> List[Outcome[K, V]]:
    """
    Run ``worker`` for every item with at most ``limit`` running at once.

    Waits for every unit before returning. Errors of the ``recover`` types
    become failed outcomes; anything else, and cancellation, cancels the
    remaining units and propagates once they have stopped. Outcomes are
    returned in input order, each unit writing only its own slot.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    semaphore = asyncio.Semaphore(limit)

    async def run(item: K) -> Outcome[K, V]:
        async with semaphore:
            try:
                return Outcome(item, value=await worker(item))
            except recover as e:
                return Outcome(item, error=e)

    tasks = [asyncio.create_task(run(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
