"""Join-all fan-out: launch every branch, wait until all have settled."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one fan-out branch: a value or the exception it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(aws: Iterable[Awaitable[T]]) -> list[Settled[T]]:
    """Run all awaitables concurrently and collect one ``Settled`` per branch.

    Never short-circuits: a failing branch does not cancel its siblings and
    the call returns only after every branch finished.  Results keep the
    input order.  Cancellation (or any other non-``Exception``) is re-raised.
    """
    outcomes = await asyncio.gather(*aws, return_exceptions=True)
    settled: list[Settled[T]] = []
    for outcome in outcomes:
        if isinstance(outcome, Exception):
            settled.append(Settled(error=outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            settled.append(Settled(value=outcome))
    return settled
