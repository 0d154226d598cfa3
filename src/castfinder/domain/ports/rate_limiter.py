"""Port for per-caller admission control."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RateLimiterPort(Protocol):
    """Admit or reject one request for a caller identifier."""

    @property
    def window_seconds(self) -> float:
        """Width of the admission window (also the suggested retry delay)."""
        ...

    def check(self, identifier: str) -> bool:
        """Return True and record the request if admitted, else False."""
        ...
