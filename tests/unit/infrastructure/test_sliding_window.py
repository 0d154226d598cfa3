"""Tests for SlidingWindowRateLimiter."""

from __future__ import annotations

from castfinder.infrastructure.rate_limit.sliding_window import SlidingWindowRateLimiter


class TestSlidingWindow:
    def test_thirty_first_request_in_one_second_rejected(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=30, window_seconds=10.0, clock=clock)

        decisions = []
        for _ in range(31):
            decisions.append(limiter.check("10.0.0.1"))
            clock.advance(1 / 31)

        assert decisions == [True] * 30 + [False]

    def test_admitted_again_after_window(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=30, window_seconds=10.0, clock=clock)
        for _ in range(30):
            limiter.check("10.0.0.1")
        assert limiter.check("10.0.0.1") is False

        clock.advance(10.01)

        assert limiter.check("10.0.0.1") is True

    def test_rejections_are_not_recorded(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=10.0, clock=clock)
        limiter.check("a")
        clock.advance(5)
        limiter.check("a")
        for _ in range(10):
            assert limiter.check("a") is False

        # Only the first admission has left the window.
        clock.advance(5.5)
        assert limiter.check("a") is True
        assert limiter.check("a") is False

    def test_identifiers_are_isolated(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10.0, clock=clock)

        assert limiter.check("10.0.0.1") is True
        assert limiter.check("10.0.0.1") is False
        assert limiter.check("10.0.0.2") is True

    def test_zero_means_unlimited(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=0, window_seconds=10.0, clock=clock)
        assert all(limiter.check("a") for _ in range(1000))

    def test_window_seconds(self) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=2.5)
        assert limiter.window_seconds == 2.5


class TestIdleEviction:
    def test_idle_callers_are_evicted(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=30, window_seconds=10.0, clock=clock)
        for i in range(1000):
            limiter.check(f"ip-{i}")

        clock.advance(1000)
        for _ in range(300):
            limiter.check("fresh")

        assert set(limiter._windows) == {"fresh"}

    def test_sweep_counts_rejected_checks(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10.0, clock=clock)
        limiter.check("idle")
        clock.advance(11)

        # One admission, then only rejections for the busy caller.
        for _ in range(256):
            limiter.check("busy")

        assert "idle" not in limiter._windows
        assert "busy" in limiter._windows

    def test_callers_inside_window_survive_sweep(self, clock) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10.0, clock=clock)
        assert limiter.check("recent") is True
        clock.advance(5)

        for i in range(300):
            limiter.check(f"other-{i}")

        assert "recent" in limiter._windows
        assert limiter.check("recent") is False
