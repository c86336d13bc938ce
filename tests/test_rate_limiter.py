"""Tests for the fixed-window rate limiter."""

import asyncio
import threading

import pytest

from webposture.core.rate_limiter import RateLimiter


class TestRateLimiter:

    @pytest.fixture
    def limiter(self, clock):
        return RateLimiter(max_requests=1, window_seconds=300, clock=clock)

    def test_first_request_allowed_second_denied(self, limiter):
        assert limiter.check("a").allowed

        denied = limiter.check("a")
        assert not denied.allowed
        assert 0 < denied.retry_after_seconds <= 300

    def test_identifiers_are_independent(self, limiter):
        assert limiter.check("a").allowed
        assert not limiter.check("a").allowed
        assert limiter.check("b").allowed

    def test_retry_after_counts_down(self, limiter, clock):
        limiter.check("a")
        clock.advance(100.5)
        assert limiter.check("a").retry_after_seconds == 200

    def test_window_resets_at_boundary(self, limiter, clock):
        limiter.check("a")
        clock.advance(300)
        assert limiter.check("a").allowed
        assert not limiter.check("a").allowed

    def test_counts_up_to_max(self, clock):
        limiter = RateLimiter(max_requests=3, window_seconds=60, clock=clock)
        results = [limiter.check("x").allowed for _ in range(4)]
        assert results == [True, True, True, False]

    def test_cleanup_removes_only_expired(self, limiter, clock):
        limiter.check("old")
        clock.advance(200)
        limiter.check("new")
        clock.advance(100)

        assert limiter.cleanup() == 1
        assert len(limiter) == 1
        assert not limiter.check("new").allowed

    def test_concurrent_burst_does_not_undercount(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        allowed = []

        def worker():
            allowed.append(limiter.check("burst").allowed)

        threads = [threading.Thread(target=worker) for _ in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert allowed.count(True) == 5


class TestSweep:

    @pytest.mark.asyncio
    async def test_background_sweep_and_stop(self, clock):
        limiter = RateLimiter(max_requests=1, window_seconds=10, sweep_interval=0.01, clock=clock)
        limiter.check("a")
        clock.advance(10)

        limiter.start()
        try:
            for _ in range(100):
                if len(limiter) == 0:
                    break
                await asyncio.sleep(0.01)
            assert len(limiter) == 0
        finally:
            await limiter.stop()

        assert limiter._sweeper is None

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        await RateLimiter().stop()
