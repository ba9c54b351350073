"""Tests for common.cache module."""

import asyncio

import pytest

from common.cache import TTLCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_get_returns_fresh_value(self) -> None:
        clock = FakeClock()
        cache = TTLCache(60, clock=clock)
        cache.set("k", "v")
        clock.now += 59
        assert cache.get("k") == "v"

    def test_entry_expires_at_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLCache(60, clock=clock)
        cache.set("k", "v")
        clock.now += 60
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_invalidate_and_clear(self) -> None:
        cache = TTLCache(60)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.invalidate("a")
        assert cache.get("a") is None
        cache.clear()
        assert len(cache) == 0

    def test_disabled_cache_stores_nothing(self) -> None:
        cache = TTLCache(60, enabled=False)
        cache.set("k", "v")
        assert cache.get("k") is None


class TestGetOrLoad:
    def test_loads_once_within_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLCache(60, clock=clock)
        calls = []

        async def loader():
            calls.append(1)
            return len(calls)

        async def run():
            first = await cache.get_or_load("k", loader)
            second = await cache.get_or_load("k", loader)
            clock.now += 61
            third = await cache.get_or_load("k", loader)
            return first, second, third

        assert asyncio.run(run()) == (1, 1, 2)
        assert len(calls) == 2

    def test_concurrent_callers_share_one_load(self) -> None:
        cache = TTLCache(60)
        calls = []

        async def loader():
            calls.append(1)
            await asyncio.sleep(0.01)
            return "value"

        async def run():
            return await asyncio.gather(*(cache.get_or_load("k", loader) for _ in range(5)))

        assert asyncio.run(run()) == ["value"] * 5
        assert len(calls) == 1

    def test_failure_propagates_to_all_waiters_and_caches_nothing(self) -> None:
        cache = TTLCache(60)
        calls = []

        async def loader():
            calls.append(1)
            await asyncio.sleep(0.01)
            raise RuntimeError("upstream down")

        async def run():
            return await asyncio.gather(
                *(cache.get_or_load("k", loader) for _ in range(3)),
                return_exceptions=True,
            )

        results = asyncio.run(run())
        assert len(calls) == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert cache.get("k") is None

    def test_next_call_after_failure_retries(self) -> None:
        cache = TTLCache(60)
        outcomes = [RuntimeError("boom"), "ok"]

        async def loader():
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        async def run():
            with pytest.raises(RuntimeError):
                await cache.get_or_load("k", loader)
            return await cache.get_or_load("k", loader)

        assert asyncio.run(run()) == "ok"

    def test_cancelled_loader_does_not_cancel_waiters(self) -> None:
        cache = TTLCache(60)
        calls = []

        async def loader():
            calls.append(1)
            if len(calls) == 1:
                await asyncio.sleep(10)
            return "value"

        async def run():
            first = asyncio.create_task(cache.get_or_load("k", loader))
            await asyncio.sleep(0)
            second = asyncio.create_task(cache.get_or_load("k", loader))
            await asyncio.sleep(0)
            first.cancel()
            with pytest.raises(asyncio.CancelledError):
                await first
            return await second

        assert asyncio.run(run()) == "value"
        assert len(calls) == 2
        assert cache.get("k") == "value"

    def test_keys_load_independently(self) -> None:
        cache = TTLCache(60)

        async def run():
            a = await cache.get_or_load("a", _const("A"))
            b = await cache.get_or_load("b", _const("B"))
            return a, b

        assert asyncio.run(run()) == ("A", "B")


def _const(value):
    async def loader():
        return value

    return loader
