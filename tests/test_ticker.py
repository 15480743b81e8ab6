import asyncio
import logging

from pixel_snake.ticker import AsyncioTicker, ManualTicker


def test_asyncio_ticker_repeats_until_cancelled():
    calls = []

    async def scenario():
        ticker = AsyncioTicker(0.01, lambda: calls.append(1))
        ticker.start()
        await asyncio.sleep(0.08)
        ticker.cancel()
        seen = len(calls)
        await asyncio.sleep(0.05)
        return seen

    seen = asyncio.run(scenario())
    assert seen >= 2
    assert len(calls) == seen


def test_asyncio_ticker_cancelled_from_its_own_tick_runs_after_once():
    afters = []

    async def after():
        afters.append(1)

    async def scenario():
        ticker = AsyncioTicker(0.01, lambda: ticker.cancel(), after=after)
        ticker.start()
        await asyncio.sleep(0.08)
        return ticker.active

    assert asyncio.run(scenario()) is False
    assert afters == [1]


def test_manual_ticker_only_fires_while_active():
    calls = []
    ticker = ManualTicker(0.1, lambda: calls.append(1))
    ticker.fire()
    assert calls == []

    ticker.start()
    ticker.fire(3)
    ticker.cancel()
    ticker.fire()
    assert calls == [1, 1, 1]
    assert ticker.fired == 3


def test_asyncio_ticker_logs_a_failing_tick(caplog):
    def boom():
        raise RuntimeError("socket gone")

    async def scenario():
        ticker = AsyncioTicker(0.01, boom)
        ticker.start()
        await asyncio.sleep(0.08)
        active = ticker.active
        ticker.cancel()
        return active

    with caplog.at_level(logging.WARNING, logger="pixel_snake.ticker"):
        assert asyncio.run(scenario()) is False
    assert "socket gone" in caplog.text
