import asyncio
from distractiondodge.runtime.clock import ManualClock, AsyncioClock, Ticker

def test_manual_clock_orders_callbacks():
    clk = ManualClock(); out = []
    clk.call_later(2.0, lambda: out.append("b"))
    clk.call_later(1.0, lambda: out.append("a"))
    clk.call_later(2.0, lambda: out.append("c"))
    clk.advance(1.5)
    assert out == ["a"] and clk.time() == 1.5
    clk.advance(1.0)
    assert out == ["a", "b", "c"]

def test_ticker_fires_on_schedule():
    clk = ManualClock(); seen = []
    t = Ticker(clk, 0.5, lambda: seen.append(clk.time())); t.start()
    clk.advance(2.0)
    assert seen == [0.5, 1.0, 1.5, 2.0] and t.fired == 4

def test_cancel_stops_ticks():
    clk = ManualClock(); seen = []
    t = Ticker(clk, 1.0, lambda: seen.append(1)); t.start()
    clk.advance(2.0); t.cancel()
    clk.advance(5.0)
    assert len(seen) == 2 and not t.active and clk.pending() == 0

def test_cancel_from_own_callback():
    clk = ManualClock(); seen = []
    t = Ticker(clk, 1.0, lambda: (seen.append(1), t.cancel())); t.start()
    clk.advance(5.0)
    assert seen == [1]

def test_asyncio_ticker():
    async def main():
        seen = []
        t = Ticker(AsyncioClock(), 0.01, lambda: seen.append(1)); t.start()
        await asyncio.sleep(0.1)
        t.cancel(); n = len(seen)
        await asyncio.sleep(0.05)
        return n, len(seen)
    n, after = asyncio.run(main())
    assert n >= 3 and after == n
