from __future__ import annotations
import asyncio, heapq, itertools
from typing import Callable, List, Optional, Protocol, Tuple

class Handle(Protocol):
    def cancel(self) -> None: ...

class Clock(Protocol):
    def time(self) -> float: ...
    def call_later(self, delay: float, fn: Callable[[], None]) -> Handle: ...

class _ManualHandle:
    __slots__ = ("cancelled",)
    def __init__(self):
        self.cancelled = False
    def cancel(self):
        self.cancelled = True

class ManualClock:
    """
    Virtual time. Nothing fires until advance() is called; due callbacks run
    one at a time in due order, ties in the order they were scheduled.
    """
    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, fn: Callable[[], None]) -> _ManualHandle:
        h = _ManualHandle()
        heapq.heappush(self._queue, (self._now + max(0.0, delay), next(self._seq), h, fn))
        return h

    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)

    def advance(self, seconds: float):
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, h, fn = heapq.heappop(self._queue)
            if h.cancelled: continue
            self._now = max(self._now, due)
            fn()
        self._now = target

class AsyncioClock:
    """Event-loop backed clock; every callback runs on the loop thread."""
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()
    def time(self) -> float:
        return self.loop.time()
    def call_later(self, delay: float, fn: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, fn)

class Ticker:
    """
    Repeating cancelable timer. The n-th firing is scheduled for
    start + n*interval so slow callbacks do not accumulate drift.
    """
    def __init__(self, clock: Clock, interval: float, callback: Callable[[], None], name: str = "tick"):
        if interval <= 0: raise ValueError("interval must be positive")
        self.clock = clock; self.interval = interval; self.callback = callback; self.name = name
        self.fired = 0
        self._handle: Optional[Handle] = None
        self._t0 = 0.0
        self._n = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self):
        self.cancel()
        self._t0 = self.clock.time(); self._n = 0
        self._schedule()

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self):
        self._n += 1
        due = self._t0 + self._n*self.interval
        self._handle = self.clock.call_later(due - self.clock.time(), self._fire)

    def _fire(self):
        if self._handle is None: return
        self._schedule()
        self.fired += 1
        self.callback()
