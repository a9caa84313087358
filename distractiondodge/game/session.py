from __future__ import annotations
import logging
import numpy as np
from typing import Callable, List, Optional
from ..config import GameConfig
from ..runtime.clock import Clock, Ticker
from ..runtime.events import SessionState, EndReason, Snapshot
from ..motion.target import TargetState, advance, centered
from ..distract.spawner import DistractionSpawner
from ..eye.tracker import GazeTracker
from ..score.engine import ScoringEngine

log = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]

class SessionController:
    """
    Owns one game session: idle -> running <-> paused -> ended.

    All mutation happens on the clock's thread. Every timer callback carries
    the epoch it was armed in; pause/stop/start bump the epoch, so a callback
    that was already queued when the session moved on does nothing.
    Commands that do not apply to the current state are ignored.
    """
    def __init__(self, clock: Clock, cfg: GameConfig | None = None, rng: Optional[np.random.Generator] = None):
        self.clock = clock
        self.cfg = cfg or GameConfig()
        self.state = SessionState.IDLE
        self.end_reason: Optional[EndReason] = None
        self.time_remaining = float(self.cfg.session.duration_s)
        self.target: TargetState = centered(self.cfg.motion.bounds, self.cfg.motion.velocity)
        self.gazing = False
        self.scoring = ScoringEngine(self.cfg.scoring)
        self.spawner = DistractionSpawner(self.cfg.spawner, self.cfg.motion.bounds, rng)
        self.gaze = GazeTracker(self.cfg.gaze.required_hits, on_change=self.on_gaze_update)
        self._epoch = 0
        self._tickers: List[Ticker] = []
        self._listeners: List[Listener] = []
        self._suspended_by_host = False
        self._snapshot = self._build_snapshot()

    # ---- read side ----------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def elapsed(self) -> float:
        return self.cfg.session.duration_s - self.time_remaining

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        self._listeners.append(fn)
        def unsubscribe():
            if fn in self._listeners: self._listeners.remove(fn)
        return unsubscribe

    def _build_snapshot(self) -> Snapshot:
        s = self.scoring.state
        return Snapshot(
            state=self.state, position=self.target.position, velocity=self.target.velocity,
            gazing=self.gazing, score=s.score, multiplier=s.multiplier,
            focus_streak_seconds=s.focus_streak_seconds, best_streak_seconds=s.best_streak_seconds,
            total_focus_seconds=s.total_focus_seconds, time_remaining_seconds=max(0.0, self.time_remaining),
            distractions=list(self.spawner.active), end_reason=self.end_reason,
        )

    def _publish(self):
        self._snapshot = snap = self._build_snapshot()
        for fn in list(self._listeners):
            fn(snap)

    # ---- timers -------------------------------------------------------

    def _guard(self, fn: Callable[[], None]) -> Callable[[], None]:
        epoch = self._epoch
        def cb():
            if epoch != self._epoch or self.state is not SessionState.RUNNING:
                return
            fn()
        return cb

    def _arm(self):
        self._cancel_timers()
        m, sp, se = self.cfg.motion, self.cfg.spawner, self.cfg.session
        self._tickers = [
            Ticker(self.clock, m.interval_s, self._guard(self._motion_tick), "motion"),
            Ticker(self.clock, sp.interval_s, self._guard(self._spawn_tick), "spawn"),
            Ticker(self.clock, se.tick_s, self._guard(self._second_tick), "second"),
        ]
        for t in self._tickers: t.start()

    def _cancel_timers(self):
        self._epoch += 1
        for t in self._tickers: t.cancel()
        self._tickers = []

    def _motion_tick(self):
        m = self.cfg.motion
        self.target = advance(self.target, m.bounds, m.speed, m.target_size)
        self._publish()

    def _spawn_tick(self):
        self.spawner.on_spawn_tick(self.elapsed)
        self._publish()

    def _second_tick(self):
        # the last second still scores before time-up is declared
        self.time_remaining -= self.cfg.session.tick_s
        if self.gazing:
            self.scoring.on_focus_tick()
        if self.time_remaining <= 0:
            self._end(EndReason.TIME_UP)
            return
        self._publish()

    # ---- commands -----------------------------------------------------

    def start(self):
        self._cancel_timers()
        self.scoring.reset()
        self.gaze.reset()
        self.gazing = False
        self.spawner.clear()
        self.target = centered(self.cfg.motion.bounds, self.cfg.motion.velocity)
        self.time_remaining = float(self.cfg.session.duration_s)
        self.end_reason = None
        self._suspended_by_host = False
        self.state = SessionState.RUNNING
        log.info("session started (%ss)", self.cfg.session.duration_s)
        self._arm()
        self._publish()

    def pause(self):
        if self.state is not SessionState.RUNNING:
            log.debug("pause ignored in %s", self.state.value); return
        self._cancel_timers()
        self.state = SessionState.PAUSED
        log.info("paused with %.0fs left", self.time_remaining)
        self._publish()

    def resume(self):
        if self.state is not SessionState.PAUSED:
            log.debug("resume ignored in %s", self.state.value); return
        self.state = SessionState.RUNNING
        self._suspended_by_host = False
        log.info("resumed")
        self._arm()
        self._publish()

    def stop(self):
        self._cancel_timers()
        self.spawner.clear()
        self._suspended_by_host = False
        if self.state in (SessionState.RUNNING, SessionState.PAUSED):
            self.state = SessionState.IDLE
            log.info("session stopped")
        self._publish()

    def _end(self, reason: EndReason):
        self.end_reason = reason
        self.state = SessionState.ENDED
        log.info("session ended: %s (score %d)", reason.value, self.scoring.state.score)
        self.stop()

    # ---- inputs -------------------------------------------------------

    def on_gaze_sample(self, hit: bool):
        if self.state is not SessionState.RUNNING: return
        self.gaze.on_raw_sample(hit)

    def on_gaze_update(self, validated: bool):
        if self.state is not SessionState.RUNNING: return
        self.gazing = bool(validated)
        self.scoring.on_gaze_transition(self.gazing)
        self._publish()

    def on_distraction_tap(self, distraction_id: Optional[str] = None):
        if self.state is not SessionState.RUNNING:
            log.debug("tap ignored in %s", self.state.value); return
        if distraction_id is not None and self.spawner.get(distraction_id) is None:
            log.debug("tap on unknown distraction %s ignored", distraction_id); return
        self._end(EndReason.DISTRACTION_TAP)

    def on_distraction_dismiss(self, distraction_id: str):
        if self.spawner.dismiss(distraction_id):
            self._publish()

    # ---- host lifecycle ------------------------------------------------

    def on_background(self):
        if self.state is SessionState.RUNNING:
            self.pause()
            self._suspended_by_host = True

    def on_foreground(self):
        if self._suspended_by_host and self.state is SessionState.PAUSED:
            self.resume()
        self._suspended_by_host = False
