import numpy as np
from distractiondodge.config import GameConfig
from distractiondodge.runtime.clock import ManualClock
from distractiondodge.runtime.events import SessionState, EndReason
from distractiondodge.game.session import SessionController

class ZeroRng:
    """Every spawn roll succeeds."""
    def __init__(self): self._g = np.random.default_rng(0)
    def random(self): return 0.0
    def __getattr__(self, name): return getattr(self._g, name)

def make(rng=None, cfg=None):
    clk = ManualClock()
    ctrl = SessionController(clk, cfg or GameConfig(), rng=rng or np.random.default_rng(3))
    return clk, ctrl

def look(ctrl, hit=True, n=2):
    for _ in range(n): ctrl.on_gaze_sample(hit)

def counters(snap):
    return (snap.score, snap.focus_streak_seconds, snap.best_streak_seconds,
            snap.total_focus_seconds, snap.time_remaining_seconds, snap.position, snap.multiplier)

def test_start():
    clk, ctrl = make()
    assert ctrl.state is SessionState.IDLE
    ctrl.start()
    s = ctrl.snapshot
    assert s.state is SessionState.RUNNING and s.time_remaining_seconds == 60
    assert s.position == (640.0, 360.0) and s.score == 0 and s.end_reason is None

def test_25_seconds_of_focus():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    assert ctrl.snapshot.gazing
    clk.advance(25)
    s = ctrl.snapshot
    assert s.score == 70 and s.multiplier == 3
    assert s.time_remaining_seconds == 35 and s.best_streak_seconds == 25

def test_single_sample_is_not_focus():
    clk, ctrl = make(); ctrl.start(); look(ctrl, n=1)
    clk.advance(3)
    assert ctrl.snapshot.score == 0 and not ctrl.snapshot.gazing

def test_drop_after_12_seconds():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    clk.advance(12)
    assert ctrl.snapshot.score == 26
    ctrl.on_gaze_sample(False)
    s = ctrl.snapshot
    assert not s.gazing and s.score == 16 and s.best_streak_seconds == 12
    assert s.focus_streak_seconds == 0 and s.multiplier == 1

def test_time_up():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    clk.advance(60)
    s = ctrl.snapshot
    assert s.state is SessionState.ENDED and s.end_reason is EndReason.TIME_UP
    assert s.time_remaining_seconds == 0 and s.total_focus_seconds == 60
    assert clk.pending() == 0 and s.distractions == []
    clk.advance(10)
    assert ctrl.snapshot.score == s.score

def test_tap_ends_immediately():
    clk, ctrl = make(rng=ZeroRng()); ctrl.start()
    clk.advance(3)
    d = ctrl.spawner.active[0]
    ctrl.on_distraction_tap(d.id)
    s = ctrl.snapshot
    assert s.state is SessionState.ENDED and s.end_reason is EndReason.DISTRACTION_TAP
    assert s.time_remaining_seconds == 57 and s.distractions == [] and clk.pending() == 0

def test_tap_on_unknown_id_ignored():
    clk, ctrl = make(); ctrl.start()
    ctrl.on_distraction_tap("missing")
    assert ctrl.state is SessionState.RUNNING

def test_untargeted_tap():
    clk, ctrl = make(); ctrl.start()
    ctrl.on_distraction_tap()
    assert ctrl.end_reason is EndReason.DISTRACTION_TAP

def test_eviction_and_dismiss():
    clk, ctrl = make(rng=ZeroRng()); ctrl.start()
    clk.advance(10)
    ds = ctrl.snapshot.distractions
    assert len(ds) == 3 and ctrl.spawner.evicted == 1 and ctrl.state is SessionState.RUNNING
    ctrl.on_distraction_dismiss(ds[0].id)
    assert [d.id for d in ctrl.snapshot.distractions] == [d.id for d in ds[1:]]
    assert ctrl.state is SessionState.RUNNING

def test_pause_freezes_everything():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    clk.advance(7.3)
    ctrl.pause()
    frozen = counters(ctrl.snapshot)
    assert ctrl.state is SessionState.PAUSED and clk.pending() == 0
    look(ctrl, False, 3)
    clk.advance(120)
    assert counters(ctrl.snapshot) == frozen and ctrl.snapshot.gazing
    ctrl.resume()
    assert ctrl.state is SessionState.RUNNING
    clk.advance(1)
    assert ctrl.snapshot.focus_streak_seconds == frozen[1] + 1

def test_invalid_commands_are_noops():
    clk, ctrl = make()
    ctrl.pause(); ctrl.resume(); ctrl.on_distraction_tap(); ctrl.on_gaze_sample(True)
    assert ctrl.state is SessionState.IDLE and clk.pending() == 0
    ctrl.start(); ctrl.resume()
    assert ctrl.state is SessionState.RUNNING

def test_stop_keeps_counters():
    clk, ctrl = make(rng=ZeroRng()); ctrl.start(); look(ctrl)
    clk.advance(6)
    score = ctrl.snapshot.score
    ctrl.stop()
    s = ctrl.snapshot
    assert s.state is SessionState.IDLE and s.score == score and s.distractions == []
    assert clk.pending() == 0

def test_restart_resets():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    clk.advance(60)
    ctrl.start()
    s = ctrl.snapshot
    assert s.state is SessionState.RUNNING and s.score == 0 and s.best_streak_seconds == 0
    assert s.end_reason is None and not s.gazing and s.time_remaining_seconds == 60

def test_stale_callback_is_ignored():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    stale = ctrl._guard(ctrl._second_tick)
    ctrl.pause(); ctrl.resume()
    stale()
    assert ctrl.snapshot.time_remaining_seconds == 60 and ctrl.snapshot.score == 0

def test_background_foreground():
    clk, ctrl = make(); ctrl.start()
    ctrl.on_background()
    assert ctrl.state is SessionState.PAUSED
    ctrl.on_foreground()
    assert ctrl.state is SessionState.RUNNING

def test_foreground_does_not_resume_user_pause():
    clk, ctrl = make(); ctrl.start()
    ctrl.pause(); ctrl.on_background(); ctrl.on_foreground()
    assert ctrl.state is SessionState.PAUSED

def test_target_moves_and_stays_in_bounds():
    clk, ctrl = make(); ctrl.start()
    clk.advance(20)
    x, y = ctrl.snapshot.position
    assert (x, y) != (640.0, 360.0)
    assert 50 <= x <= 1230 and 50 <= y <= 670

def test_subscribe():
    clk, ctrl = make(); seen = []
    unsub = ctrl.subscribe(seen.append)
    ctrl.start()
    clk.advance(0.1)
    n = len(seen)
    assert n > 1 and seen[0].state is SessionState.RUNNING
    unsub()
    clk.advance(1)
    assert len(seen) == n

def test_short_session_from_config():
    cfg = GameConfig.model_validate({"session": {"duration_s": 5}})
    clk, ctrl = make(cfg=cfg); ctrl.start(); look(ctrl)
    clk.advance(5)
    assert ctrl.state is SessionState.ENDED and ctrl.snapshot.score == 5

def test_last_second_is_scored():
    clk, ctrl = make(); ctrl.start(); look(ctrl)
    clk.advance(59)
    before = ctrl.snapshot.score
    clk.advance(1)
    s = ctrl.snapshot
    assert s.state is SessionState.ENDED and s.focus_streak_seconds == 60
    assert s.score == before + 3 + 5
