from __future__ import annotations
import logging, math
from pydantic import BaseModel, ConfigDict
from ..config import ScoringCfg

log = logging.getLogger(__name__)

class ScoreState(BaseModel):
    model_config = ConfigDict(frozen=True)
    score: int = 0
    focus_streak_seconds: float = 0.0
    best_streak_seconds: float = 0.0
    total_focus_seconds: float = 0.0
    multiplier: int = 1
    last_gaze_state: bool = False

def focus_tick(s: ScoreState, rules: ScoringCfg, dt: float = 1.0) -> ScoreState:
    """
    One second of validated gaze. Points use the multiplier in force before
    this tick; the multiplier bump and the streak bonus are checked after,
    and both can land on the same tick (streak 10, 20, ...).
    """
    streak = s.focus_streak_seconds + dt
    best = max(s.best_streak_seconds, streak)
    score = s.score + rules.points_per_tick*s.multiplier
    mult = s.multiplier
    whole = math.floor(streak)
    if whole % rules.multiplier_step_s == 0:
        mult = min(mult + 1, rules.multiplier_cap)
    if whole % rules.bonus_step_s == 0:
        score += rules.bonus
    return s.model_copy(update={
        "score": score, "focus_streak_seconds": streak, "best_streak_seconds": best,
        "total_focus_seconds": s.total_focus_seconds + dt, "multiplier": mult,
    })

def gaze_transition(s: ScoreState, gaze: bool, rules: ScoringCfg) -> ScoreState:
    upd = {}
    score = s.score
    if s.last_gaze_state and not gaze:
        penalty = min(math.floor(s.focus_streak_seconds), rules.penalty_cap)
        score = max(0, score - penalty)
        upd.update(score=score, multiplier=1)
    if not gaze:
        upd.update(best_streak_seconds=max(s.best_streak_seconds, s.focus_streak_seconds),
                   focus_streak_seconds=0.0)
    upd["last_gaze_state"] = bool(gaze)
    return s.model_copy(update=upd)

class ScoringEngine:
    def __init__(self, rules: ScoringCfg | None = None):
        self.rules = rules or ScoringCfg()
        self.state = ScoreState()

    def reset(self):
        self.state = ScoreState()

    def on_focus_tick(self) -> ScoreState:
        self.state = focus_tick(self.state, self.rules)
        return self.state

    def on_gaze_transition(self, gaze: bool) -> ScoreState:
        before = self.state
        self.state = gaze_transition(before, gaze, self.rules)
        if before.score != self.state.score:
            log.debug("focus lost after %.0fs: -%d", before.focus_streak_seconds, before.score - self.state.score)
        return self.state
