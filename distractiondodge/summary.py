from __future__ import annotations
from typing import Any, Dict
from .runtime.events import EndReason, Snapshot

def focus_tip(score: int) -> str:
    if score < 20:
        return "Try to maintain your gaze on the target consistently. Small improvements in focus can lead to better scores."
    if score < 40:
        return "Your focus is improving! Try to build longer streaks by staying locked on the target."
    return "Excellent focus control! Keep challenging yourself to maintain even longer streaks."

def headline(reason: EndReason | None) -> str:
    if reason is EndReason.DISTRACTION_TAP: return "Distracted!"
    if reason is EndReason.TIME_UP: return "Time's up!"
    return "Session stopped"

def summarize(snap: Snapshot) -> Dict[str, Any]:
    """Values shown once on the conclusion screen."""
    return {
        "headline": headline(snap.end_reason),
        "score": snap.score,
        "total_focus": f"{int(snap.total_focus_seconds)}s",
        "best_streak": f"{int(snap.best_streak_seconds)}s",
        "tip": focus_tip(snap.score),
    }
