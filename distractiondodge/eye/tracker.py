from __future__ import annotations
import logging
from typing import Callable, Optional
from pydantic import BaseModel, ConfigDict

log = logging.getLogger(__name__)

class GazeState(BaseModel):
    model_config = ConfigDict(frozen=True)
    raw: bool = False
    consecutive_hits: int = 0
    validated: bool = False

def gaze_sample(state: GazeState, hit: bool, required_hits: int = 2) -> GazeState:
    if not hit:
        return GazeState(raw=False, consecutive_hits=0, validated=False)
    n = state.consecutive_hits + 1
    return GazeState(raw=True, consecutive_hits=n, validated=state.validated or n >= required_hits)

class GazeTracker:
    """
    Debounces per-frame hit booleans: `required_hits` consecutive hits switch
    to gazing, one miss switches back. Listeners hear only the edges.
    """
    def __init__(self, required_hits: int = 2, on_change: Optional[Callable[[bool], None]] = None):
        self.required_hits = required_hits
        self.on_change = on_change
        self.state = GazeState()

    @property
    def validated(self) -> bool:
        return self.state.validated

    def on_raw_sample(self, hit: bool) -> Optional[bool]:
        prev = self.state.validated
        self.state = gaze_sample(self.state, bool(hit), self.required_hits)
        if self.state.validated == prev:
            return None
        log.debug("gaze %s", "on" if self.state.validated else "off")
        if self.on_change: self.on_change(self.state.validated)
        return self.state.validated

    def reset(self):
        self.state = GazeState()
