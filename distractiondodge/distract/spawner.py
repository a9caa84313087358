from __future__ import annotations
import logging, uuid
import numpy as np
from collections import deque
from typing import Deque, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from .content import random_payload
from ..config import SpawnerCfg

log = logging.getLogger(__name__)

class Distraction(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    position: Tuple[float, float]
    title: str
    message: str
    icon: str
    spawned_at: float = 0.0

def spawn_probability(elapsed: float, base: float = 0.15, rate: float = 0.003, cap: float = 0.4) -> float:
    return min(base + max(0.0, elapsed)*rate, cap)

class DistractionSpawner:
    """
    Rolls once per spawn tick and keeps at most cfg.max_active decoys, oldest
    first. Eviction of the oldest is silent: it is neither a tap nor a dismissal.
    """
    def __init__(self, cfg: SpawnerCfg | None = None, bounds=(1280.0, 720.0), rng: Optional[np.random.Generator] = None):
        self.cfg = cfg or SpawnerCfg()
        self.bounds = bounds
        self.rng = rng if rng is not None else np.random.default_rng()
        self._active: Deque[Distraction] = deque()
        self.evicted = 0

    @property
    def active(self) -> Tuple[Distraction, ...]:
        return tuple(self._active)

    def probability(self, elapsed: float) -> float:
        c = self.cfg
        return spawn_probability(elapsed, c.base_probability, c.probability_rate, c.max_probability)

    def _position(self) -> Tuple[float, float]:
        (w, h), (ix, iy) = self.bounds, self.cfg.inset
        return float(self.rng.uniform(ix, w - ix)), float(self.rng.uniform(iy, h - iy))

    def on_spawn_tick(self, elapsed: float) -> Optional[Distraction]:
        p = self.probability(elapsed)
        if not self.rng.random() < p:
            return None
        d = Distraction(position=self._position(), spawned_at=float(elapsed), **random_payload(self.rng))
        self._active.append(d)
        log.debug("spawned %s (%s) p=%.3f", d.id, d.title, p)
        while len(self._active) > self.cfg.max_active:
            old = self._active.popleft(); self.evicted += 1
            log.debug("evicted %s", old.id)
        return d

    def get(self, distraction_id: str) -> Optional[Distraction]:
        for d in self._active:
            if d.id == distraction_id: return d
        return None

    def dismiss(self, distraction_id: str) -> bool:
        d = self.get(distraction_id)
        if d is None: return False
        self._active.remove(d)
        return True

    def clear(self):
        self._active.clear()
