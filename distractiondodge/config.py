from __future__ import annotations
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, model_validator

class SessionCfg(BaseModel):
    duration_s: int = Field(60, gt=0)
    tick_s: float = Field(1.0, gt=0)

class MotionCfg(BaseModel):
    speed: float = Field(3.0, ge=0)
    interval_s: float = Field(0.016, gt=0)
    target_size: float = Field(100.0, gt=0)
    bounds: tuple[float, float] = (1280.0, 720.0)
    velocity: tuple[float, float] = (1.0, 1.0)

    @model_validator(mode="after")
    def _fits(self):
        w, h = self.bounds
        if w <= self.target_size or h <= self.target_size:
            raise ValueError("bounds must be larger than target_size on both axes")
        return self

class SpawnerCfg(BaseModel):
    interval_s: float = Field(2.5, gt=0)
    base_probability: float = Field(0.15, ge=0, le=1)
    probability_rate: float = Field(0.003, ge=0)
    max_probability: float = Field(0.4, ge=0, le=1)
    max_active: int = Field(3, ge=1)
    inset: tuple[float, float] = (150.0, 100.0)

class ScoringCfg(BaseModel):
    points_per_tick: int = Field(1, ge=0)
    multiplier_cap: int = Field(3, ge=1)
    multiplier_step_s: int = Field(5, ge=1)
    bonus_step_s: int = Field(10, ge=1)
    bonus: int = Field(5, ge=0)
    penalty_cap: int = Field(10, ge=0)

class GazeCfg(BaseModel):
    required_hits: int = Field(2, ge=1)
    half_extent: float = Field(80.0, gt=0)
    blink_max: float = 0.2
    squint_max: float = 0.3

class GameConfig(BaseModel):
    """
    Every tunable of a session. Defaults reproduce the stock 60 s game.
    """
    session: SessionCfg = SessionCfg()
    motion: MotionCfg = MotionCfg()
    spawner: SpawnerCfg = SpawnerCfg()
    scoring: ScoringCfg = ScoringCfg()
    gaze: GazeCfg = GazeCfg()

    @model_validator(mode="after")
    def _inset_fits(self):
        w, h = self.motion.bounds
        ix, iy = self.spawner.inset
        if 2*ix > w or 2*iy > h:
            raise ValueError("spawner.inset leaves no room inside motion.bounds")
        return self

def config_from_dict(cfg: Optional[Dict[str, Any]]) -> GameConfig:
    return GameConfig.model_validate(cfg or {})

def load_config(path: str | Path | None) -> GameConfig:
    if path is None:
        return GameConfig()
    with open(path, "r") as f: cfg = yaml.safe_load(f)
    return config_from_dict(cfg)

def dump_config(cfg: GameConfig) -> str:
    return yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False)
