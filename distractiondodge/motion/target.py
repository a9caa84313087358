from __future__ import annotations
import numpy as np
from typing import Tuple
from pydantic import BaseModel, ConfigDict

Vec = Tuple[float, float]

class TargetState(BaseModel):
    model_config = ConfigDict(frozen=True)
    position: Vec
    velocity: Vec = (1.0, 1.0)

def centered(bounds: Vec, velocity: Vec = (1.0, 1.0)) -> TargetState:
    return TargetState(position=(bounds[0]/2.0, bounds[1]/2.0), velocity=tuple(velocity))

def advance(state: TargetState, bounds: Vec, speed: float, target_size: float = 100.0) -> TargetState:
    """
    Move one step of velocity*speed. Any axis whose step would reach the band
    edge [half, bound-half] flips its velocity component and takes the step
    with the flipped component instead. Axes are handled independently.
    """
    half = target_size / 2.0
    pos = np.asarray(state.position, dtype=float)
    vel = np.asarray(state.velocity, dtype=float)
    hi = np.asarray(bounds, dtype=float) - half
    nxt = pos + vel*speed
    hit = (nxt <= half) | (nxt >= hi)
    vel = np.where(hit, -vel, vel)
    nxt = np.where(hit, pos + vel*speed, nxt)
    # a target pushed outside the band (resize, huge step) is pulled back in
    nxt = np.clip(nxt, half, hi)
    return TargetState(position=(float(nxt[0]), float(nxt[1])), velocity=(float(vel[0]), float(vel[1])))
