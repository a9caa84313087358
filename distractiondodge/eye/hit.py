from __future__ import annotations
import numpy as np
from typing import Optional, Tuple, TypedDict

class EyeShape(TypedDict, total=False):
    blink_left: float; blink_right: float
    squint_left: float; squint_right: float

def eyes_open(eyes: Optional[EyeShape], blink_max: float = 0.2, squint_max: float = 0.3) -> bool:
    if eyes is None: return True
    # missing coefficients count as closed
    blinks = np.array([eyes.get("blink_left", 1.0), eyes.get("blink_right", 1.0)])
    squints = np.array([eyes.get("squint_left", 1.0), eyes.get("squint_right", 1.0)])
    return bool(np.all(blinks < blink_max) and np.all(squints < squint_max))

def in_region(gaze_xy: Tuple[float,float], target_xy: Tuple[float,float], half_extent: float = 80.0) -> bool:
    d = np.abs(np.asarray(gaze_xy, dtype=float) - np.asarray(target_xy, dtype=float))
    return bool(np.all(d <= half_extent))

def on_target(gaze_xy, target_xy, half_extent: float = 80.0, eyes: Optional[EyeShape] = None,
              blink_max: float = 0.2, squint_max: float = 0.3) -> bool:
    """
    Raw per-frame hit: gaze point inside the square of side 2*half_extent
    centered on the target, with both eyes open. `eyes=None` skips the
    openness gate for sensors that do not report blend shapes.
    """
    if gaze_xy is None: return False
    return in_region(gaze_xy, target_xy, half_extent) and eyes_open(eyes, blink_max, squint_max)
