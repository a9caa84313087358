from __future__ import annotations
import itertools, logging, threading, time
import numpy as np
from typing import Callable, Iterable, Iterator, Optional, Tuple
from ..eye.hit import on_target

log = logging.getLogger(__name__)

def always_gazing() -> Iterator[bool]:
    """Fallback stream when face tracking is unavailable."""
    return itertools.repeat(True)

def scripted(pattern: str | Iterable[bool], loop: bool = True) -> Iterator[bool]:
    """
    Turn "1101" style strings (or any iterable of bools) into a sample stream.
    """
    if isinstance(pattern, str):
        vals = [c == "1" for c in pattern if c in "01"]
    else:
        vals = [bool(v) for v in pattern]
    if not vals: raise ValueError("empty gaze pattern")
    return itertools.cycle(vals) if loop else iter(vals)

class SimulatedGazeSensor(threading.Thread):
    """
    Stand-in for the camera pipeline. Emits a gaze point jittered around the
    target at `fps`, drifting away for a while with probability `wander`,
    and forwards the hit-test result to `sink`.
    """
    def __init__(self, sink: Callable[[bool], None], target: Callable[[], Tuple[float,float]],
                 fps: float = 30.0, jitter: float = 40.0, wander: float = 0.01,
                 half_extent: float = 80.0, rng: Optional[np.random.Generator] = None):
        super().__init__(daemon=True, name="gaze-sensor")
        self.sink = sink; self.target = target
        self.fps = fps; self.jitter = jitter; self.wander = wander; self.half_extent = half_extent
        self.rng = rng if rng is not None else np.random.default_rng()
        self._halt = threading.Event()
        self._off_frames = 0

    def sample(self) -> bool:
        tx, ty = self.target()
        if self._off_frames == 0 and self.rng.random() < self.wander:
            self._off_frames = int(self.rng.integers(int(self.fps//2), int(self.fps*2)))
        offset = self.rng.normal(0.0, self.jitter, size=2)
        if self._off_frames > 0:
            self._off_frames -= 1
            offset += 4*self.half_extent
        return on_target((tx + offset[0], ty + offset[1]), (tx, ty), self.half_extent)

    def run(self):
        period = 1.0/self.fps
        log.debug("simulated gaze at %.0f fps", self.fps)
        while not self._halt.is_set():
            self.sink(self.sample())
            time.sleep(period)

    def stop(self):
        self._halt.set()
