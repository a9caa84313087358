from __future__ import annotations
import asyncio
from typing import Optional
from ..game.session import SessionController

class LoopBridge:
    """
    Entry point for producers living on other threads (sensor workers, UI
    toolkits). Each call is queued onto the session's event loop so it never
    interleaves with a tick.
    """
    def __init__(self, loop: asyncio.AbstractEventLoop, controller: SessionController):
        self.loop = loop
        self.controller = controller

    def _post(self, fn, *args):
        try:
            self.loop.call_soon_threadsafe(fn, *args)
        except RuntimeError:
            # loop already closed; late samples are dropped
            return False
        return True

    def post_gaze_sample(self, hit: bool):
        return self._post(self.controller.on_gaze_sample, bool(hit))

    def post_tap(self, distraction_id: Optional[str] = None):
        return self._post(self.controller.on_distraction_tap, distraction_id)

    def post_dismiss(self, distraction_id: str):
        return self._post(self.controller.on_distraction_dismiss, distraction_id)

    def post_background(self):
        return self._post(self.controller.on_background)

    def post_foreground(self):
        return self._post(self.controller.on_foreground)
