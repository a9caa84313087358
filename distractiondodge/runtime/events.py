from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple, List
import asyncio, logging, websockets, time
from ..distract.spawner import Distraction

log = logging.getLogger(__name__)

class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"

class EndReason(str, Enum):
    TIME_UP = "time_up"
    DISTRACTION_TAP = "distraction_tap"

class Snapshot(BaseModel):
    """Everything the presentation layer needs to draw one frame."""
    model_config = ConfigDict(frozen=True)
    ts: float = Field(default_factory=lambda: time.time())
    state: SessionState = SessionState.IDLE
    position: Tuple[float, float] = (0.0, 0.0)
    velocity: Tuple[float, float] = (1.0, 1.0)
    gazing: bool = False
    score: int = 0
    multiplier: int = 1
    focus_streak_seconds: float = 0.0
    best_streak_seconds: float = 0.0
    total_focus_seconds: float = 0.0
    time_remaining_seconds: float = 0.0
    distractions: List[Distraction] = []
    end_reason: Optional[EndReason] = None

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    """Fan queued JSON lines out to every connected client."""
    clients = set()
    async def handler(websocket):
        clients.add(websocket)
        log.info("client connected (%d)", len(clients))
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async def pump():
        while True:
            msg = await queue.get()
            if clients:
                websockets.broadcast(clients, msg)
    async with websockets.serve(handler, host, port):
        await pump()
