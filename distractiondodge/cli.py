from __future__ import annotations
import typer, asyncio, logging, yaml
import numpy as np
from rich import print
from rich.markup import escape
from rich.logging import RichHandler
from pydantic import ValidationError
from typing import Optional
from .config import GameConfig, load_config, dump_config, config_from_dict
from .runtime.clock import ManualClock, AsyncioClock, Ticker
from .runtime.events import SessionState, Snapshot, ws_broadcast
from .runtime.bridge import LoopBridge
from .game.session import SessionController
from .io.sensor import SimulatedGazeSensor, always_gazing, scripted
from .summary import summarize

app = typer.Typer(add_completion=False, help="DistractionDodge session engine (ddg)")

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(rich_tracebacks=True)], force=True)

def _config(path: Optional[str], duration: Optional[int]) -> GameConfig:
    try:
        cfg = load_config(path)
        if duration is not None:
            raw = cfg.model_dump()
            raw["session"]["duration_s"] = duration
            cfg = config_from_dict(raw)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"[red]Bad config[/red] {path}: {escape(str(e))}")
        raise typer.Exit(code=1)
    return cfg

def _print_summary(snap: Snapshot):
    s = summarize(snap)
    print(f"[bold]{s['headline']}[/bold]  score=[cyan]{s['score']}[/cyan]  "
          f"total focus={s['total_focus']}  best streak={s['best_streak']}")
    print(f"[dim]{s['tip']}[/dim]")

@app.command()
def config(path: Optional[str] = typer.Argument(None)):
    """
    Print the effective configuration as YAML.
    """
    typer.echo(dump_config(_config(path, None)), nl=False)

@app.command()
def simulate(config: Optional[str] = typer.Option(None), gaze: str = typer.Option("", help="per-frame hit pattern like '1110'; empty = always gazing"),
             fps: int = 30, seed: int = 0, duration: Optional[int] = None,
             tap_at: Optional[float] = typer.Option(None, help="tap the oldest decoy once this many seconds have elapsed"),
             jsonl: bool = False):
    """
    Play a whole session in virtual time and print the result.
    """
    cfg = _config(config, duration)
    try:
        stream = scripted(gaze) if gaze else always_gazing()
    except ValueError as e:
        print(f"[red]{escape(str(e))}[/red]"); raise typer.Exit(code=1)
    clock = ManualClock()
    ctrl = SessionController(clock, cfg, rng=np.random.default_rng(seed))
    sensor = Ticker(clock, 1.0/fps, lambda: ctrl.on_gaze_sample(next(stream)), "sensor")
    ctrl.start(); sensor.start()
    while ctrl.state is SessionState.RUNNING:
        clock.advance(cfg.session.tick_s)
        if tap_at is not None and ctrl.elapsed >= tap_at and ctrl.spawner.active:
            ctrl.on_distraction_tap(ctrl.spawner.active[0].id)
        if jsonl: typer.echo(ctrl.snapshot.model_dump_json())
    sensor.cancel()
    _print_summary(ctrl.snapshot)

@app.command()
def run(config: Optional[str] = typer.Option(None), ws: bool = typer.Option(False, help="broadcast every snapshot over WebSocket"),
        host: str = "0.0.0.0", port: int = 8765, fps: float = 30.0, wander: float = 0.01, duration: Optional[int] = None):
    """
    Real-time session fed by the simulated gaze sensor; prints one JSONL snapshot per second.
    """
    cfg = _config(config, duration)

    async def session():
        loop = asyncio.get_running_loop()
        ctrl = SessionController(AsyncioClock(loop), cfg)
        bridge = LoopBridge(loop, ctrl)
        done = asyncio.Event()
        queue: "asyncio.Queue[str]" = asyncio.Queue()

        def on_snapshot(snap: Snapshot):
            if ws: queue.put_nowait(snap.model_dump_json())
            if snap.state is not SessionState.RUNNING and snap.state is not SessionState.PAUSED:
                done.set()
        ctrl.subscribe(on_snapshot)

        def on_second():
            if ctrl.state is SessionState.RUNNING: typer.echo(ctrl.snapshot.model_dump_json())
        printer = Ticker(ctrl.clock, cfg.session.tick_s, on_second, "printer")

        sensor = SimulatedGazeSensor(bridge.post_gaze_sample, lambda: ctrl.snapshot.position,
                                     fps=fps, wander=wander, half_extent=cfg.gaze.half_extent)
        bcast = asyncio.create_task(ws_broadcast(queue, host, port)) if ws else None
        ctrl.start(); printer.start(); sensor.start()
        try:
            await done.wait()
        finally:
            sensor.stop(); printer.cancel(); ctrl.stop()
            sensor.join(1.0)
            if bcast:
                bcast.cancel()
                await asyncio.gather(bcast, return_exceptions=True)
        _print_summary(ctrl.snapshot)

    try:
        asyncio.run(session())
    except KeyboardInterrupt:
        print("[yellow]interrupted[/yellow]")

if __name__ == "__main__":
    app()
