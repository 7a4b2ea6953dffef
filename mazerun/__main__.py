"""Entry point: ``python -m mazerun``.

Supports two modes:
  - ``python -m mazerun``            → Launch the FastAPI snapshot/input server
  - ``python -m mazerun cli``        → Headless run with a scripted move string
"""

from __future__ import annotations

import argparse
import logging

from mazerun.core.enums import Direction

logger = logging.getLogger(__name__)

_MOVE_CODES = {"U": Direction.UP, "D": Direction.DOWN, "L": Direction.LEFT, "R": Direction.RIGHT}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tick-driven grid maze simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI snapshot/input server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--size", type=int, default=10)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation in virtual time")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--size", type=int, default=10)
    cli.add_argument("--seconds", type=float, default=30.0, help="Virtual seconds to simulate")
    cli.add_argument("--moves", type=str, default="", help="Move script, e.g. 'RRDDRD' (U/D/L/R)")
    cli.add_argument("--move-interval-ms", type=int, default=250)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def parse_moves(script: str) -> list[Direction]:
    """Translate a ``U/D/L/R`` string into Direction values; other chars are skipped."""
    return [_MOVE_CODES[ch] for ch in script.upper() if ch in _MOVE_CODES]


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from mazerun.api.app import create_app
    from mazerun.config import MazeConfig

    config = MazeConfig(
        world_seed=args.seed,
        maze_size=args.size,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from mazerun.config import MazeConfig
    from mazerun.engine.clock import SimulationClock
    from mazerun.engine.game_state import GameStateMachine
    from mazerun.systems.rng import DeterministicRNG
    from mazerun.utils.logging import setup_logging

    config = MazeConfig(
        world_seed=args.seed,
        maze_size=args.size,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    state = GameStateMachine(config, DeterministicRNG(config.world_seed))
    clock = SimulationClock(config, state)
    logger.info("=== Simulation started (seed=%d) ===", config.world_seed)
    for row in state.world.grid.to_rows():
        logger.info("  %s", row)

    total_ms = int(args.seconds * 1000)
    for direction in parse_moves(args.moves):
        if clock.now_ms >= total_ms:
            break
        clock.submit(direction)
        clock.advance(min(args.move_interval_ms, total_ms - clock.now_ms))
    if clock.now_ms < total_ms:
        clock.advance(total_ms - clock.now_ms)
    clock.stop()

    for event in state.drain_events():
        logger.info("[%6d ms] %-7s %s", event.time_ms, event.category, event.message)

    snap = state.snapshot()
    logger.info(
        "=== Finished at %d ms: %s (%s), player %s, %d ticks left, %d adversaries, %s dimension ===",
        snap.time_ms, snap.outcome.name, snap.loss_cause.name, snap.player_pos,
        snap.ticks_remaining, snap.adversary_count, snap.dimension.name,
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
