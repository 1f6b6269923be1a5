"""Entry point: ``python -m flysim``.

Supports two modes:
  - ``python -m flysim serve``   → FastAPI server with a live WebSocket stream
  - ``python -m flysim cli``     → Headless run that logs the fly once per second
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fly Simulation Engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=None)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=None)
    cli.add_argument("--seconds", type=float, default=30.0)
    cli.add_argument("--dt", type=float, default=0.016)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from flysim.api.app import create_app
    from flysim.config import SimulationConfig

    config = SimulationConfig(seed=args.seed, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from flysim.config import SimulationConfig
    from flysim.engine.world_loop import WorldLoop
    from flysim.systems.rng import DomainRNG
    from flysim.utils.logging import setup_logging

    config = SimulationConfig(seed=args.seed, log_level=args.log_level)
    setup_logging(config.log_level)

    rng = DomainRNG(config.seed)
    logger.info("Seed: %d", rng.seed)
    loop = WorldLoop(config, rng)
    loop.run(args.seconds, args.dt)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "cli":
        _run_cli(args)
    else:
        # Default to server mode
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)


if __name__ == "__main__":
    main()
