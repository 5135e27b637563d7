"""
Main entry point for KRUSHKA.

Runs the pygame simulator by default, or a headless autopilot soak when
KRUSHKA_ENV=headless (or --headless) is set.
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional, Sequence

from krushka.config.settings import Settings, load_settings
from krushka.core.events import EventType
from krushka.exceptions import KrushkaError
from krushka.game.session import SessionController

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_controller(settings: Settings, seed: Optional[int] = None) -> SessionController:
    seed = settings.seed if seed is None else seed
    return SessionController(settings=settings, rng=random.Random(seed))


async def run_simulator(controller: SessionController, settings: Settings) -> None:
    """Run the windowed version."""
    from krushka.simulator.window import SimulatorWindow

    window = SimulatorWindow(controller, settings)
    await window.run()


def run_headless(controller: SessionController, frames: int) -> None:
    """Play the demo for a fixed number of frames without a window."""
    controller.handle_intent(EventType.DEMO_IDLE_TIMEOUT)
    for _ in range(frames):
        controller.update()

    snap = controller.snapshot()
    logger.info(
        f"Headless run finished: frame={snap.frame} level={snap.current_level} "
        f"score={snap.score} lives={snap.lives}"
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Krushka - Knight Rider")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    parser.add_argument("--demo", action="store_true", help="Start straight into demo mode")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--frames", type=int, default=3600, help="Frames to run headless")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()
    args = parse_args(argv)

    try:
        settings = load_settings()
    except KrushkaError as e:
        setup_logging(True)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(args.debug or settings.debug)
    logger.info("KRUSHKA starting...")

    controller = build_controller(settings, args.seed)
    if args.demo:
        controller.handle_intent(EventType.DEMO_IDLE_TIMEOUT)

    try:
        if args.headless or settings.env == "headless":
            logger.info("Running headless")
            run_headless(controller, args.frames)
        else:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(controller, settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("KRUSHKA stopped")


if __name__ == "__main__":
    main()
