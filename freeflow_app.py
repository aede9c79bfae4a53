#!/usr/bin/env python3
"""FreeFlow - Dopamine-detox dive trainer.

Single entry point for the application.

Usage:
    python freeflow_app.py                      # Launch GUI
    python freeflow_app.py --simulate           # Run a whole dive instantly on a virtual clock
    python freeflow_app.py --simulate --taps 3  # ...checking the first 3 bubbles
    python freeflow_app.py --headless           # Run a dive in real time without a window
    python freeflow_app.py --list-variants      # Show available variants
    python freeflow_app.py --version            # Show version
"""

import argparse
import logging
import sys
from typing import Optional

from freeflow import __version__
from freeflow.content.dive_summary import render_dive_summary
from freeflow.core.config import get_config, validate_config
from freeflow.core.exceptions import ConfigurationError
from freeflow.core.logging import get_logger, setup_logging
from freeflow.core.timers import RealtimeTimerHost, TimerHost, VirtualTimerHost
from freeflow.engine.models import DiveOutcome, DiveSummary, SpawnEvent
from freeflow.engine.session import DiveSession
from freeflow.engine.variants import VARIANTS, VariantConfig, get_variant, list_variants


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FreeFlow - Dopamine-detox dive trainer")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--list-variants", action="store_true", help="List dive variants and exit")
    parser.add_argument("--variant", help="Dive variant to run (default from FREEFLOW_VARIANT)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--simulate", action="store_true", help="Run a full dive instantly on a virtual clock"
    )
    mode.add_argument("--headless", action="store_true", help="Run a dive in real time, no window")
    parser.add_argument(
        "--taps", type=int, default=0, help="Check (tap) the first N bubbles in headless modes"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def run_dive(variant: VariantConfig, host: TimerHost, taps: int = 0) -> DiveSession:
    """Create a session on host that taps the first `taps` bubbles it sees.

    The caller starts the session and drives the host.
    """
    session = DiveSession(variant, host)
    remaining = max(0, taps)

    def _maybe_tap(event: SpawnEvent) -> None:
        nonlocal remaining
        if remaining > 0:
            remaining -= 1
            session.record_interaction(event.id)

    session.on_spawn(_maybe_tap)
    return session


def simulate(variant: VariantConfig, taps: int = 0) -> DiveSummary:
    """Run a complete dive on a virtual clock and return its summary."""
    host = VirtualTimerHost()
    session = run_dive(variant, host, taps)
    session.start()
    host.run_until_idle(max_seconds=variant.session_duration * 2)
    if not session.is_ended():
        session.end(DiveOutcome.ABANDONED)
    return session.summary()


def run_headless(variant: VariantConfig, taps: int, time_scale: float) -> DiveSummary:
    """Run a dive in real time on the calling thread."""
    logger = get_logger("main")
    host = RealtimeTimerHost(time_scale=time_scale)
    session = run_dive(variant, host, taps)
    session.on_end(lambda _summary: host.stop())
    session.start()
    try:
        host.run()
    except KeyboardInterrupt:
        logger.info("Dive interrupted by keyboard")
    return session.end(DiveOutcome.ABANDONED)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for FreeFlow.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"FreeFlow v{__version__}")
        return 0

    if args.list_variants:
        for name in list_variants():
            print(f"{name:8s} {VARIANTS[name].description}")
        return 0

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if (args.debug or config.debug) else logging.INFO,
    )
    logger = get_logger("main")
    logger.info(f"FreeFlow v{__version__} starting...")

    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Configuration issue: {issue}")

    try:
        variant = get_variant(args.variant or config.variant)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    if args.simulate:
        print(render_dive_summary(simulate(variant, args.taps)), end="")
        return 0

    time_scale = config.time_scale if config.time_scale > 0 else 1.0

    if args.headless:
        print(render_dive_summary(run_headless(variant, args.taps, time_scale)), end="")
        return 0

    logger.info("Launching GUI...")
    from freeflow.gui.app import FreeFlowApp

    FreeFlowApp(variant, time_scale=time_scale).run()
    logger.info("FreeFlow shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
