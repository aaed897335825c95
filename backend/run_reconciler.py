#!/usr/bin/env python
"""
Run the debate deadline reconciler.

Usage:
    uv run python run_reconciler.py             # Sweep every reconcile_interval_seconds
    uv run python run_reconciler.py --once      # Single sweep, then exit
"""

import argparse
import asyncio
import logging

from api.dependencies import get_container
from shared.config import get_settings
from shared.logging_config import configure_logging

logger = logging.getLogger("gavel.reconciler")


async def run(once: bool, interval: int, reconciler=None) -> None:
    """Sweep until stopped. In periodic mode a failed sweep is logged and retried."""
    reconciler = reconciler or get_container().reconciler
    while True:
        try:
            await reconciler.run_once()
        except Exception:
            if once:
                raise
            logger.exception("Reconcile sweep failed; retrying in %ss", interval)
        if once:
            return
        await asyncio.sleep(interval)


def main():
    parser = argparse.ArgumentParser(description="Run Gavel debate reconciler")
    parser.add_argument("--once", action="store_true", help="Run a single sweep and exit")
    parser.add_argument("--interval", type=int, help="Seconds between sweeps")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)

    interval = args.interval or settings.reconcile_interval_seconds
    logger.info("Starting reconciler (interval %ss)", interval)
    try:
        asyncio.run(run(args.once, interval))
    except KeyboardInterrupt:
        logger.info("Reconciler stopped")


if __name__ == "__main__":
    main()
