#!/usr/bin/env python
"""
Run the Gavel API server.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload  # Development mode
    uv run python run_api.py --memory  # In-memory stores, no Supabase needed
"""

import argparse
import logging
import os

import uvicorn

from shared.config import get_settings
from shared.logging_config import configure_logging

logger = logging.getLogger("gavel.api")


def main():
    parser = argparse.ArgumentParser(description="Run Gavel API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Keep debates and reputation in process memory (lost on restart)",
    )
    args = parser.parse_args()

    if args.memory:
        # Environment, so reload workers see it too
        os.environ["GAVEL_STORAGE_BACKEND"] = "memory"
        get_settings.cache_clear()

    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory storage; data is lost when the server stops")

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
