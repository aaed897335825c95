"""
Gavel API package.

Provides the FastAPI application for the Gavel staked-debate service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
