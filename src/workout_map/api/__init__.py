"""HTTP event-binding layer for the workout controller."""

from .app import create_app

__all__ = ["create_app"]
