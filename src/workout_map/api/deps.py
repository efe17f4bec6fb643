"""Dependency injection for API routes."""

import threading

from fastapi import Request

from ..session import WorkoutMapSession


def get_session(request: Request) -> WorkoutMapSession:
    """The session bound to this application instance."""
    return request.app.state.session


def get_gesture_lock(request: Request) -> threading.Lock:
    """Lock serializing gestures; sync routes run in a worker thread pool."""
    return request.app.state.gesture_lock
