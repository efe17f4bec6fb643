"""
Gesture routes.

Each endpoint forwards one user gesture to the session's controller and
returns the resulting page state. Gestures the controller aborts are
reported with the error envelope from exception_handlers.
"""

import threading
from typing import List, Optional

from fastapi import APIRouter, Depends

from .deps import get_gesture_lock, get_session
from .schemas import GestureResponse, KindChangeRequest, MapClickRequest, SubmitRequest
from ..controller import SAVE_FAILED_MESSAGE
from ..exceptions import InvalidInputError, NotFoundError, StorageError
from ..forms import FormInput
from ..models import WorkoutRecord
from ..session import WorkoutMapSession

router = APIRouter()

NO_FORM_MESSAGE = "Click on the map to open the workout form first"


def _respond(
    session: WorkoutMapSession,
    workout: Optional[WorkoutRecord] = None,
) -> GestureResponse:
    messages = session.messages.drain()
    return GestureResponse(
        workout=workout.to_dict() if workout else None,
        messages=messages,
        state=session.state(),
    )


def _reject(messages: List[str], workout_id: Optional[str] = None) -> None:
    if SAVE_FAILED_MESSAGE in messages:
        raise StorageError(SAVE_FAILED_MESSAGE, operation="save")
    if workout_id is not None:
        raise NotFoundError(workout_id)
    raise InvalidInputError(
        messages[-1] if messages else NO_FORM_MESSAGE,
        details={"messages": messages} if messages else None,
    )


@router.get("/state", response_model=GestureResponse)
def get_state(
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """Current mode, form, map markers, list items and pending messages."""
    with lock:
        return _respond(session)


@router.get("/workouts")
def list_workouts(
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """All workouts in insertion order, in their persisted shape."""
    with lock:
        return [record.to_dict() for record in session.controller.store.snapshot()]


@router.post("/map/click", response_model=GestureResponse)
def map_click(
    request: MapClickRequest,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    with lock:
        session.controller.handle_map_click(request.lat, request.lng)
        return _respond(session)


@router.post("/form/kind", response_model=GestureResponse)
def change_kind(
    request: KindChangeRequest,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    with lock:
        session.controller.handle_kind_change(request.kind)
        return _respond(session)


@router.post("/form/submit", response_model=GestureResponse)
def submit_form(
    request: SubmitRequest,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """Submit the open form; 400 on invalid input, leaving the form open."""
    form_input = FormInput(
        kind=request.kind,
        distance=request.distance,
        duration=request.duration,
        cadence=request.cadence,
        elevation=request.elevation,
    )
    with lock:
        record = session.controller.handle_submit(form_input)
        if record is None:
            _reject(session.messages.drain())
        return _respond(session, record)


@router.post("/form/cancel", response_model=GestureResponse)
def cancel_form(
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    with lock:
        session.controller.handle_cancel()
        return _respond(session)


@router.post("/workouts/{workout_id}/edit", response_model=GestureResponse)
def edit_workout(
    workout_id: str,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """Open the form prefilled with a workout."""
    with lock:
        record = session.controller.handle_edit_click(workout_id)
        if record is None:
            _reject(session.messages.drain(), workout_id)
        return _respond(session, record)


@router.post("/workouts/{workout_id}/focus", response_model=GestureResponse)
def focus_workout(
    workout_id: str,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """Pan the map to a workout."""
    with lock:
        record = session.controller.handle_list_click(workout_id)
        if record is None:
            _reject(session.messages.drain(), workout_id)
        return _respond(session, record)


@router.delete("/workouts/{workout_id}", response_model=GestureResponse)
def delete_workout(
    workout_id: str,
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    with lock:
        record = session.controller.handle_delete_click(workout_id)
        if record is None:
            _reject(session.messages.drain(), workout_id)
        return _respond(session, record)


@router.post("/reset", response_model=GestureResponse)
def reset(
    session: WorkoutMapSession = Depends(get_session),
    lock: threading.Lock = Depends(get_gesture_lock),
):
    """Delete every workout."""
    with lock:
        if not session.controller.reset():
            _reject(session.messages.drain())
        return _respond(session)
