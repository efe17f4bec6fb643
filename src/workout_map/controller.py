"""
Interaction controller.

Interprets user gestures (map click, form submit, edit / delete / list
clicks) and drives the store, the persistence layer and the views through
each transition. Every gesture handler runs to completion and never
raises: user-correctable problems become alerts, desyncs are logged, and a
failed save rolls the store back so store, storage and views advance
together or not at all.
"""

import logging
from enum import Enum
from typing import List, Optional

from .db.persistence import WorkoutPersistence
from .exceptions import (
    DuplicateIdError,
    InvalidInputError,
    NotFoundError,
    PositioningUnavailableError,
    StorageError,
)
from .forms import FormInput, coerce_kind
from .models import Coordinates, WorkoutKind, WorkoutRecord, create_workout
from .positioning import PositionProvider
from .store import WorkoutStore
from .views.synchronizer import DEFAULT_ZOOM_LEVEL, ViewSynchronizer
from .views.widgets import FormSurface, MapFactory, MapWidget, Notifier

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save your workouts. Please try again."
LOAD_FAILED_MESSAGE = "Could not load your saved workouts."


class ControllerMode(str, Enum):
    """Top-level interaction modes."""
    IDLE = "idle"
    FORM_OPEN = "form_open"


class InteractionController:
    """
    Owns the store, the persistence adapter and the view synchronizer.

    In FORM_OPEN the controller buffers the coordinates of the last map
    click. Editing reuses FORM_OPEN with editing_id set; an edit keeps the
    record's id, creation time, coordinates and interaction count and
    recomputes the derived metric and label.
    """

    def __init__(
        self,
        store: WorkoutStore,
        persistence: WorkoutPersistence,
        view: ViewSynchronizer,
        form: FormSurface,
        notifier: Notifier,
        map_factory: Optional[MapFactory] = None,
        position_provider: Optional[PositionProvider] = None,
        map_element_id: str = "map",
        zoom_level: int = DEFAULT_ZOOM_LEVEL,
    ):
        self.store = store
        self.persistence = persistence
        self.view = view
        self.form = form
        self.notifier = notifier
        self.map_factory = map_factory
        self.position_provider = position_provider
        self.map_element_id = map_element_id
        self.zoom_level = zoom_level

        self.mode = ControllerMode.IDLE
        self.pending_coordinates: Optional[Coordinates] = None
        self.editing_id: Optional[str] = None
        self.map_widget: Optional[MapWidget] = None

    @property
    def is_editing(self) -> bool:
        return self.mode is ControllerMode.FORM_OPEN and self.editing_id is not None

    # =========================================================================
    # Start-up
    # =========================================================================

    def start(self) -> None:
        """Hydrate from storage, render the list, then request a position."""
        self.hydrate()
        if self.position_provider is None:
            self._position_failed(PositioningUnavailableError(details={"reason": "no provider"}))
            return
        self.position_provider.request_position(self._load_map, self._position_failed)

    def hydrate(self) -> List[WorkoutRecord]:
        """Load persisted workouts into the store and render them."""
        try:
            raw = self.persistence.load()
        except StorageError as e:
            logger.error(f"Could not read stored workouts: {e.message}")
            self.notifier.alert(LOAD_FAILED_MESSAGE)
            raw = []
        records = self.store.replace_all(raw)
        self.view.render_all(records)
        return records

    def _load_map(self, coordinates: Coordinates) -> None:
        if self.map_factory is None:
            logger.warning("Position received but no map factory is configured")
            return
        map_widget = self.map_factory(self.map_element_id)
        map_widget.set_view(coordinates, self.zoom_level)
        map_widget.on_click(self.handle_map_click)
        self.map_widget = map_widget
        self.view.attach_map(map_widget, self.store.snapshot())
        logger.info(f"Map ready at {coordinates[0]:.4f}, {coordinates[1]:.4f}")

    def _position_failed(self, error: PositioningUnavailableError) -> None:
        logger.warning(f"Map not initialized: {error.message} {error.details or ''}".rstrip())
        self.notifier.alert(error.message)

    # =========================================================================
    # Form gestures
    # =========================================================================

    def handle_map_click(self, lat: float, lng: float) -> None:
        """Buffer the clicked location and open a blank form for a new workout."""
        was_editing = self.editing_id is not None
        self.pending_coordinates = (lat, lng)
        self.editing_id = None
        self.form.show(FormInput() if was_editing else None)
        self.mode = ControllerMode.FORM_OPEN
        logger.debug(f"Form opened at {lat}, {lng}")

    def handle_kind_change(self, kind: WorkoutKind) -> None:
        """Toggle between the cadence and the elevation field."""
        try:
            self.form.set_kind(coerce_kind(kind))
        except ValueError:
            logger.warning(f"Ignoring unknown workout type {kind!r}")

    def handle_cancel(self) -> None:
        self._close_form()

    def handle_submit(self, form_input: FormInput) -> Optional[WorkoutRecord]:
        """
        Create a workout (or apply an edit) from the submitted form.

        Returns:
            The stored record, or None if the transition was aborted
        """
        if self.mode is not ControllerMode.FORM_OPEN:
            logger.warning("Submit ignored: no form is open")
            return None

        try:
            kind, distance, duration, variant_value = form_input.parse()
        except InvalidInputError as e:
            logger.info(f"Rejected form input on field {e.field}")
            self.notifier.alert(e.message)
            return None

        if self.editing_id is not None:
            return self._apply_edit(kind, distance, duration, variant_value)
        return self._apply_add(kind, distance, duration, variant_value)

    def _apply_add(
        self,
        kind: WorkoutKind,
        distance: float,
        duration: float,
        variant_value: float,
    ) -> Optional[WorkoutRecord]:
        if self.pending_coordinates is None:
            logger.error("Submit without buffered coordinates")
            return None

        try:
            record = create_workout(kind, distance, duration, self.pending_coordinates, variant_value)
        except InvalidInputError as e:
            self.notifier.alert(e.message)
            return None

        try:
            self.store.add(record)
        except DuplicateIdError as e:
            logger.error(f"Aborting add: {e.message}")
            return None

        try:
            self.persistence.save(self.store.snapshot())
        except StorageError as e:
            self.store.remove_by_id(record.id)
            logger.error(f"Rolled back add of {record.id}: {e.message}")
            self.notifier.alert(SAVE_FAILED_MESSAGE)
            return None

        self.view.render_added(record)
        self._close_form()
        logger.info(
            f"Logged {record.kind.value} workout {record.id}: "
            f"{record.distance_km}km, {record.duration_min}min"
        )
        return record

    def _apply_edit(
        self,
        kind: WorkoutKind,
        distance: float,
        duration: float,
        variant_value: float,
    ) -> Optional[WorkoutRecord]:
        original = self.store.find_by_id(self.editing_id)
        if original is None:
            logger.warning(f"Edit target vanished: {NotFoundError(self.editing_id).message}")
            self._close_form()
            return None

        try:
            record = create_workout(
                kind,
                distance,
                duration,
                original.coordinates,
                variant_value,
                workout_id=original.id,
                created_at=original.created_at,
                interaction_count=original.interaction_count,
            )
        except InvalidInputError as e:
            self.notifier.alert(e.message)
            return None

        self.store.update(record)
        try:
            self.persistence.save(self.store.snapshot())
        except StorageError as e:
            self.store.update(original)
            logger.error(f"Rolled back edit of {record.id}: {e.message}")
            self.notifier.alert(SAVE_FAILED_MESSAGE)
            return None

        self.view.render_updated(record)
        self._close_form()
        logger.info(f"Edited workout {record.id}")
        return record

    def _close_form(self) -> None:
        self.form.hide()
        self.mode = ControllerMode.IDLE
        self.editing_id = None
        self.pending_coordinates = None

    # =========================================================================
    # List gestures
    # =========================================================================

    def handle_edit_click(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Prefill the form with a workout and enter the edit sub-mode."""
        record = self.store.find_by_id(workout_id)
        if record is None:
            logger.warning(f"Edit ignored: {NotFoundError(workout_id).message}")
            return None

        self.editing_id = record.id
        self.pending_coordinates = record.coordinates
        self.form.show(FormInput.from_record(record))
        self.mode = ControllerMode.FORM_OPEN
        return record

    def handle_delete_click(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Delete a workout from store, storage and views."""
        try:
            position = self.store.position_of(workout_id)
            record = self.store.remove_by_id(workout_id)
        except NotFoundError as e:
            logger.warning(f"Delete ignored: {e.message}")
            return None

        try:
            self.persistence.save(self.store.snapshot())
        except StorageError as e:
            self.store.insert_at(position, record)
            logger.error(f"Rolled back delete of {workout_id}: {e.message}")
            self.notifier.alert(SAVE_FAILED_MESSAGE)
            return None

        self.view.render_removed(workout_id)
        self._close_form()
        logger.info(f"Deleted workout {workout_id}")
        return record

    def handle_list_click(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Pan the map to a workout and count the revisit."""
        record = self.store.find_by_id(workout_id)
        if record is None:
            logger.warning(f"Focus ignored: {NotFoundError(workout_id).message}")
            return None

        self.view.focus_on(record)
        updated = self.store.record_interaction(workout_id)
        try:
            self.persistence.save(self.store.snapshot())
        except StorageError as e:
            self.store.update(record)
            logger.warning(f"Interaction count for {workout_id} not saved: {e.message}")
            return record
        return updated

    # =========================================================================
    # Reset
    # =========================================================================

    def reset(self) -> bool:
        """Delete every workout from storage, store and views."""
        workout_ids = [record.id for record in self.store.snapshot()]
        try:
            self.persistence.clear()
        except StorageError as e:
            logger.error(f"Reset failed: {e.message}")
            self.notifier.alert(SAVE_FAILED_MESSAGE)
            return False

        self.store.replace_all([])
        self.view.clear(workout_ids)
        self._close_form()
        logger.info(f"Reset removed {len(workout_ids)} workouts")
        return True
