"""
View synchronization.

Turns store transitions (added / updated / removed) into map-marker and
list-item mutations. The id -> marker mapping lives here because the map
widget, not the store, owns marker lifetimes.

The map and the list degrade independently: with no map attached the
marker half is skipped, with no list anchor the list half is skipped, and
neither case raises.
"""

import logging
from typing import Dict, Iterable, Optional

from ..models import WorkoutRecord
from .view_models import build_list_item, build_marker_popup
from .widgets import ListSurface, MapWidget, Marker

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_LEVEL = 13
FOCUS_PAN_DURATION = 1.0


class ViewSynchronizer:
    """Keeps markers and list items in step with the workout store."""

    def __init__(
        self,
        list_surface: Optional[ListSurface] = None,
        map_widget: Optional[MapWidget] = None,
        zoom_level: int = DEFAULT_ZOOM_LEVEL,
    ):
        """
        Args:
            list_surface: Sidebar list; None when the list anchor is missing
            map_widget: Map; usually attached later once positioning succeeds
            zoom_level: Zoom used when focusing a workout
        """
        self.list_surface = list_surface
        self.map_widget = map_widget
        self.zoom_level = zoom_level
        self._markers: Dict[str, Marker] = {}

    @property
    def has_map(self) -> bool:
        return self.map_widget is not None

    def marker_for(self, workout_id: str) -> Optional[Marker]:
        return self._markers.get(workout_id)

    def tracked_ids(self) -> list:
        return list(self._markers)

    # =========================================================================
    # Markers
    # =========================================================================

    def _place_marker(self, record: WorkoutRecord) -> None:
        if self.map_widget is None:
            return
        marker = (
            self.map_widget.create_marker(record.coordinates)
            .add_to(self.map_widget)
            .bind_popup(build_marker_popup(record))
            .open()
        )
        self._markers[record.id] = marker

    def _drop_marker(self, workout_id: str) -> None:
        marker = self._markers.get(workout_id)
        if marker is None:
            return
        if self.map_widget is not None:
            self.map_widget.remove_layer(marker)
        del self._markers[workout_id]

    def attach_map(self, map_widget: MapWidget, records: Iterable[WorkoutRecord]) -> None:
        """Attach the map once it exists and place markers for records."""
        self.map_widget = map_widget
        for record in records:
            self._place_marker(record)
        logger.debug(f"Map attached with {len(self._markers)} markers")

    # =========================================================================
    # Transitions
    # =========================================================================

    def render_added(self, record: WorkoutRecord) -> None:
        """Place the record's marker and insert its list item after the form."""
        self._place_marker(record)
        if self.list_surface is None:
            logger.debug(f"No list anchor, skipping list item for {record.id}")
            return
        self.list_surface.insert_after_form(build_list_item(record))

    def render_updated(self, record: WorkoutRecord) -> None:
        """Rebuild the record's own marker and swap its list item in place."""
        self._drop_marker(record.id)
        self._place_marker(record)
        if self.list_surface is None:
            return
        if not self.list_surface.replace_item(record.id, build_list_item(record)):
            logger.warning(f"List item for {record.id} missing on update, inserting it")
            self.list_surface.insert_after_form(build_list_item(record))

    def render_removed(self, workout_id: str) -> None:
        """Remove the tracked marker and the list item for workout_id."""
        self._drop_marker(workout_id)
        if self.list_surface is None:
            return
        if not self.list_surface.remove_item(workout_id):
            logger.warning(f"List item for {workout_id} was not rendered")

    def render_all(self, records: Iterable[WorkoutRecord]) -> None:
        """Render every record in stored order (newest ends up first in the list)."""
        for record in records:
            self.render_added(record)

    def focus_on(self, record: WorkoutRecord) -> None:
        """Pan the map to the record with an animated transition."""
        if self.map_widget is None:
            logger.debug(f"No map, cannot focus on {record.id}")
            return
        self.map_widget.set_view(
            record.coordinates,
            self.zoom_level,
            animate=True,
            pan_duration=FOCUS_PAN_DURATION,
        )

    def clear(self, workout_ids: Iterable[str]) -> None:
        """Remove the views of workout_ids, then any marker still tracked."""
        for workout_id in workout_ids:
            self.render_removed(workout_id)
        for workout_id in list(self._markers):
            self._drop_marker(workout_id)
