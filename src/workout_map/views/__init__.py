"""Map and list views of the workout collection."""

from .synchronizer import ViewSynchronizer
from .view_models import (
    MarkerPopup,
    MetricRow,
    WorkoutListItem,
    build_list_item,
    build_marker_popup,
)
from .widgets import (
    FormSurface,
    HeadlessForm,
    HeadlessListSurface,
    HeadlessMap,
    HeadlessMarker,
    ListSurface,
    MapFactory,
    MapWidget,
    Marker,
    MessageLog,
    Notifier,
    headless_map_factory,
)

__all__ = [
    "ViewSynchronizer",
    "MarkerPopup",
    "MetricRow",
    "WorkoutListItem",
    "build_list_item",
    "build_marker_popup",
    "FormSurface",
    "HeadlessForm",
    "HeadlessListSurface",
    "HeadlessMap",
    "HeadlessMarker",
    "ListSurface",
    "MapFactory",
    "MapWidget",
    "Marker",
    "MessageLog",
    "Notifier",
    "headless_map_factory",
]
