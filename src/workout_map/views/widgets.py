"""
Widget interfaces consumed by the view layer, with headless implementations.

The map, form, list and notification surfaces belong to whatever front end
hosts the app. The headless classes keep their state in plain Python
objects; the CLI and the HTTP API render from that state, and tests
inspect it directly.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..forms import FormInput, coerce_kind
from ..models import Coordinates, WorkoutKind
from .view_models import MarkerPopup, WorkoutListItem

logger = logging.getLogger(__name__)

ClickHandler = Callable[[float, float], None]


# ============================================================================
# Interfaces
# ============================================================================

class Marker(ABC):
    """A marker handle owned by the map widget."""

    @abstractmethod
    def add_to(self, map_widget: "MapWidget") -> "Marker":
        pass

    @abstractmethod
    def bind_popup(self, popup: MarkerPopup) -> "Marker":
        pass

    @abstractmethod
    def open(self) -> "Marker":
        pass


class MapWidget(ABC):
    """Interactive map. Owns the lifetime of its markers."""

    @abstractmethod
    def set_view(
        self,
        coordinates: Coordinates,
        zoom: int,
        animate: bool = False,
        pan_duration: Optional[float] = None,
    ) -> None:
        pass

    @abstractmethod
    def on_click(self, handler: ClickHandler) -> None:
        """Register handler(lat, lng) for map clicks."""
        pass

    @abstractmethod
    def create_marker(self, coordinates: Coordinates) -> Marker:
        pass

    @abstractmethod
    def remove_layer(self, marker: Marker) -> None:
        pass


MapFactory = Callable[[str], MapWidget]


class ListSurface(ABC):
    """Sidebar list that sits right below the workout form."""

    @abstractmethod
    def insert_after_form(self, item: WorkoutListItem) -> None:
        pass

    @abstractmethod
    def replace_item(self, workout_id: str, item: WorkoutListItem) -> bool:
        """Swap the item for workout_id in place; False if it is not shown."""
        pass

    @abstractmethod
    def remove_item(self, workout_id: str) -> bool:
        """Remove the item for workout_id; False if it is not shown."""
        pass


class FormSurface(ABC):
    """The workout entry form."""

    @abstractmethod
    def show(self, prefill: Optional[FormInput] = None) -> None:
        pass

    @abstractmethod
    def hide(self) -> None:
        """Hide the form and clear its values."""
        pass

    @abstractmethod
    def set_kind(self, kind: WorkoutKind) -> None:
        """Show the cadence or the elevation row to match kind."""
        pass


class Notifier(ABC):
    """User-visible messages (alerts)."""

    @abstractmethod
    def alert(self, message: str) -> None:
        pass


# ============================================================================
# Headless implementations
# ============================================================================

class HeadlessMarker(Marker):
    """Marker state kept in memory."""

    def __init__(self, coordinates: Coordinates):
        self.coordinates = coordinates
        self.popup: Optional[MarkerPopup] = None
        self.is_open = False
        self.map: Optional["HeadlessMap"] = None

    def add_to(self, map_widget: MapWidget) -> "HeadlessMarker":
        if isinstance(map_widget, HeadlessMap):
            map_widget.layers.append(self)
        self.map = map_widget
        return self

    def bind_popup(self, popup: MarkerPopup) -> "HeadlessMarker":
        self.popup = popup
        return self

    def open(self) -> "HeadlessMarker":
        self.is_open = True
        return self

    def to_dict(self) -> dict:
        return {
            "coordinates": list(self.coordinates),
            "popup": self.popup.to_dict() if self.popup else None,
            "is_open": self.is_open,
        }


class HeadlessMap(MapWidget):
    """Map state kept in memory: view, click handlers and marker layers."""

    def __init__(self, element_id: str = "map"):
        self.element_id = element_id
        self.center: Optional[Coordinates] = None
        self.zoom: Optional[int] = None
        self.layers: List[HeadlessMarker] = []
        self.view_history: List[dict] = []
        self._click_handlers: List[ClickHandler] = []

    def set_view(
        self,
        coordinates: Coordinates,
        zoom: int,
        animate: bool = False,
        pan_duration: Optional[float] = None,
    ) -> None:
        self.center = (coordinates[0], coordinates[1])
        self.zoom = zoom
        self.view_history.append({
            "center": list(self.center),
            "zoom": zoom,
            "animate": animate,
            "pan_duration": pan_duration,
        })

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handlers.append(handler)

    def click(self, lat: float, lng: float) -> None:
        """Simulate a user click at (lat, lng)."""
        for handler in self._click_handlers:
            handler(lat, lng)

    def create_marker(self, coordinates: Coordinates) -> HeadlessMarker:
        return HeadlessMarker(coordinates)

    def remove_layer(self, marker: Marker) -> None:
        if marker in self.layers:
            self.layers.remove(marker)

    def to_dict(self) -> dict:
        return {
            "element_id": self.element_id,
            "center": list(self.center) if self.center else None,
            "zoom": self.zoom,
            "markers": [marker.to_dict() for marker in self.layers],
        }


class HeadlessListSurface(ListSurface):
    """
    List items in visual order; index 0 sits right after the form.

    Because new items go right after the form, the visual order is the
    reverse of insertion order.
    """

    def __init__(self):
        self.items: List[WorkoutListItem] = []

    def _index_of(self, workout_id: str) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.workout_id == workout_id:
                return index
        return None

    def insert_after_form(self, item: WorkoutListItem) -> None:
        self.items.insert(0, item)

    def replace_item(self, workout_id: str, item: WorkoutListItem) -> bool:
        index = self._index_of(workout_id)
        if index is None:
            return False
        self.items[index] = item
        return True

    def remove_item(self, workout_id: str) -> bool:
        index = self._index_of(workout_id)
        if index is None:
            return False
        del self.items[index]
        return True

    def ids(self) -> List[str]:
        return [item.workout_id for item in self.items]


@dataclass
class HeadlessForm(FormSurface):
    """Form visibility, values and the visible kind-specific row."""
    visible: bool = False
    values: FormInput = field(default_factory=FormInput)

    def show(self, prefill: Optional[FormInput] = None) -> None:
        if prefill is not None:
            self.values = prefill
        self.visible = True

    def hide(self) -> None:
        self.values = FormInput()
        self.visible = False

    def set_kind(self, kind: WorkoutKind) -> None:
        self.values.kind = coerce_kind(kind)

    @property
    def visible_field(self) -> str:
        return self.values.visible_field

    def to_dict(self) -> dict:
        return {"visible": self.visible, "values": self.values.to_dict()}


class MessageLog(Notifier):
    """Collects alerts so a front end can display them later."""

    def __init__(self):
        self.messages: List[str] = []

    def alert(self, message: str) -> None:
        logger.info(f"User alert: {message}")
        self.messages.append(message)

    def drain(self) -> List[str]:
        """Return and forget the pending messages."""
        messages, self.messages = self.messages, []
        return messages


def headless_map_factory(registry: Optional[Dict[str, HeadlessMap]] = None) -> MapFactory:
    """Build a map factory that records created maps in registry by element id."""
    def factory(element_id: str) -> HeadlessMap:
        map_widget = HeadlessMap(element_id)
        if registry is not None:
            registry[element_id] = map_widget
        return map_widget
    return factory
