"""
Application state wiring.

A WorkoutMapSession bundles one controller with its headless widgets. The
entry points (CLI, HTTP API) build a session explicitly and pass it to
their event-binding layer; there is no module-level controller.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import Settings, get_settings
from .controller import InteractionController
from .db.adapters import KeyValueStore, SQLiteAdapter
from .db.persistence import WorkoutPersistence
from .positioning import PositionProvider, provider_from_coordinates
from .store import WorkoutStore
from .views.synchronizer import ViewSynchronizer
from .views.widgets import (
    HeadlessForm,
    HeadlessListSurface,
    HeadlessMap,
    MessageLog,
    headless_map_factory,
)

logger = logging.getLogger(__name__)


@dataclass
class WorkoutMapSession:
    """A started controller and the headless surfaces it renders into."""
    controller: InteractionController
    list_surface: HeadlessListSurface
    form: HeadlessForm
    messages: MessageLog
    maps: Dict[str, HeadlessMap] = field(default_factory=dict)

    @property
    def map(self) -> Optional[HeadlessMap]:
        return self.maps.get(self.controller.map_element_id)

    def state(self) -> dict:
        """Snapshot of everything a front end needs to draw the page."""
        controller = self.controller
        return {
            "mode": controller.mode.value,
            "editing_id": controller.editing_id,
            "pending_coordinates": (
                list(controller.pending_coordinates)
                if controller.pending_coordinates else None
            ),
            "form": self.form.to_dict(),
            "map": self.map.to_dict() if self.map else None,
            "list": [item.to_dict() for item in self.list_surface.items],
            "messages": list(self.messages.messages),
        }


def create_session(
    settings: Optional[Settings] = None,
    adapter: Optional[KeyValueStore] = None,
    position_provider: Optional[PositionProvider] = None,
    start: bool = True,
) -> WorkoutMapSession:
    """
    Build a session on headless widgets.

    Args:
        settings: Defaults to the cached environment settings
        adapter: Storage medium; defaults to SQLite at settings.db_path
        position_provider: Defaults to the configured home location
        start: Hydrate and request the position immediately
    """
    settings = settings or get_settings()
    if adapter is None:
        adapter = SQLiteAdapter(db_path=str(settings.db_path))
    if position_provider is None:
        position_provider = provider_from_coordinates(
            settings.home_latitude, settings.home_longitude
        )

    list_surface = HeadlessListSurface()
    form = HeadlessForm()
    messages = MessageLog()
    maps: Dict[str, HeadlessMap] = {}

    controller = InteractionController(
        store=WorkoutStore(),
        persistence=WorkoutPersistence(adapter, key=settings.storage_key),
        view=ViewSynchronizer(list_surface=list_surface, zoom_level=settings.zoom_level),
        form=form,
        notifier=messages,
        map_factory=headless_map_factory(maps),
        position_provider=position_provider,
        map_element_id=settings.map_element_id,
        zoom_level=settings.zoom_level,
    )
    session = WorkoutMapSession(
        controller=controller,
        list_surface=list_surface,
        form=form,
        messages=messages,
        maps=maps,
    )
    if start:
        controller.start()
    return session
