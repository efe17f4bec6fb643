"""Position sources used to center the map on start-up."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .exceptions import PositioningUnavailableError
from .models import Coordinates

logger = logging.getLogger(__name__)

PositionCallback = Callable[[Coordinates], None]
PositionErrorCallback = Callable[[PositioningUnavailableError], None]


class PositionProvider(ABC):
    """Asynchronous-style position request; exactly one callback fires."""

    @abstractmethod
    def request_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        pass


class FixedPositionProvider(PositionProvider):
    """Always reports the same coordinates (e.g. a configured home location)."""

    def __init__(self, coordinates: Coordinates):
        self.coordinates = coordinates

    def request_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        on_success(self.coordinates)


class UnavailablePositionProvider(PositionProvider):
    """Reports that positioning is denied or unsupported."""

    def __init__(self, reason: str = "Positioning is not supported"):
        self.reason = reason

    def request_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        on_error(PositioningUnavailableError(details={"reason": self.reason}))


def provider_from_coordinates(
    latitude: Optional[float],
    longitude: Optional[float],
) -> PositionProvider:
    """Fixed provider when both coordinates are set, unavailable otherwise."""
    if latitude is None or longitude is None:
        logger.debug("No home location configured")
        return UnavailablePositionProvider("No home location configured")
    return FixedPositionProvider((latitude, longitude))
