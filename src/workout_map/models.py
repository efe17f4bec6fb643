"""Workout record model, factories, and persisted schema."""

import math
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from .exceptions import InvalidInputError


# prettier month names, independent of the process locale
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

Coordinates = Tuple[float, float]


class WorkoutKind(str, Enum):
    """Supported workout variants."""
    RUNNING = "running"
    CYCLING = "cycling"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def variant_field(self) -> str:
        """Name of the kind-specific record field."""
        return "cadence_spm" if self is WorkoutKind.RUNNING else "elevation_gain_m"


@dataclass(frozen=True)
class WorkoutRecord:
    """
    One logged workout.

    Derived metric and label are computed once by the factories and stored
    as plain data, so a persisted record reloads without re-derivation.
    Exactly one of cadence_spm / elevation_gain_m is set, chosen by kind.
    """
    id: str
    kind: WorkoutKind
    distance_km: float
    duration_min: float
    coordinates: Coordinates
    created_at: datetime
    derived_metric: float
    label: str
    cadence_spm: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    interaction_count: int = 0

    @property
    def pace_min_per_km(self) -> Optional[float]:
        """Running pace, None for other kinds."""
        if self.kind is WorkoutKind.RUNNING:
            return self.derived_metric
        return None

    @property
    def speed_km_per_h(self) -> Optional[float]:
        """Cycling speed, None for other kinds."""
        if self.kind is WorkoutKind.CYCLING:
            return self.derived_metric
        return None

    @property
    def variant_value(self) -> float:
        """Value of the kind-specific field (cadence or elevation gain)."""
        return getattr(self, self.kind.variant_field)

    def with_interaction(self) -> "WorkoutRecord":
        """Copy of this record with the interaction counter bumped."""
        return replace(self, interaction_count=self.interaction_count + 1)

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        data = {
            "id": self.id,
            "kind": self.kind.value,
            "distanceKm": self.distance_km,
            "durationMin": self.duration_min,
            "coordinates": [self.coordinates[0], self.coordinates[1]],
            "createdAt": self.created_at.isoformat(),
        }
        if self.kind is WorkoutKind.RUNNING:
            data["cadenceSpm"] = self.cadence_spm
        else:
            data["elevationGainM"] = self.elevation_gain_m
        data["derivedMetric"] = self.derived_metric
        data["label"] = self.label
        data["interactionCount"] = self.interaction_count
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "WorkoutRecord":
        """
        Rebuild a record from its persisted shape.

        Raises:
            InvalidInputError: If the entry is not a mapping or any field
                is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Persisted workout must be an object, got {type(data).__name__}"
            )
        try:
            persisted = PersistedWorkout.model_validate(dict(data))
        except PydanticValidationError as e:
            errors = [
                {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            raise InvalidInputError(
                "Persisted workout is malformed",
                details={"errors": errors},
            ) from e

        return cls(
            id=persisted.id,
            kind=persisted.kind,
            distance_km=persisted.distance_km,
            duration_min=persisted.duration_min,
            coordinates=persisted.coordinates,
            created_at=persisted.created_at,
            derived_metric=persisted.derived_metric,
            label=persisted.label,
            cadence_spm=persisted.cadence_spm,
            elevation_gain_m=persisted.elevation_gain_m,
            interaction_count=persisted.interaction_count,
        )


class PersistedWorkout(BaseModel):
    """Validation schema for one entry of the persisted workout array."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    kind: WorkoutKind
    distance_km: float = Field(..., alias="distanceKm", gt=0, strict=True, allow_inf_nan=False)
    duration_min: float = Field(..., alias="durationMin", gt=0, strict=True, allow_inf_nan=False)
    coordinates: Tuple[StrictFloat, StrictFloat]
    created_at: datetime = Field(..., alias="createdAt")
    cadence_spm: Optional[float] = Field(
        None, alias="cadenceSpm", gt=0, strict=True, allow_inf_nan=False
    )
    elevation_gain_m: Optional[float] = Field(
        None, alias="elevationGainM", gt=0, strict=True, allow_inf_nan=False
    )
    derived_metric: float = Field(
        ..., alias="derivedMetric", gt=0, strict=True, allow_inf_nan=False
    )
    label: str = Field(..., min_length=1)
    interaction_count: int = Field(0, alias="interactionCount", ge=0)

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: Coordinates) -> Coordinates:
        """Coordinates must be a finite lat/lng pair within range."""
        try:
            return _validate_coordinates(v)
        except InvalidInputError as e:
            raise ValueError(e.message) from e

    @model_validator(mode="after")
    def validate_variant_field(self) -> "PersistedWorkout":
        """Exactly one kind-specific field must be populated."""
        if self.kind is WorkoutKind.RUNNING:
            if self.cadence_spm is None or self.elevation_gain_m is not None:
                raise ValueError("Running workouts carry cadenceSpm only")
        else:
            if self.elevation_gain_m is None or self.cadence_spm is not None:
                raise ValueError("Cycling workouts carry elevationGainM only")
        return self


# ============================================================================
# Factories
# ============================================================================

def _require_positive(value: Any, field: str) -> float:
    """Return value as float if finite and strictly positive."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{field} must be a number", field=field)
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{field} must be a finite positive number", field=field)
    return value


def _validate_coordinates(coordinates: Any) -> Coordinates:
    try:
        lat, lng = coordinates
    except (TypeError, ValueError):
        raise InvalidInputError(
            "coordinates must be a (latitude, longitude) pair", field="coordinates"
        )
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidInputError("coordinates must be finite numbers", field="coordinates")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise InvalidInputError("coordinates are out of range", field="coordinates")
    return (float(lat), float(lng))


def generate_workout_id() -> str:
    """Generate a fresh opaque workout id."""
    return uuid.uuid4().hex[:12]


def build_label(kind: WorkoutKind, created_at: datetime) -> str:
    """Human-readable title, e.g. 'Running on April 3'."""
    return f"{kind.display_name} on {MONTHS[created_at.month - 1]} {created_at.day}"


def calc_pace(distance_km: float, duration_min: float) -> float:
    """Running pace in min/km."""
    return duration_min / distance_km


def calc_speed(distance_km: float, duration_min: float) -> float:
    """Cycling speed in km/h."""
    return distance_km * 60 / duration_min


def _require_derived(value: float) -> float:
    """The derived metric must stay finite and positive so the record persists."""
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(
            "Distance and duration give an out-of-range pace or speed",
            field="derived_metric",
        )
    return value


def create_running(
    distance_km: float,
    duration_min: float,
    coordinates: Coordinates,
    cadence_spm: float,
    *,
    workout_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    interaction_count: int = 0,
) -> WorkoutRecord:
    """
    Create a running workout.

    Args:
        distance_km: Distance covered in km
        duration_min: Duration in minutes
        coordinates: (latitude, longitude) of the map click
        cadence_spm: Cadence in steps per minute
        workout_id: Existing id to keep (edits); a fresh one otherwise
        created_at: Existing creation time to keep (edits); now otherwise
        interaction_count: Existing counter to keep (edits)

    Returns:
        A new WorkoutRecord with pace and label computed

    Raises:
        InvalidInputError: If any numeric field is not finite and positive, or
            the pace overflows or underflows
    """
    distance_km = _require_positive(distance_km, "distance_km")
    duration_min = _require_positive(duration_min, "duration_min")
    cadence_spm = _require_positive(cadence_spm, "cadence_spm")
    coordinates = _validate_coordinates(coordinates)
    pace = _require_derived(calc_pace(distance_km, duration_min))
    created_at = created_at or datetime.now()

    return WorkoutRecord(
        id=workout_id or generate_workout_id(),
        kind=WorkoutKind.RUNNING,
        distance_km=distance_km,
        duration_min=duration_min,
        coordinates=coordinates,
        created_at=created_at,
        derived_metric=pace,
        label=build_label(WorkoutKind.RUNNING, created_at),
        cadence_spm=cadence_spm,
        interaction_count=interaction_count,
    )


def create_cycling(
    distance_km: float,
    duration_min: float,
    coordinates: Coordinates,
    elevation_gain_m: float,
    *,
    workout_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    interaction_count: int = 0,
) -> WorkoutRecord:
    """
    Create a cycling workout.

    Same contract as create_running, with elevation gain in metres as the
    kind-specific field and speed in km/h as the derived metric.
    """
    distance_km = _require_positive(distance_km, "distance_km")
    duration_min = _require_positive(duration_min, "duration_min")
    elevation_gain_m = _require_positive(elevation_gain_m, "elevation_gain_m")
    coordinates = _validate_coordinates(coordinates)
    speed = _require_derived(calc_speed(distance_km, duration_min))
    created_at = created_at or datetime.now()

    return WorkoutRecord(
        id=workout_id or generate_workout_id(),
        kind=WorkoutKind.CYCLING,
        distance_km=distance_km,
        duration_min=duration_min,
        coordinates=coordinates,
        created_at=created_at,
        derived_metric=speed,
        label=build_label(WorkoutKind.CYCLING, created_at),
        elevation_gain_m=elevation_gain_m,
        interaction_count=interaction_count,
    )


def create_workout(
    kind: WorkoutKind,
    distance_km: float,
    duration_min: float,
    coordinates: Coordinates,
    variant_value: float,
    **kwargs: Any,
) -> WorkoutRecord:
    """Dispatch to the factory for kind."""
    if WorkoutKind(kind) is WorkoutKind.RUNNING:
        return create_running(distance_km, duration_min, coordinates, variant_value, **kwargs)
    return create_cycling(distance_km, duration_min, coordinates, variant_value, **kwargs)
