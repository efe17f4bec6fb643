"""Workout form values and their validation."""

import math
from dataclasses import dataclass
from typing import Any, Tuple

from .exceptions import InvalidInputError
from .models import WorkoutKind, WorkoutRecord

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers!"


def coerce_kind(value: Any) -> WorkoutKind:
    """Accept a WorkoutKind or its case-insensitive name."""
    if isinstance(value, str):
        value = value.strip().lower()
    return WorkoutKind(value)


def parse_number(value: Any, field: str) -> float:
    """
    Convert a raw form value to a finite positive float.

    Raises:
        InvalidInputError: On blank, non-numeric, non-finite or non-positive values
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(INVALID_INPUT_MESSAGE, field=field)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidInputError(INVALID_INPUT_MESSAGE, field=field)
    if not isinstance(value, (int, float)):
        raise InvalidInputError(INVALID_INPUT_MESSAGE, field=field)
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(INVALID_INPUT_MESSAGE, field=field)
    return value


@dataclass
class FormInput:
    """
    Raw values of the workout form.

    Numeric fields hold whatever the user typed (strings or numbers); only
    the kind-specific field matching `kind` is read on submit.
    """
    kind: Any = WorkoutKind.RUNNING
    distance: Any = ""
    duration: Any = ""
    cadence: Any = ""
    elevation: Any = ""

    @classmethod
    def from_record(cls, record: WorkoutRecord) -> "FormInput":
        """Prefill values for editing an existing record."""
        return cls(
            kind=record.kind,
            distance=record.distance_km,
            duration=record.duration_min,
            cadence=record.cadence_spm if record.cadence_spm is not None else "",
            elevation=record.elevation_gain_m if record.elevation_gain_m is not None else "",
        )

    @property
    def visible_field(self) -> str:
        """The kind-dependent third field shown by the form."""
        try:
            kind = coerce_kind(self.kind)
        except ValueError:
            kind = WorkoutKind.RUNNING
        return "cadence" if kind is WorkoutKind.RUNNING else "elevation"

    def parse(self) -> Tuple[WorkoutKind, float, float, float]:
        """
        Validate every field the current kind needs.

        Returns:
            (kind, distance_km, duration_min, variant_value)

        Raises:
            InvalidInputError: If the kind is unknown or any field is invalid
        """
        try:
            kind = coerce_kind(self.kind)
        except ValueError:
            raise InvalidInputError(f"Unknown workout type: {self.kind!r}", field="kind")

        distance = parse_number(self.distance, "distance")
        duration = parse_number(self.duration, "duration")
        if kind is WorkoutKind.RUNNING:
            variant_value = parse_number(self.cadence, "cadence")
        else:
            variant_value = parse_number(self.elevation, "elevation")
        return kind, distance, duration, variant_value

    def to_dict(self) -> dict:
        kind = self.kind.value if isinstance(self.kind, WorkoutKind) else self.kind
        return {
            "kind": kind,
            "distance": self.distance,
            "duration": self.duration,
            "cadence": self.cadence,
            "elevation": self.elevation,
            "visible_field": self.visible_field,
        }
