"""Pure mappings from WorkoutRecord to renderable view-models."""

from dataclasses import dataclass, field
from typing import List

from ..models import WorkoutKind, WorkoutRecord


KIND_ICONS = {
    WorkoutKind.RUNNING: "🏃‍♂️",
    WorkoutKind.CYCLING: "🚴‍♀️",
}

DURATION_ICON = "⏱"
METRIC_ICON = "⚡️"
CADENCE_ICON = "🦶🏼"
ELEVATION_ICON = "⛰"


@dataclass(frozen=True)
class MetricRow:
    """One icon / value / unit row of a list item."""
    icon: str
    value: str
    unit: str

    def to_dict(self) -> dict:
        return {"icon": self.icon, "value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class WorkoutListItem:
    """Sidebar entry for one workout, keyed by workout_id."""
    workout_id: str
    kind: WorkoutKind
    css_class: str
    title: str
    details: List[MetricRow] = field(default_factory=list)
    actions: List[str] = field(default_factory=lambda: ["edit", "delete"])

    def to_dict(self) -> dict:
        return {
            "workout_id": self.workout_id,
            "kind": self.kind.value,
            "css_class": self.css_class,
            "title": self.title,
            "details": [row.to_dict() for row in self.details],
            "actions": list(self.actions),
        }


@dataclass(frozen=True)
class MarkerPopup:
    """Popup bound to a workout's map marker."""
    content: str
    class_name: str
    max_width: int = 250
    min_width: int = 100
    auto_close: bool = False
    close_on_click: bool = False

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "class_name": self.class_name,
            "max_width": self.max_width,
            "min_width": self.min_width,
            "auto_close": self.auto_close,
            "close_on_click": self.close_on_click,
        }


def format_number(value: float) -> str:
    """Compact number: 5.0 -> '5', 5.25 -> '5.25'."""
    return f"{value:g}"


def format_metric(value: float) -> str:
    """Derived metric with one decimal."""
    return f"{value:.1f}"


def build_metric_rows(record: WorkoutRecord) -> List[MetricRow]:
    """Detail rows: distance, duration, then the kind-specific pair."""
    rows = [
        MetricRow(KIND_ICONS[record.kind], format_number(record.distance_km), "km"),
        MetricRow(DURATION_ICON, format_number(record.duration_min), "min"),
    ]
    if record.kind is WorkoutKind.RUNNING:
        rows.append(MetricRow(METRIC_ICON, format_metric(record.derived_metric), "min/km"))
        rows.append(MetricRow(CADENCE_ICON, format_number(record.cadence_spm), "spm"))
    else:
        rows.append(MetricRow(METRIC_ICON, format_metric(record.derived_metric), "km/h"))
        rows.append(MetricRow(ELEVATION_ICON, format_number(record.elevation_gain_m), "m"))
    return rows


def build_list_item(record: WorkoutRecord) -> WorkoutListItem:
    """Map a record to its sidebar view-model."""
    return WorkoutListItem(
        workout_id=record.id,
        kind=record.kind,
        css_class=f"workout workout--{record.kind.value}",
        title=record.label,
        details=build_metric_rows(record),
    )


def build_marker_popup(record: WorkoutRecord) -> MarkerPopup:
    """Map a record to its marker popup view-model."""
    return MarkerPopup(
        content=f"{KIND_ICONS[record.kind]} {record.label}",
        class_name=f"{record.kind.value}-popup",
    )
