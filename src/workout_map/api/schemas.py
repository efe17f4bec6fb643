"""Request and response models for the HTTP API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class MapClickRequest(BaseModel):
    """A click on the map."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude of the click")
    lng: float = Field(..., ge=-180, le=180, description="Longitude of the click")


class KindChangeRequest(BaseModel):
    """Change of the workout type selector."""
    kind: str = Field(..., description="running or cycling")


class SubmitRequest(BaseModel):
    """
    Raw form values.

    Numbers may arrive as strings exactly as typed; validation happens in
    the controller so API and UI reject the same inputs.
    """
    kind: str = Field(default="running", description="running or cycling")
    distance: Optional[Union[float, str]] = Field(None, description="Distance in km")
    duration: Optional[Union[float, str]] = Field(None, description="Duration in minutes")
    cadence: Optional[Union[float, str]] = Field(None, description="Cadence in spm (running)")
    elevation: Optional[Union[float, str]] = Field(None, description="Elevation gain in m (cycling)")


class GestureResponse(BaseModel):
    """Outcome of a gesture plus the resulting page state."""
    workout: Optional[Dict[str, Any]] = None
    messages: List[str] = Field(default_factory=list)
    state: Dict[str, Any]
