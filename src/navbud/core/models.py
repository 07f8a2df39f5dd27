"""Pydantic return models for core computation functions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from navbud.models import GeoPoint


class BoundingBox(BaseModel):
    """Lat/lon rectangle in degrees. No antimeridian wraparound."""
    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @model_validator(mode="after")
    def check_south_le_north(self) -> "BoundingBox":
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) must not exceed north ({self.north})")
        return self

    def pad(self, margin_deg: float) -> "BoundingBox":
        return BoundingBox(
            south=self.south - margin_deg,
            west=self.west - margin_deg,
            north=self.north + margin_deg,
            east=self.east + margin_deg,
        )

    def as_overpass(self) -> str:
        """Overpass bbox filter order: south,west,north,east."""
        return f"{self.south},{self.west},{self.north},{self.east}"


class LeftTurnCandidate(BaseModel):
    step_index: int = Field(ge=0)
    point: GeoPoint
    road_name: str = "road"


class LeftTurnExtraction(BaseModel):
    """Return type for extract_left_turns."""
    candidates: list[LeftTurnCandidate] = []
    bbox: Optional[BoundingBox] = None


class TurnAnalysis(BaseModel):
    """Return type for analyze_route."""
    unprotected: set[int] = Field(default_factory=set)
    candidates: list[LeftTurnCandidate] = []
    signal_count: int = 0
    signals_available: bool = True

    def unprotected_candidates(self) -> list[LeftTurnCandidate]:
        """Flagged candidates in step-index order."""
        return [c for c in self.candidates if c.step_index in self.unprotected]
