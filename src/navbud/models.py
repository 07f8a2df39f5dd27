"""Pydantic domain models for places, routes, and route steps.

Routing responses carry coordinates as ``[lon, lat]`` arrays. Those are
converted to :class:`GeoPoint` here, in the field validators, and nowhere
else.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

    @classmethod
    def from_lon_lat(cls, coords) -> "GeoPoint":
        """Build a point from a wire-order ``[lon, lat]`` pair."""
        if len(coords) < 2:
            raise ValueError(f"Expected [lon, lat], got {coords!r}")
        return cls(lat=coords[1], lon=coords[0])


def _coerce_lon_lat(value: Any) -> Any:
    """Swap a wire ``[lon, lat]`` array into a GeoPoint; pass anything else through."""
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        return GeoPoint.from_lon_lat(value)
    return value


class Place(BaseModel):
    """A geocoded place."""
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    display_name: str = ""

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lon=self.lon)


class Maneuver(BaseModel):
    type: str = ""
    modifier: str = ""
    location: Optional[GeoPoint] = None

    @field_validator("type", "modifier", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("location", mode="before")
    @classmethod
    def location_from_lon_lat(cls, v: Any) -> Any:
        return _coerce_lon_lat(v)


class Intersection(BaseModel):
    location: Optional[GeoPoint] = None

    @field_validator("location", mode="before")
    @classmethod
    def location_from_lon_lat(cls, v: Any) -> Any:
        return _coerce_lon_lat(v)


class RouteStep(BaseModel):
    maneuver: Maneuver = Field(default_factory=Maneuver)
    intersections: list[Intersection] = Field(default_factory=list)
    name: str = "road"
    distance: float = 0.0
    duration: float = 0.0

    @field_validator("maneuver", mode="before")
    @classmethod
    def missing_maneuver(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("intersections", mode="before")
    @classmethod
    def missing_intersections(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("name", mode="before")
    @classmethod
    def default_road_name(cls, v: Any) -> str:
        return str(v) if v else "road"


class RouteLeg(BaseModel):
    steps: list[RouteStep] = Field(default_factory=list)
    distance: float = 0.0
    duration: float = 0.0


class Route(BaseModel):
    """A driving route as returned by the routing service."""
    legs: list[RouteLeg] = Field(default_factory=list)
    distance: float = 0.0
    duration: float = 0.0
    geometry: list[GeoPoint] = Field(default_factory=list)

    @field_validator("geometry", mode="before")
    @classmethod
    def geometry_from_geojson(cls, v: Any) -> Any:
        # GeoJSON LineString or a bare coordinate list, both [lon, lat]
        if v is None:
            return []
        if isinstance(v, dict):
            v = v.get("coordinates", [])
        return [_coerce_lon_lat(c) for c in v]

    def steps(self) -> list[RouteStep]:
        """All legs' steps in order; a step's position here is its step index."""
        return [step for leg in self.legs for step in leg.steps]
