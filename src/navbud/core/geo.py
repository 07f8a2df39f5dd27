"""Great-circle distance on a spherical Earth."""

import math

from navbud.models import GeoPoint

# Mean Earth radius, meters
EARTH_RADIUS_M = 6_371_000.0


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points in meters.

    Inputs are not range-checked. The inverse-sine operand is clamped to
    [0, 1] so rounding near antipodal points cannot produce NaN.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)

    sin_d_lat = math.sin(d_lat / 2)
    sin_d_lon = math.sin(d_lon / 2)
    h = sin_d_lat * sin_d_lat + math.cos(lat1) * math.cos(lat2) * sin_d_lon * sin_d_lon
    h = min(1.0, max(0.0, h))

    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))
