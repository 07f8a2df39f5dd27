"""Driving routes via the OSRM HTTP API."""

import logging

import httpx
from pydantic import ValidationError

from navbud.models import Place, Route
from .osm import USER_AGENT

logger = logging.getLogger(__name__)

OSRM_URL = "https://router.project-osrm.org"
PROFILE = "driving"


class RoutingError(Exception):
    """Raised when no route could be computed."""


def build_route_url(start: Place, end: Place, profile: str = PROFILE) -> str:
    # OSRM takes lon,lat
    return (
        f"{OSRM_URL}/route/v1/{profile}/"
        f"{start.lon},{start.lat};{end.lon},{end.lat}"
    )


async def get_route(start: Place, end: Place) -> Route:
    """Fetch the best driving route with turn-by-turn steps and GeoJSON geometry.

    Raises:
        RoutingError: the service failed or found no route.
    """
    url = build_route_url(start, end)
    try:
        async with httpx.AsyncClient(timeout=20.0, headers={"User-Agent": USER_AGENT}) as client:
            response = await client.get(
                url,
                params={"steps": "true", "geometries": "geojson", "overview": "full"},
            )
            data = response.json()
    except Exception as exc:
        raise RoutingError(f"Error contacting routing service: {exc}") from exc

    routes = data.get("routes") or []
    if data.get("code", "Ok") != "Ok" or not routes:
        message = data.get("message", "No route returned from OSRM")
        raise RoutingError(message)

    try:
        route = Route.model_validate(routes[0])
    except ValidationError as exc:
        raise RoutingError(f"Malformed route from OSRM: {exc}") from exc
    logger.debug(
        "Route with %d leg(s), %d step(s), %.0fm",
        len(route.legs), len(route.steps()), route.distance,
    )
    return route
