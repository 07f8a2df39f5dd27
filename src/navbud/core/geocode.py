"""Place name geocoding via Nominatim."""

import logging

import httpx

from navbud.models import Place
from .osm import USER_AGENT

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeocodeError(Exception):
    """Raised when a place name cannot be resolved."""


async def geocode(query: str, limit: int = 1) -> list[Place]:
    """Resolve free text to candidate places, best match first.

    Raises:
        GeocodeError: the service failed or returned no results.
    """
    limit = max(1, min(10, limit))
    try:
        async with httpx.AsyncClient(timeout=10.0, headers={"User-Agent": USER_AGENT}) as client:
            response = await client.get(
                NOMINATIM_URL,
                params={"q": query, "format": "json", "limit": limit, "addressdetails": 1},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            results = response.json()
    except httpx.HTTPStatusError as exc:
        raise GeocodeError(f"Nominatim returned HTTP {exc.response.status_code}.") from exc
    except Exception as exc:
        raise GeocodeError(f"Error contacting geocoding service: {exc}") from exc

    if not results:
        raise GeocodeError(f"No results for: {query}")

    places = [
        Place(
            lat=float(item["lat"]),
            lon=float(item["lon"]),
            display_name=item.get("display_name", query),
        )
        for item in results
    ]
    logger.debug("Geocoded %r to %d place(s)", query, len(places))
    return places


async def geocode_one(query: str) -> Place:
    places = await geocode(query, limit=1)
    return places[0]
