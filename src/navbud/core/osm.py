"""Traffic signal fetching via the OpenStreetMap Overpass API."""

import logging

import httpx

from navbud.models import GeoPoint
from .models import BoundingBox

logger = logging.getLogger(__name__)

OVERPASS_SERVERS = [
    "https://overpass-api.de/api/interpreter",
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass.openstreetmap.ru/api/interpreter",
]

USER_AGENT = "navbud/1.0"


class OverpassError(Exception):
    """Raised when no Overpass server could answer a query."""


async def _query_overpass(query: str) -> list[dict]:
    """Execute an Overpass API query with server fallback.

    An empty element list is a valid answer; OverpassError means every
    server failed.
    """
    async with httpx.AsyncClient(timeout=45.0, headers={"User-Agent": USER_AGENT}) as client:
        for server in OVERPASS_SERVERS:
            try:
                response = await client.post(server, data={"data": query})
                response.raise_for_status()
                data = response.json()
                return data.get("elements", [])
            except httpx.TimeoutException as exc:
                logger.warning("Overpass server %s timed out: %s", server, exc)
                continue
            except httpx.HTTPStatusError as exc:
                logger.warning(
                    "Overpass server %s returned HTTP %s", server, exc.response.status_code
                )
                continue
            except Exception as exc:
                logger.warning("Overpass server %s failed: %s", server, exc)
                continue
    logger.warning("All Overpass servers failed for query")
    raise OverpassError(f"All {len(OVERPASS_SERVERS)} Overpass servers failed")


def build_signal_query(bbox: BoundingBox) -> str:
    b = bbox.as_overpass()
    return (
        "[out:json][timeout:25];("
        f'node["highway"="traffic_signals"]({b});'
        f'node["crossing"="traffic_signals"]({b});'
        ");out body;"
    )


def _parse_signals(elements: list[dict]) -> list[GeoPoint]:
    # Nodes tagged both ways appear twice; duplicates don't change a minimum distance.
    signals = []
    for elem in elements:
        if "lat" not in elem or "lon" not in elem:
            continue
        signals.append(GeoPoint(lat=elem["lat"], lon=elem["lon"]))
    return signals


async def fetch_traffic_signals(bbox: BoundingBox) -> list[GeoPoint]:
    """Fetch traffic signal nodes inside a bounding box.

    Raises:
        OverpassError: every Overpass server failed.
    """
    elements = await _query_overpass(build_signal_query(bbox))
    signals = _parse_signals(elements)
    logger.debug("Fetched %d traffic signal(s) for bbox %s", len(signals), bbox.as_overpass())
    return signals
