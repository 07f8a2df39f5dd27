"""Unprotected left turn detection.

A left turn is protected when a traffic signal lies within
``SIGNAL_RADIUS_M`` of the turn's location. Signals are fetched once per
route for the padded bounding box around every left turn.
"""

import inspect
import logging
from typing import Awaitable, Callable, Iterable, Optional, Union

from navbud.models import GeoPoint, Route, RouteStep
from .geo import distance_meters
from .models import BoundingBox, LeftTurnCandidate, LeftTurnExtraction, TurnAnalysis

logger = logging.getLogger(__name__)

SIGNAL_RADIUS_M = 30.0
# ~111 m at the equator
BBOX_PADDING_DEG = 0.001

SignalFetcher = Callable[
    [BoundingBox], Union[Awaitable[list[GeoPoint]], list[GeoPoint]]
]


def is_left_turn(step: RouteStep) -> bool:
    """True for ``turn`` maneuvers whose modifier mentions left (incl. slight/sharp)."""
    return step.maneuver.type == "turn" and "left" in step.maneuver.modifier


def turn_location(step: RouteStep) -> Optional[GeoPoint]:
    """First intersection's location, falling back to the maneuver location."""
    if step.intersections and step.intersections[0].location is not None:
        return step.intersections[0].location
    return step.maneuver.location


def extract_left_turns(route: Route) -> LeftTurnExtraction:
    """Collect left turns across all legs and the box enclosing them."""
    candidates = []
    south, north, west, east = 90.0, -90.0, 180.0, -180.0

    for idx, step in enumerate(route.steps()):
        if not is_left_turn(step):
            continue
        point = turn_location(step)
        if point is None:
            logger.debug("Left turn at step %d has no location, skipping", idx)
            continue

        candidates.append(LeftTurnCandidate(step_index=idx, point=point, road_name=step.name))
        south = min(south, point.lat)
        north = max(north, point.lat)
        west = min(west, point.lon)
        east = max(east, point.lon)

    if not candidates:
        return LeftTurnExtraction()
    return LeftTurnExtraction(
        candidates=candidates,
        bbox=BoundingBox(south=south, west=west, north=north, east=east),
    )


def classify_turns(
    candidates: Iterable[LeftTurnCandidate],
    signals: list[GeoPoint],
    radius_m: float = SIGNAL_RADIUS_M,
) -> set[int]:
    """Return step indices of candidates with no signal strictly closer than radius_m.

    With no signals at all, every candidate is unprotected.
    """
    unprotected = set()
    for cand in candidates:
        if signals:
            nearest = min(distance_meters(cand.point, sig) for sig in signals)
            if nearest < radius_m:
                continue
        unprotected.add(cand.step_index)
    return unprotected


async def _fetch_signals(fetcher: SignalFetcher, bbox: BoundingBox) -> Optional[list[GeoPoint]]:
    """Call the fetcher; None means the fetch failed or returned malformed points.

    Plain ``{lat, lon}`` mappings are accepted and converted to GeoPoint.
    """
    try:
        result = fetcher(bbox)
        if inspect.isawaitable(result):
            result = await result
        return [s if isinstance(s, GeoPoint) else GeoPoint.model_validate(s) for s in result]
    except Exception as exc:
        logger.warning(
            "Traffic signal fetch failed for bbox %s, treating as no signals: %s",
            bbox.as_overpass(), exc, exc_info=True,
        )
        return None


async def analyze_route(
    route: Route,
    signal_fetcher: SignalFetcher,
    radius_m: float = SIGNAL_RADIUS_M,
) -> TurnAnalysis:
    """Extract left turns, fetch nearby signals once, and classify each turn.

    Never raises because of the fetcher: a failed fetch is logged and
    treated as zero signals, which flags every left turn.
    """
    extraction = extract_left_turns(route)
    if not extraction.candidates:
        return TurnAnalysis()

    bbox = extraction.bbox.pad(BBOX_PADDING_DEG)
    signals = await _fetch_signals(signal_fetcher, bbox)
    available = signals is not None
    if signals is None:
        signals = []

    unprotected = classify_turns(extraction.candidates, signals, radius_m=radius_m)
    logger.info(
        "%d left turn(s), %d signal(s), %d unprotected",
        len(extraction.candidates), len(signals), len(unprotected),
    )
    return TurnAnalysis(
        unprotected=unprotected,
        candidates=extraction.candidates,
        signal_count=len(signals),
        signals_available=available,
    )


async def find_unprotected_lefts(
    route: Route,
    signal_fetcher: SignalFetcher,
    radius_m: float = SIGNAL_RADIUS_M,
) -> set[int]:
    """Step indices of the route's unprotected left turns."""
    analysis = await analyze_route(route, signal_fetcher, radius_m=radius_m)
    return analysis.unprotected
