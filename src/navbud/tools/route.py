"""Route planning tools: plan_route, get_directions, list_unprotected_lefts."""

import asyncio
import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import SessionState
from ..models import Place
from ..core.geocode import geocode_one, GeocodeError
from ..core.routing import get_route, RoutingError
from ..core.osm import fetch_traffic_signals
from ..core.turns import analyze_route
from ..core.directions import format_duration, render_directions
from ._prereqs import require_state

logger = logging.getLogger(__name__)


async def build_route(
    session: SessionState,
    start_text: str, end_text: str,
    start_place: Place, end_place: Place,
) -> None:
    """Route between two resolved places, analyse its left turns, and store the result.

    The previous route stays in place until the new one has been fetched
    and analysed.

    Raises:
        RoutingError: no route could be computed.
    """
    route = await get_route(start_place, end_place)
    analysis = await analyze_route(route, fetch_traffic_signals)

    session.start_text = start_text
    session.end_text = end_text
    session.start_place = start_place
    session.end_place = end_place
    session.route = route
    session.analysis = analysis
    logger.info(
        "Planned %r -> %r: %d unprotected left(s)", start_text, end_text, len(analysis.unprotected)
    )


def describe_route(session: SessionState) -> str:
    """Header line plus numbered directions for the session's current route."""
    route = session.route
    analysis = session.analysis
    header = (
        f"Route: {session.start_place.display_name} -> {session.end_place.display_name} "
        f"({route.distance / 1000:.1f} km, {format_duration(route.duration)}). "
        f"{len(analysis.candidates)} left turn(s), {len(analysis.unprotected)} unprotected."
    )
    lines = [header]
    if not analysis.signals_available:
        lines.append(
            "Warning: traffic signal data was unavailable, so every left turn is flagged."
        )
    lines.append("")
    for i, text in enumerate(render_directions(route, analysis.unprotected), 1):
        lines.append(f"{i}. {text}")
    return "\n".join(lines)


def register_route_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def plan_route(start: str, end: str) -> str:
        """Plan a driving route and flag left turns that have no traffic signal nearby.

        Geocodes both places, fetches the route, and checks every left turn
        against OpenStreetMap traffic signals within 30 m.
        **Next:** list_unprotected_lefts for coordinates, or export_gpx.

        Args:
            start: Start address or place name (e.g., "Boston City Hall").
            end: Destination address or place name.
        """
        start_text = start.strip()
        end_text = end.strip()
        if not start_text or not end_text:
            return "Error: Please enter both start and end."

        try:
            start_place, end_place = await asyncio.gather(
                geocode_one(start_text), geocode_one(end_text)
            )
        except GeocodeError as e:
            return f"Error: {e}"

        try:
            await build_route(session, start_text, end_text, start_place, end_place)
        except RoutingError as e:
            return f"Error: {e}"

        session.history.add(session.user_id, start_text, end_text, start_place, end_place)
        return describe_route(session)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_directions() -> str:
        """Return the turn-by-turn directions for the current route.

        **Requires:** plan_route or replay_history first.
        """
        try:
            require_state(session, route=True)
        except ValueError as e:
            return f"Error: {e}"
        return describe_route(session)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_unprotected_lefts() -> str:
        """List the current route's unprotected left turns as JSON.

        Each entry has the step number (1-based, as in get_directions),
        road name, and coordinates of the turn.
        **Requires:** plan_route or replay_history first.
        """
        try:
            require_state(session, route=True)
        except ValueError as e:
            return f"Error: {e}"

        turns = [
            {
                "step": cand.step_index + 1,
                "road_name": cand.road_name,
                "lat": cand.point.lat,
                "lon": cand.point.lon,
            }
            for cand in session.analysis.unprotected_candidates()
        ]
        return json.dumps(turns, indent=2)
