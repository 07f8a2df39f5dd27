"""Export tools: export_gpx."""

import logging
import os
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from ..state import SessionState
from ..exporters.gpx import export_gpx as do_export_gpx
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool()
    def export_gpx(output_path: str) -> str:
        """Export the current route as a GPX file.

        The route line becomes a track and every unprotected left turn a
        waypoint, so the turns show up on a GPS unit or mapping app.

        Args:
            output_path: Where to save the .gpx file (absolute path)
        """
        try:
            require_state(session, route=True)
        except ValueError as e:
            return f"Error: {e}"

        if not session.route.geometry:
            return "Error: Current route has no geometry to export."

        try:
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        name = f"{session.start_text} to {session.end_text}"
        result = do_export_gpx(session.route, session.analysis, output_path, name=name)
        logger.info("GPX exported to %s", output_path)
        return (
            f"GPX exported to {output_path} "
            f"({result['track_points']} track points, {result['waypoints']} waypoint(s))"
        )
