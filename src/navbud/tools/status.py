"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import SessionState


def register_status_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current session.

        Shows the active user, resolved places, route size, and the
        left turn analysis for the current route.
        """
        return json.dumps(session.summary(), indent=2)
