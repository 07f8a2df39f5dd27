"""MCP server for navbud.

Registers all tools against one session and runs via stdio transport.
"""

import json

from mcp.server.fastmcp import FastMCP

from .state import SessionState
from .tools.route import register_route_tools
from .tools.history import register_history_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "navbud",
    instructions="Plan driving routes and flag unprotected left turns (left turns with no traffic signal nearby)",
)

session = SessionState()

# Register all tool groups
register_route_tools(mcp, session)
register_history_tools(mcp, session)
register_export_tools(mcp, session)
register_status_tools(mcp, session)


@mcp.resource("state://session")
def session_state() -> str:
    """Current session summary as JSON."""
    return json.dumps(session.summary(), indent=2)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
