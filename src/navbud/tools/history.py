"""History tools: set_user, list_history, replay_history, clear_history."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import SessionState
from ..core.routing import RoutingError
from ._prereqs import require_state
from .route import build_route, describe_route


def register_history_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_user(user_id: str) -> str:
        """Choose whose route history to use.

        The id is an opaque label; it is not authenticated. Without a user,
        planned routes are not remembered.
        **Next:** plan_route or list_history.

        Args:
            user_id: Any stable identifier, e.g. an email address.
        """
        user_id = user_id.strip()
        if not user_id:
            return "Error: user_id must not be empty."
        session.user_id = user_id
        count = len(session.history.items(user_id))
        return f"User set to '{user_id}' ({count} route(s) in history)."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_history() -> str:
        """List the current user's recent routes, newest first.

        **Requires:** set_user first.
        **Next:** replay_history with a number from this list.
        """
        try:
            require_state(session, user=True)
        except ValueError as e:
            return f"Error: {e}"

        items = session.history.items(session.user_id)
        if not items:
            return f"No routes in history for '{session.user_id}'."
        lines = [f"Recent routes for '{session.user_id}':"]
        for i, item in enumerate(items, 1):
            lines.append(
                f"{i}. {item.start_text} -> {item.end_text}\n"
                f"   {item.start_place.display_name} -> {item.end_place.display_name}"
            )
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def replay_history(number: int) -> str:
        """Re-plan a route from history without geocoding again.

        The route is re-fetched and re-analysed; history order is unchanged.
        **Requires:** set_user first, and at least one planned route.

        Args:
            number: 1-based position from list_history.
        """
        try:
            require_state(session, user=True)
            item = session.history.for_user(session.user_id).get(number)
        except ValueError as e:
            return f"Error: {e}"

        try:
            await build_route(
                session, item.start_text, item.end_text, item.start_place, item.end_place
            )
        except RoutingError as e:
            return f"Error: {e}"
        return describe_route(session)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def clear_history() -> str:
        """Forget every route in the current user's history.

        **Requires:** set_user first.
        """
        try:
            require_state(session, user=True)
        except ValueError as e:
            return f"Error: {e}"
        history = session.history.for_user(session.user_id)
        removed = len(history)
        history.clear()
        return f"Cleared {removed} route(s) from history for '{session.user_id}'."
