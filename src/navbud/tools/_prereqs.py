"""Prerequisite checking helpers for MCP tools."""


def require_state(session, *, user: bool = False, route: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(session, route=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if user and not session.user_id:
        raise ValueError(
            "Set a user first with set_user to keep route history."
        )
    if route and (session.route is None or session.analysis is None):
        raise ValueError(
            "Plan a route first with plan_route."
        )
