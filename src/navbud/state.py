"""Session state for the navbud MCP server.

One SessionState is created per server and handed to every tool group,
so each map view / client session owns its route, analysis and history.
"""

from typing import Optional

from pydantic import BaseModel, Field

from navbud.core.models import TurnAnalysis
from navbud.history import HistoryStore
from navbud.models import Place, Route


class SessionState(BaseModel):
    user_id: Optional[str] = None
    start_text: str = ""
    end_text: str = ""
    start_place: Optional[Place] = None
    end_place: Optional[Place] = None
    route: Optional[Route] = None
    analysis: Optional[TurnAnalysis] = None
    history: HistoryStore = Field(default_factory=HistoryStore)

    def reset_route(self) -> None:
        """Drop everything derived from the current start/end pair."""
        self.start_text = ""
        self.end_text = ""
        self.start_place = None
        self.end_place = None
        self.route = None
        self.analysis = None

    def summary(self) -> dict:
        route = self.route
        analysis = self.analysis
        return {
            "user": {
                "user_id": self.user_id,
                "history_items": len(self.history.items(self.user_id)),
            },
            "places": {
                "start": self.start_place.model_dump() if self.start_place else None,
                "end": self.end_place.model_dump() if self.end_place else None,
            },
            "route": {
                "loaded": route is not None,
                "legs": len(route.legs) if route else 0,
                "steps": len(route.steps()) if route else 0,
                "distance_m": round(route.distance) if route else None,
                "duration_s": round(route.duration) if route else None,
            },
            "analysis": {
                "left_turns": len(analysis.candidates),
                "signals": analysis.signal_count,
                "signals_available": analysis.signals_available,
                "unprotected_steps": sorted(analysis.unprotected),
            } if analysis else None,
        }
