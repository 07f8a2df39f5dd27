"""Turn-by-turn direction text."""

import math
import re
from typing import Optional

from navbud.models import Route, RouteStep


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def format_duration(seconds: float) -> str:
    """Render seconds as "N min", "N hr" or "N hr M min"."""
    if seconds is None or not math.isfinite(seconds):
        return ""
    mins_total = math.floor(seconds / 60 + 0.5)
    hrs, mins = divmod(mins_total, 60)
    if hrs <= 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hrs} hr"
    return f"{hrs} hr {mins} min"


def format_step_text(step: RouteStep) -> str:
    name = step.name
    kind = step.maneuver.type
    mod = step.maneuver.modifier

    if kind == "depart":
        return f"Start on {name}"
    if kind == "arrive":
        return "Arrive at destination"
    if kind == "turn":
        return _squash(f"Turn {mod} onto {name}")
    if kind == "continue":
        return f"Continue on {name}"
    if kind == "merge":
        return _squash(f"Merge {mod} onto {name}")
    if kind == "roundabout":
        return f"Enter roundabout toward {name}"
    if kind == "fork":
        return _squash(f"Keep {mod} to stay on {name}")
    if kind == "new name":
        return f"Continue onto {name}"
    if kind == "end of road":
        return _squash(f"At the end of the road, turn {mod} onto {name}")
    return _squash(f"{kind} {mod} {name}")


def render_directions(route: Route, unprotected: Optional[set[int]] = None) -> list[str]:
    """One line per step, flagged steps called out as unprotected lefts."""
    unprotected = unprotected or set()
    lines = []
    for idx, step in enumerate(route.steps()):
        if idx in unprotected:
            lines.append(f"Unprotected left onto {step.name}")
        else:
            lines.append(format_step_text(step))
    return lines
