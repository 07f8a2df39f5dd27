"""Tests for turn-by-turn direction text."""
import math

import pytest

from route_fixtures import step, route


def _step(type_, modifier=None, name="Main St"):
    from navbud.models import RouteStep
    return RouteStep.model_validate(step(type_, modifier, name=name))


@pytest.mark.parametrize("seconds,expected", [
    (0, "0 min"),
    (29, "0 min"),
    (30, "1 min"),
    (90, "2 min"),
    (3600, "1 hr"),
    (3660, "1 hr 1 min"),
    (5430, "1 hr 31 min"),
    (7170, "2 hr"),
])
def test_format_duration(seconds, expected):
    from navbud.core.directions import format_duration
    assert format_duration(seconds) == expected


def test_format_duration_non_finite_is_blank():
    from navbud.core.directions import format_duration
    assert format_duration(math.inf) == ""
    assert format_duration(math.nan) == ""


@pytest.mark.parametrize("type_,modifier,expected", [
    ("depart", None, "Start on Main St"),
    ("arrive", None, "Arrive at destination"),
    ("turn", "left", "Turn left onto Main St"),
    ("turn", None, "Turn onto Main St"),
    ("continue", "straight", "Continue on Main St"),
    ("merge", "slight right", "Merge slight right onto Main St"),
    ("roundabout", "right", "Enter roundabout toward Main St"),
    ("fork", "left", "Keep left to stay on Main St"),
    ("new name", None, "Continue onto Main St"),
    ("end of road", "right", "At the end of the road, turn right onto Main St"),
    ("on ramp", "left", "on ramp left Main St"),
])
def test_format_step_text(type_, modifier, expected):
    from navbud.core.directions import format_step_text
    assert format_step_text(_step(type_, modifier)) == expected


def test_unnamed_step_uses_road():
    from navbud.core.directions import format_step_text
    from navbud.models import RouteStep
    s = RouteStep.model_validate({"maneuver": {"type": "depart"}})
    assert format_step_text(s) == "Start on road"


def test_render_directions_flags_unprotected_steps():
    from navbud.core.directions import render_directions
    from navbud.models import Route
    r = Route.model_validate(route(
        [step("depart", name="Court St"), step("turn", "left", name="State St")],
        [step("turn", "left", name="Tremont St"), step("arrive", name="")],
    ))
    assert render_directions(r, {1}) == [
        "Start on Court St",
        "Unprotected left onto State St",
        "Turn left onto Tremont St",
        "Arrive at destination",
    ]


def test_render_directions_without_flags():
    from navbud.core.directions import render_directions
    from navbud.models import Route
    r = Route.model_validate(route([step("depart", name="Court St")]))
    assert render_directions(r) == ["Start on Court St"]
