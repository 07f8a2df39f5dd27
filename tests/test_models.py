"""Tests for domain models and wire coordinate conversion."""
import pytest
from pydantic import ValidationError

from route_fixtures import step, route


class TestGeoPoint:
    def test_from_lon_lat_swaps_order(self):
        from navbud.models import GeoPoint
        p = GeoPoint.from_lon_lat([-71.0589, 42.3601])
        assert p.lat == 42.3601
        assert p.lon == -71.0589

    def test_is_immutable(self):
        from navbud.models import GeoPoint
        p = GeoPoint(lat=1.0, lon=2.0)
        with pytest.raises(ValidationError):
            p.lat = 3.0

    def test_lat_out_of_range(self):
        from navbud.models import GeoPoint
        with pytest.raises(ValidationError):
            GeoPoint(lat=91.0, lon=0.0)

    def test_lon_out_of_range(self):
        from navbud.models import GeoPoint
        with pytest.raises(ValidationError):
            GeoPoint(lat=0.0, lon=-181.0)

    def test_from_lon_lat_rejects_short_array(self):
        from navbud.models import GeoPoint
        with pytest.raises(ValueError):
            GeoPoint.from_lon_lat([1.0])


class TestRouteStep:
    def test_maneuver_location_is_unswapped(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate(step(location=[-71.0, 42.0]))
        assert s.maneuver.location.lat == 42.0
        assert s.maneuver.location.lon == -71.0

    def test_intersection_location_is_unswapped(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate(step(intersection=[-71.5, 42.5]))
        assert s.intersections[0].location.lat == 42.5
        assert s.intersections[0].location.lon == -71.5

    def test_missing_modifier_becomes_empty_string(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate(step(type_="depart"))
        assert s.maneuver.modifier == ""

    def test_null_modifier_becomes_empty_string(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate({"maneuver": {"type": "turn", "modifier": None}})
        assert s.maneuver.modifier == ""

    def test_missing_name_defaults_to_road(self):
        from navbud.models import RouteStep
        assert RouteStep.model_validate({"maneuver": {"type": "turn"}}).name == "road"
        assert RouteStep.model_validate({"maneuver": {"type": "turn"}, "name": ""}).name == "road"
        assert RouteStep.model_validate({"maneuver": {"type": "turn"}, "name": None}).name == "road"

    def test_null_intersections_become_empty(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate({"maneuver": {"type": "turn"}, "intersections": None})
        assert s.intersections == []

    def test_unknown_wire_fields_ignored(self):
        from navbud.models import RouteStep
        s = RouteStep.model_validate({
            "maneuver": {"type": "turn", "modifier": "left", "bearing_after": 270},
            "mode": "driving",
            "geometry": {"type": "LineString", "coordinates": []},
        })
        assert s.maneuver.modifier == "left"


class TestRoute:
    def test_steps_flatten_across_legs(self):
        from navbud.models import Route
        r = Route.model_validate(route(
            [step(name="A"), step(name="B")],
            [step(name="C")],
        ))
        assert [s.name for s in r.steps()] == ["A", "B", "C"]

    def test_geojson_geometry_is_unswapped(self):
        from navbud.models import Route
        r = Route.model_validate(route([step()], geometry={
            "type": "LineString", "coordinates": [[-71.0, 42.0], [-71.1, 42.1]],
        }))
        assert [(p.lat, p.lon) for p in r.geometry] == [(42.0, -71.0), (42.1, -71.1)]

    def test_dumped_route_revalidates(self):
        from navbud.models import Route
        r = Route.model_validate(route([step(location=[-71.0, 42.0])]))
        again = Route.model_validate(r.model_dump())
        assert again == r


class TestPlace:
    def test_point(self):
        from navbud.models import Place
        p = Place(lat=42.0, lon=-71.0, display_name="Boston")
        assert (p.point.lat, p.point.lon) == (42.0, -71.0)
