"""GPX export of an analysed route."""

import gpxpy.gpx

from navbud.core.models import TurnAnalysis
from navbud.models import Route


def build_route_gpx(route: Route, analysis: TurnAnalysis, name: str = "navbud route") -> gpxpy.gpx.GPX:
    """Route geometry as a track, plus one waypoint per unprotected left."""
    gpx = gpxpy.gpx.GPX()
    gpx.name = name

    track = gpxpy.gpx.GPXTrack(name=name)
    segment = gpxpy.gpx.GPXTrackSegment()
    for pt in route.geometry:
        segment.points.append(gpxpy.gpx.GPXTrackPoint(latitude=pt.lat, longitude=pt.lon))
    track.segments.append(segment)
    gpx.tracks.append(track)

    for cand in analysis.unprotected_candidates():
        gpx.waypoints.append(gpxpy.gpx.GPXWaypoint(
            latitude=cand.point.lat,
            longitude=cand.point.lon,
            name=f"Unprotected left onto {cand.road_name}",
            description=f"Step {cand.step_index + 1}",
            symbol="Danger Area",
        ))
    return gpx


def export_gpx(route: Route, analysis: TurnAnalysis, output_path: str, name: str = "navbud route") -> dict:
    gpx = build_route_gpx(route, analysis, name=name)
    with open(output_path, "w") as f:
        f.write(gpx.to_xml())
    return {
        "success": True,
        "track_points": len(route.geometry),
        "waypoints": len(gpx.waypoints),
    }
