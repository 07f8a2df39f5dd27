"""Tests for the OSRM routing client."""
import pytest
from unittest.mock import patch, AsyncMock, MagicMock
import httpx

from route_fixtures import step, route


def _places():
    from navbud.models import Place
    return (
        Place(lat=42.3601, lon=-71.0589, display_name="Start"),
        Place(lat=42.3505, lon=-71.0760, display_name="End"),
    )


def _client_returning(get):
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.get = get
    return mock_client


def _response(payload):
    mock_resp = MagicMock()
    mock_resp.json = MagicMock(return_value=payload)
    return mock_resp


def test_route_url_uses_lon_lat_order():
    from navbud.core.routing import build_route_url
    start, end = _places()
    url = build_route_url(start, end)
    assert url.endswith("/route/v1/driving/-71.0589,42.3601;-71.076,42.3505")


@pytest.mark.anyio
async def test_get_route_parses_first_route():
    from navbud.core.routing import get_route

    payload = {"code": "Ok", "routes": [
        route([step("depart", location=[-71.0589, 42.3601]), step("turn", "left", intersection=[-71.06, 42.36])]),
        route([step("depart", location=[-71.0589, 42.3601])]),
    ]}
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = _client_returning(AsyncMock(return_value=_response(payload)))
        mock_client_cls.return_value = mock_client
        result = await get_route(*_places())

    assert len(result.steps()) == 2
    assert result.steps()[1].intersections[0].location.lat == 42.36
    params = mock_client.get.call_args.kwargs["params"]
    assert params == {"steps": "true", "geometries": "geojson", "overview": "full"}


@pytest.mark.anyio
async def test_get_route_no_routes_raises():
    from navbud.core.routing import get_route, RoutingError

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _client_returning(
            AsyncMock(return_value=_response({"code": "Ok", "routes": []}))
        )
        with pytest.raises(RoutingError, match="No route returned from OSRM"):
            await get_route(*_places())


@pytest.mark.anyio
async def test_get_route_error_code_raises_with_message():
    from navbud.core.routing import get_route, RoutingError

    payload = {"code": "NoRoute", "message": "Impossible route between points"}
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _client_returning(AsyncMock(return_value=_response(payload)))
        with pytest.raises(RoutingError, match="Impossible route"):
            await get_route(*_places())


@pytest.mark.anyio
async def test_get_route_transport_error_raises():
    from navbud.core.routing import get_route, RoutingError

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _client_returning(
            AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        with pytest.raises(RoutingError, match="routing service"):
            await get_route(*_places())


@pytest.mark.anyio
@pytest.mark.parametrize("geometry", [
    {"type": "LineString", "coordinates": [[-71.0, 95.0]]},
    {"type": "LineString", "coordinates": [[-71.0]]},
])
async def test_get_route_malformed_payload_raises_routing_error(geometry):
    from navbud.core.routing import get_route, RoutingError

    payload = {"code": "Ok", "routes": [{"legs": [], "geometry": geometry}]}
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client_cls.return_value = _client_returning(AsyncMock(return_value=_response(payload)))
        with pytest.raises(RoutingError, match="Malformed route from OSRM"):
            await get_route(*_places())
