import threading
from unittest.mock import Mock, patch

import pytest

from markers.models import GeoPoint
from markers.store import MarkerIndexError
from mapview.controller import InsufficientMarkersError, RouteController
from mapview.display import INSUFFICIENT_MARKERS_NOTICE
from mapview.route_state import RouteState
from routing.osrm_client import OSRMClient
from routing.route_service import RouteResolver

from helpers import TEST_BASE_URL, FakeResolver, make_route, osrm_payload


@pytest.fixture
def controller(fake_resolver):
    with RouteController(resolver=fake_resolver) as controller:
        yield controller


def test_starts_idle(controller):
    assert controller.state == RouteState.IDLE
    assert controller.display is None
    assert controller.markers() == []


def test_single_marker_does_not_route(controller, fake_resolver, london):
    assert controller.add(london) is None

    assert controller.state == RouteState.IDLE
    assert fake_resolver.calls == []


def test_second_marker_resolves_first_two(controller, fake_resolver, london, paris):
    controller.add(london)
    future = controller.add(paris)

    route = future.result()

    assert fake_resolver.calls == [(london, paris)]
    assert controller.state == RouteState.ROUTE_READY
    assert controller.display.path == route.path
    assert controller.display.distance_text == "Distance: 1.00 km"


def test_third_marker_does_not_reroute(controller, fake_resolver, london, paris, brussels):
    controller.add(london)
    controller.add(paris).result()
    display = controller.display

    assert controller.add(brussels) is None

    assert fake_resolver.calls == [(london, paris)]
    assert controller.state == RouteState.ROUTE_READY
    assert controller.display is display


@pytest.mark.parametrize("index, expected_pair", [(0, ("paris", "brussels")), (1, ("london", "brussels"))])
def test_removing_first_or_second_reroutes_once(
    controller, fake_resolver, london, paris, brussels, amsterdam, index, expected_pair
):
    points = {"london": london, "paris": paris, "brussels": brussels}
    for point in (london, paris, brussels, amsterdam):
        controller.add(point)
    calls_before = len(fake_resolver.calls)

    future = controller.remove_at(index)
    assert future is not None
    future.result()

    assert len(fake_resolver.calls) == calls_before + 1
    assert fake_resolver.calls[-1] == (points[expected_pair[0]], points[expected_pair[1]])
    assert controller.state == RouteState.ROUTE_READY


def test_removing_later_marker_leaves_route_alone(controller, fake_resolver, london, paris, brussels):
    controller.add(london)
    controller.add(paris).result()
    controller.add(brussels)
    display = controller.display

    assert controller.remove_at(2) is None

    assert len(fake_resolver.calls) == 1
    assert controller.display is display
    assert controller.state == RouteState.ROUTE_READY


def test_removing_down_to_one_clears_immediately(controller, london, paris):
    controller.add(london)
    controller.add(paris).result()
    assert controller.display is not None

    assert controller.remove_at(0) is None
    assert controller.display is None
    assert controller.state == RouteState.IDLE

    controller.remove_at(0)
    assert len(controller.store) == 0
    assert controller.display is None


def test_invalid_removal_fails_fast(controller, london):
    controller.add(london)

    with pytest.raises(MarkerIndexError):
        controller.remove_at(5)
    assert len(controller.store) == 1


def test_calculate_needs_two_markers(controller, fake_resolver, london):
    with pytest.raises(InsufficientMarkersError) as excinfo:
        controller.calculate()
    assert excinfo.value.notice == INSUFFICIENT_MARKERS_NOTICE

    controller.add(london)
    with pytest.raises(InsufficientMarkersError):
        controller.calculate()

    assert controller.state == RouteState.IDLE
    assert fake_resolver.calls == []


def test_calculate_forces_reresolve(controller, fake_resolver, london, paris):
    controller.add(london)
    controller.add(paris).result()

    controller.calculate().result()

    assert fake_resolver.calls == [(london, paris), (london, paris)]
    assert controller.display.distance_text == "Distance: 2.00 km"


def test_failed_resolution_after_mutation_leaves_nothing(london, paris):
    resolver = FakeResolver(fail=True)
    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        assert controller.add(paris).result() is None

        assert controller.state == RouteState.ROUTE_FAILED
        assert controller.display is None


def test_failed_calculate_keeps_previous_route(controller, fake_resolver, london, paris):
    controller.add(london)
    controller.add(paris).result()
    display = controller.display

    fake_resolver.fail = True
    controller.calculate().result()

    assert controller.state == RouteState.ROUTE_FAILED
    assert controller.display is display


def test_failed_reroute_after_removal_clears_previous_route(controller, fake_resolver, london, paris, brussels):
    controller.add(london)
    controller.add(paris).result()
    controller.add(brussels)

    fake_resolver.fail = True
    controller.remove_at(0).result()

    assert controller.state == RouteState.ROUTE_FAILED
    assert controller.display is None


def test_stale_answer_does_not_overwrite_newer_route(london, paris, brussels):
    release = threading.Event()
    first = make_route(london, paris, distance=111000)
    second = make_route(paris, brussels, distance=222000)

    def resolver(origin, destination):
        if origin == london:
            release.wait(timeout=5)
            return first
        return second

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        stale = controller.add(paris)
        controller.add(brussels)
        fresh = controller.remove_at(0)

        release.set()
        assert stale.result() is first
        assert fresh.result() is second

        assert controller.display.distance_text == "Distance: 222.00 km"
        assert controller.state == RouteState.ROUTE_READY


def test_stale_answer_after_clear_is_dropped(london, paris):
    release = threading.Event()

    def resolver(origin, destination):
        release.wait(timeout=5)
        return make_route(origin, destination)

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        pending = controller.add(paris)
        controller.remove_at(1)

        release.set()
        pending.result()

        assert controller.display is None
        assert controller.state == RouteState.IDLE


def test_injected_executor_is_not_shut_down(fake_resolver, london):
    executor = Mock()
    controller = RouteController(resolver=fake_resolver, executor=executor)
    controller.add(london)
    controller.close()

    executor.shutdown.assert_not_called()


@patch("routing.osrm_client.requests.get")
def test_london_to_paris(mock_get, policy, london, paris):
    mock_get.return_value = Mock(
        status_code=200,
        json=Mock(return_value=osrm_payload([london, GeoPoint(50.9, 1.8), paris], 343000, 12600)),
    )
    resolver = RouteResolver(OSRMClient(policy))

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        controller.add(paris).result()

        url = mock_get.call_args.args[0]
        assert url == f"{TEST_BASE_URL}/route/v1/driving/-0.1278,51.5074;2.3522,48.8566"
        assert controller.display.distance_text == "Distance: 343.00 km"
        assert controller.display.time_text == "Time: 210.00 minutes"
        assert controller.display.path[0] == london
        assert controller.display.path[-1] == paris


@patch("routing.osrm_client.requests.get")
def test_empty_routes_after_mutation(mock_get, policy, london, paris):
    mock_get.return_value = Mock(status_code=200, json=Mock(return_value={"code": "Ok", "routes": []}))
    resolver = RouteResolver(OSRMClient(policy))

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        assert controller.add(paris).result() is None

        assert controller.display is None
        assert controller.state == RouteState.ROUTE_FAILED


def test_crashing_resolver_ends_in_failed_state(london, paris, caplog):
    def resolver(origin, destination):
        raise RuntimeError("resolver bug")

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        with caplog.at_level("ERROR", logger="mapview.controller"):
            future = controller.add(paris)
            with pytest.raises(RuntimeError):
                future.result()

        assert controller.state == RouteState.ROUTE_FAILED
        assert controller.display is None
    assert "Resolver crashed" in caplog.text


@pytest.mark.parametrize("routes", [{"a": 1}, 5, True])
@patch("routing.osrm_client.requests.get")
def test_malformed_routes_end_in_failed_state(mock_get, routes, policy, london, paris):
    mock_get.return_value = Mock(status_code=200, json=Mock(return_value={"code": "Ok", "routes": routes}))
    resolver = RouteResolver(OSRMClient(policy))

    with RouteController(resolver=resolver) as controller:
        controller.add(london)
        assert controller.add(paris).result() is None

        assert controller.state == RouteState.ROUTE_FAILED
        assert controller.display is None
