import threading
from typing import List, Optional, Tuple

import polyline

from markers.models import GeoPoint
from routing.route_service import Route, decode_geometry

TEST_BASE_URL = "https://osrm.test"


def make_route(origin: GeoPoint, destination: GeoPoint, distance=1000.0, duration=60.0) -> Route:
    encoded = polyline.encode([origin.as_latlon(), destination.as_latlon()], 5)
    return Route(path=decode_geometry(encoded), distance_meters=distance, duration_seconds=duration)


def osrm_payload(points, distance, duration, code="Ok"):
    return {
        "code": code,
        "routes": [
            {
                "geometry": polyline.encode([p.as_latlon() for p in points], 5),
                "distance": distance,
                "duration": duration,
            }
        ],
    }


class FakeResolver:
    """
    Records every (origin, destination) it is asked for.
    Answers with a straight two-point route unless told to fail.
    The n-th call reports n km so tests can tell answers apart.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[Tuple[GeoPoint, GeoPoint]] = []
        self._lock = threading.Lock()

    def __call__(self, origin: GeoPoint, destination: GeoPoint) -> Optional[Route]:
        with self._lock:
            self.calls.append((origin, destination))
            distance = 1000.0 * len(self.calls)
        if self.fail:
            return None
        return make_route(origin, destination, distance=distance)
