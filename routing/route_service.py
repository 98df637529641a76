#Purpose: Route computation for downstream use.
#Returns the "route" information needed by:
#map display / polyline geometry (overview=full)
#distance and duration for the result panel
#Uses OSRM /route through OSRMClient, decodes the polyline geometry.
#Any routing failure collapses to None here so callers never crash on it.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import polyline

from markers.models import GeoPoint
from routing.osrm_client import OSRMClient, RoutingError

logger = logging.getLogger(__name__)

POLYLINE_PRECISION = 5


@dataclass(frozen=True)
class Route:
    """
    Decoded route between two points.
    path is in travel order, latitude first.
    """
    path: Tuple[GeoPoint, ...]
    distance_meters: float
    duration_seconds: float

    def latlons(self) -> List[Tuple[float, float]]:
        return [point.as_latlon() for point in self.path]


def decode_geometry(encoded: str, precision: int = POLYLINE_PRECISION) -> Tuple[GeoPoint, ...]:
    """
    Decode an encoded polyline into GeoPoints, preserving path order.

    polyline.decode already yields (lat, lon) pairs, which matches the
    internal order, so no swap happens here.
    """
    return tuple(GeoPoint.from_latlon(pair) for pair in polyline.decode(encoded, precision))


class RouteResolver:
    """
    Turns two GeoPoints into a Route, or None when routing fails.

    No retries, no caching: every call is one request.
    """

    def __init__(self, client: Optional[OSRMClient] = None):
        self.client = client or OSRMClient()

    def resolve(self, origin: GeoPoint, destination: GeoPoint) -> Optional[Route]:
        try:
            payload = self.client.compute_route(origin, destination)
        except RoutingError as exc:
            logger.warning("Route %s -> %s unavailable: %s", origin, destination, exc)
            return None

        try:
            path = decode_geometry(payload["geometry"], self.client.policy.precision)
        except (IndexError, TypeError, ValueError) as exc:
            #truncated / garbage geometry strings blow up inside the decoder
            logger.warning("Route %s -> %s has undecodable geometry: %s", origin, destination, exc)
            return None

        route = Route(
            path=path,
            distance_meters=payload["distance"],
            duration_seconds=payload["duration"],
        )
        logger.info(
            "Route resolved: %.0f m, %.0f s, %d points",
            route.distance_meters,
            route.duration_seconds,
            len(route.path),
        )
        return route

    __call__ = resolve
