#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route)
#error handling for transport failures and empty answers
#parsing response JSON into your internal shape
#It should not contain marker rules or display formatting.

import logging
from typing import Any, Dict, List, Optional

import requests

from markers.models import GeoPoint
from routing.policy import RoutingPolicy, default_routing_policy

logger = logging.getLogger(__name__)


class RoutingError(Exception):
    """Base class for OSRM client errors."""
    pass


class RoutingUnavailableError(RoutingError):
    """OSRM could not be reached or answered with something unusable."""
    pass


class RoutingEmptyError(RoutingError):
    """OSRM answered but returned no candidate route."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) → OSRM (lon,lat)
    - Return normalized outputs

    """
    def __init__(self, policy: Optional[RoutingPolicy] = None, session: Optional[requests.Session] = None):
        self.policy = policy or default_routing_policy()
        self.policy.validate()
        self.base_url = self.policy.base_url.rstrip("/")
        self.session = session #optional shared session, plain requests.get otherwise

    #----------------
    # Internal helper methods for coordinate formatting, URL construction, error handling, etc.
    #----------------
    @staticmethod
    def format_coordinates(points: List[GeoPoint]) -> str:
        """Convert list of GeoPoints to OSRM format 'lon,lat;lon,lat;...'

        This is the only place the lat/lon order gets flipped.
        """
        return ";".join(f"{point.longitude},{point.latitude}" for point in points)

    def route_url(self, origin: GeoPoint, destination: GeoPoint) -> str:
        coordinates = self.format_coordinates([origin, destination])
        return f"{self.base_url}/route/v1/{self.policy.profile}/{coordinates}"

    def _get(self, url: str, params: Dict[str, str]) -> requests.Response:
        getter = self.session.get if self.session is not None else requests.get
        kwargs: Dict[str, Any] = {"params": params}
        if self.policy.timeout is not None:
            kwargs["timeout"] = self.policy.timeout
        return getter(url, **kwargs)

    #----------------
    # Public methods
    #----------------
    def compute_route(self, origin: GeoPoint, destination: GeoPoint) -> Dict[str, Any]:
        """
            calls the OSRM /route endpoint for origin -> destination and
            returns the first candidate route

            Returns:
                {
                    "geometry": str,   # encoded polyline
                    "distance": float, # in meters
                    "duration": float, # in seconds
                }

            Raises:
                RoutingUnavailableError: network failure or malformed payload
                RoutingEmptyError: OSRM found no route between the points
        """
        url = self.route_url(origin, destination)
        logger.debug("GET %s", url)

        try:
            response = self._get(url, self.policy.query_params())
        except requests.RequestException as exc:
            raise RoutingUnavailableError(f"OSRM request failed: {exc}") from exc

        try:
            data = response.json() #OSRM returns a JSON response with routes, each containing geometry, distance and duration
        except ValueError as exc:
            raise RoutingUnavailableError(
                f"OSRM returned a non-JSON body (HTTP {response.status_code})"
            ) from exc

        if not isinstance(data, dict):
            raise RoutingUnavailableError(f"OSRM returned an unexpected payload: {data!r}")

        routes = data.get("routes")
        #validating OSRM response. NoRoute comes back with code != Ok and no routes
        if not routes:
            if data.get("code") not in (None, "Ok", "NoRoute"):
                raise RoutingUnavailableError(f"OSRM error: {data.get('message', data.get('code'))}")
            raise RoutingEmptyError(f"OSRM returned no route: {data.get('message', 'empty routes')}")

        if not isinstance(routes, list):
            raise RoutingUnavailableError(f"OSRM routes is not a list: {routes!r}")

        route = routes[0] #take the first route (OSRM may return multiple routes)
        if not isinstance(route, dict) or not isinstance(route.get("geometry"), str):
            raise RoutingUnavailableError(f"OSRM route is malformed: {route!r}")

        try:
            #Normalize output to internal format
            return {
                "geometry": route["geometry"],
                "distance": float(route["distance"]),
                "duration": float(route["duration"]),
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingUnavailableError(f"OSRM route is missing fields: {exc}") from exc
