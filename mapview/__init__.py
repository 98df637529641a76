"""Marker route planner - markers on a map, driving route between the first two."""

from mapview.controller import InsufficientMarkersError, RouteController
from mapview.display import RouteDisplay, format_distance, format_duration
from mapview.route_state import RouteState, RouteStateError

__all__ = [
    "RouteController",
    "InsufficientMarkersError",
    "RouteDisplay",
    "format_distance",
    "format_duration",
    "RouteState",
    "RouteStateError",
]
