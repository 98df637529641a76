"""
Purpose: The read-only projection the map/page renders.
What it does:
Turns a Route into the polyline path plus the two result strings:
"Distance: X.XX km" and "Time: X.XX minutes".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from markers.models import GeoPoint
from routing.route_service import Route

INSUFFICIENT_MARKERS_NOTICE = "Please add at least two markers."


def format_distance(distance_meters: float) -> str:
    return f"Distance: {distance_meters / 1000:.2f} km"


def format_duration(duration_seconds: float) -> str:
    return f"Time: {duration_seconds / 60:.2f} minutes"


@dataclass(frozen=True)
class RouteDisplay:
    path: Tuple[GeoPoint, ...]
    distance_text: str
    time_text: str

    @classmethod
    def from_route(cls, route: Route) -> RouteDisplay:
        return cls(
            path=route.path,
            distance_text=format_distance(route.distance_meters),
            time_text=format_duration(route.duration_seconds),
        )
