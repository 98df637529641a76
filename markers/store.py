"""
Purpose: Ordered in-memory store of user-placed markers.
What it does:
- append a point per map click
- remove a point by its current index (later indices shift down by one)
- expose the first two points, the only ones routing cares about

Rule: The store never talks to the routing service. Deciding whether a
mutation needs a new route is the controller's job.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from markers.models import GeoPoint, Marker

logger = logging.getLogger(__name__)


class MarkerIndexError(IndexError):
    """Raised when a removal index does not address an existing marker."""
    pass


class MarkerStore:
    """
    Insertion-ordered sequence of GeoPoints.
    Duplicates are allowed, nothing is deduplicated.
    """

    def __init__(self, points: Optional[List[GeoPoint]] = None):
        self._points: List[GeoPoint] = list(points or [])

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(list(self._points))

    def __getitem__(self, index: int) -> GeoPoint:
        return self._points[index]

    def add(self, point: GeoPoint) -> None:
        """Append a point at the end. Always succeeds."""
        self._points.append(point)
        logger.debug("Marker %d added at %s", len(self._points) - 1, point)

    def remove_at(self, index: int) -> GeoPoint:
        """
        Remove the marker at `index` and return its point.

        Negative indices are not accepted: the UI only ever hands out
        positions in 0..len-1, anything else is a caller bug.

        Raises:
            MarkerIndexError: if index is outside the current bounds.
        """
        if not 0 <= index < len(self._points):
            raise MarkerIndexError(
                f"Marker index {index} out of range for {len(self._points)} markers"
            )
        point = self._points.pop(index)
        logger.debug("Marker %d removed (%s), %d left", index, point, len(self._points))
        return point

    def markers(self) -> List[Marker]:
        """Snapshot of the markers with their current indices."""
        return [Marker(index=index, point=point) for index, point in enumerate(self._points)]

    def first_pair(self) -> Optional[Tuple[GeoPoint, GeoPoint]]:
        """(origin, destination) used for routing, or None with fewer than two markers."""
        if len(self._points) < 2:
            return None
        return (self._points[0], self._points[1])
