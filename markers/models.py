"""
Purpose: Domain models for user-placed map markers.
What it does:
- GeoPoint (latitude, longitude), immutable, compared by value
- Marker (index, point), a positional view over the store

Rule: No HTTP calls, no route logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

#internal coordinate type : (lat, lon)
LatLon = Tuple[float, float]


@dataclass(frozen=True)
class GeoPoint:
    """
    A latitude/longitude pair. Latitude first everywhere inside the app;
    only the OSRM client flips it to (lon, lat) for the wire.
    """
    latitude: float
    longitude: float

    @classmethod
    def from_latlon(cls, coordinates: LatLon) -> GeoPoint:
        lat, lon = coordinates
        return cls(latitude=float(lat), longitude=float(lon))

    @classmethod
    def parse(cls, text: str) -> GeoPoint:
        """
        Parse "lat,lon" (as typed on the command line).

        Raises:
            ValueError: if the text is not two comma separated numbers or
                the values fall outside the valid lat/lon ranges.
        """
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lon', got {text!r}")

        lat, lon = float(parts[0]), float(parts[1])
        if not -90.0 <= lat <= 90.0:
            raise ValueError(f"Latitude out of range: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise ValueError(f"Longitude out of range: {lon}")
        return cls(latitude=lat, longitude=lon)

    def as_latlon(self) -> LatLon:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class Marker:
    """
    A GeoPoint tagged with its current position in the store.

    The index is NOT a stable identifier: removing an earlier marker shifts
    every later index down by one. If markers ever need a stable identity
    (animations, persistence) give them a uuid instead of relying on position.
    """
    index: int
    point: GeoPoint

    @property
    def label(self) -> str:
        #popup text shown next to the "Remove Marker" button on the map
        return f"Marker at {self.point.latitude:.4f}, {self.point.longitude:.4f}"
