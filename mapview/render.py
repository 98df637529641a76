"""
Purpose: Hand markers and the route overlay to the mapping library.
What it does:
Builds a folium (Leaflet) map with one marker per point, a popup label per
marker and the decoded route drawn as a blue polyline, and saves it as HTML.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import folium

from markers.models import Marker
from mapview.display import RouteDisplay

logger = logging.getLogger(__name__)

# the page opens over central London when there is nothing to centre on
DEFAULT_CENTER: Tuple[float, float] = (51.505, -0.09)
DEFAULT_ZOOM = 13

ROUTE_COLOR = "blue"
ROUTE_WEIGHT = 4


def build_map(
    markers: List[Marker],
    display: Optional[RouteDisplay] = None,
    zoom_start: int = DEFAULT_ZOOM,
) -> folium.Map:
    """
    Build the map for the current markers and route.

    Args:
        markers: markers in store order (see RouteController.markers())
        display: current route display, None when there is no route
        zoom_start: initial zoom level

    Returns:
        folium.Map ready to save or embed
    """
    center = markers[0].point.as_latlon() if markers else DEFAULT_CENTER
    fmap = folium.Map(location=list(center), zoom_start=zoom_start)

    for marker in markers:
        folium.Marker(
            location=list(marker.point.as_latlon()),
            popup=folium.Popup(marker.label),
            tooltip=f"#{marker.index}",
        ).add_to(fmap)

    # only draw a line when there is one to draw
    if display is not None and display.path:
        folium.PolyLine(
            [list(point.as_latlon()) for point in display.path],
            color=ROUTE_COLOR,
            weight=ROUTE_WEIGHT,
            tooltip=f"{display.distance_text} / {display.time_text}",
        ).add_to(fmap)

    return fmap


def export_html(fmap: folium.Map, output_path: Union[str, Path]) -> Path:
    """Save the map as a standalone HTML file and return its path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fmap.save(str(path))
    logger.info("Map exported to %s", path)
    return path
