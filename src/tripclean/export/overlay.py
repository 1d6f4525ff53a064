from pathlib import Path
from typing import Tuple

import folium

from tripclean.core.route import Route

PATH_COLOR = '#FF0000'


def _center(route: Route) -> Tuple[float, float]:
    points = route.valid_points
    if not points:
        return (0.0, 0.0)
    lat = sum(p.lat for p in points) / len(points)
    lon = sum(p.lon for p in points) / len(points)
    return (lat, lon)


def render_map(route: Route, zoom_start: int = 13) -> folium.Map:
    """
    Builds a folium map with the cleaned route drawn as a single polyline.

    Only valid points are drawn, in route order, so the line connects the
    accepted fixes and skips everything the cleaner rejected.
    """
    m = folium.Map(location=list(_center(route)), zoom_start=zoom_start)

    coords = [(p.lat, p.lon) for p in route.valid_points]
    if not coords:
        return m

    folium.PolyLine(
        locations=coords,
        color=PATH_COLOR,
        weight=2,
        opacity=1.0,
        tooltip="Cleaned route",
    ).add_to(m)

    folium.Marker(location=coords[0], popup="Start", icon=folium.Icon(color="green")).add_to(m)
    if len(coords) > 1:
        folium.Marker(location=coords[-1], popup="End", icon=folium.Icon(color="red")).add_to(m)

    return m


def to_html(route: Route, zoom_start: int = 13) -> str:
    """Self-contained HTML document of the map overlay."""
    return render_map(route, zoom_start=zoom_start).get_root().render()


def save_map(route: Route, filepath: str | Path, zoom_start: int = 13) -> None:
    render_map(route, zoom_start=zoom_start).save(str(filepath))
