from typing import Dict, List, Optional

import numpy as np

from tripclean.config import EARTH_RADIUS_KM, SECONDS_PER_HOUR
from tripclean.core.point import TripPoint


def speed_profile(points: List[TripPoint]) -> np.ndarray:
    """
    Implied speeds in km/h between each pair of consecutive points.

    Args:
        points: Points in observation order (e.g. Route.valid_points).

    Returns:
        Array of length len(points) - 1. Non-positive elapsed time gives inf.
    """
    if len(points) < 2:
        return np.empty(0)

    lat = np.radians([p.lat for p in points])
    lon = np.radians([p.lon for p in points])
    t = np.array([p.timestamp for p in points], dtype=float)

    d_lat = np.diff(lat)
    d_lon = np.diff(lon)
    # Same haversine as modules.cleaning.speed_filter.haversine_distance; keep them in sync
    a = np.sin(d_lat / 2) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    distance_km = EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    elapsed = np.diff(t)
    speeds = np.full(elapsed.shape, np.inf)
    positive = elapsed > 0
    speeds[positive] = distance_km[positive] / (elapsed[positive] / SECONDS_PER_HOUR)
    return speeds


def calculate_speed_stats(points: List[TripPoint], speed_limit: Optional[float] = None) -> Dict[str, float | int | List[float]]:
    """
    Summarises the implied speed profile of a point sequence.

    Metrics:
    - average_speed: mean of the finite speeds.
    - max_speed: largest finite speed.
    - over_limit: number of legs faster than speed_limit (inf legs included), 0 if no limit.

    Returns:
        Dictionary containing 'average_speed', 'max_speed', 'over_limit' and 'speeds'.
    """
    speeds = speed_profile(points)
    if speeds.size == 0:
        return {'average_speed': 0.0, 'max_speed': 0.0, 'over_limit': 0, 'speeds': []}

    finite = speeds[np.isfinite(speeds)]
    over_limit = int(np.count_nonzero(speeds > speed_limit)) if speed_limit is not None else 0

    return {
        'average_speed': float(finite.mean()) if finite.size else 0.0,
        'max_speed': float(finite.max()) if finite.size else 0.0,
        'over_limit': over_limit,
        'speeds': speeds.tolist(),
    }
