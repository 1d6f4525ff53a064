import logging
import math
from typing import List, Optional

from tripclean.config import DEFAULT_SPEED_LIMIT_KMH, EARTH_RADIUS_KM, SECONDS_PER_HOUR
from tripclean.core.point import TripPoint
from tripclean.core.route import Route

logger = logging.getLogger(__name__)


def haversine_distance(p1: TripPoint, p2: TripPoint) -> float:
    """
    Great-circle distance between two points in kilometers (haversine, R = 6367 km).
    """
    d_lat = math.radians(p2.lat - p1.lat)
    d_lon = math.radians(p2.lon - p1.lon)
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push `a` a hair past 1 for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def implied_speed(distance_km: float, elapsed_seconds: float) -> float:
    """
    Average speed in km/h needed to cover `distance_km` in `elapsed_seconds`.

    Zero or negative elapsed time has no physical meaning for consecutive fixes
    and yields math.inf, which exceeds any finite limit.
    """
    if elapsed_seconds <= 0:
        return math.inf
    return distance_km / (elapsed_seconds / SECONDS_PER_HOUR)


class RouteCleaner:
    """
    Removes physically implausible fixes from a trip.

    A single forward pass compares every point with the last accepted point and
    rejects it when the implied speed exceeds `speed_limit`. Rejected points never
    become the reference, so a run of bogus fixes is measured against the last
    genuine one. The first point is always accepted.
    """

    def __init__(self, speed_limit: float = DEFAULT_SPEED_LIMIT_KMH):
        """
        Args:
            speed_limit: Maximum plausible speed in km/h between two accepted points.
        """
        self.speed_limit = speed_limit

    @property
    def speed_limit(self) -> float:
        return self._speed_limit

    @speed_limit.setter
    def speed_limit(self, value: float):
        try:
            ok = math.isfinite(value) and value > 0
        except TypeError:
            ok = False
        if not ok:
            raise ValueError(f"Speed limit must be a positive finite number, got {value!r}")
        self._speed_limit = float(value)

    def clean(self, points: Route | List[TripPoint]) -> Route | List[TripPoint]:
        """
        Marks implausible points invalid in place and returns the same sequence.
        Flags are recomputed from scratch, so cleaning twice gives the same result.
        """
        last_accepted: Optional[TripPoint] = None
        rejected = 0

        for point in points:
            if last_accepted is None:
                point.valid = True
                last_accepted = point
                continue

            elapsed = point.timestamp - last_accepted.timestamp
            distance = haversine_distance(last_accepted, point)
            speed = implied_speed(distance, elapsed)

            # NaN speeds (from NaN coordinates) fail this check and are rejected
            if not speed <= self.speed_limit:
                if elapsed <= 0:
                    logger.debug("Rejecting point at t=%s: non-positive elapsed time %s s", point.timestamp, elapsed)
                point.valid = False
                rejected += 1
                continue

            point.valid = True
            last_accepted = point

        logger.info("Cleaned route: %d kept, %d rejected (limit %.1f km/h)",
                    len(points) - rejected, rejected, self.speed_limit)
        return points
