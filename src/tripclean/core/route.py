from dataclasses import dataclass, field
from typing import Iterator, List

from .point import TripPoint


@dataclass
class Route:
    """
    The ordered sequence of trip points for one trip.
    Insertion order is the order of observation.
    """
    points: List[TripPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TripPoint]:
        return iter(self.points)

    @property
    def start_time(self) -> int:
        if not self.points:
            raise ValueError("Route is empty")
        return self.points[0].timestamp

    @property
    def end_time(self) -> int:
        if not self.points:
            raise ValueError("Route is empty")
        return self.points[-1].timestamp

    @property
    def valid_points(self) -> List[TripPoint]:
        return [p for p in self.points if p.valid]

    @property
    def invalid_points(self) -> List[TripPoint]:
        return [p for p in self.points if not p.valid]
