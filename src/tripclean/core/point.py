from dataclasses import dataclass, FrozenInstanceError

_POSITION_FIELDS = frozenset(("lat", "lon", "timestamp"))


@dataclass
class TripPoint:
    """
    Represents a single recorded GPS fix (lat, lon, t) of a trip.
    Position and time are write-once; only `valid` may change after construction,
    which is what the cleaning pass flips for implausible points.
    """
    lat: float
    lon: float
    timestamp: int
    valid: bool = True

    def __setattr__(self, name, value):
        if name in _POSITION_FIELDS and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    @property
    def tuple(self):
        return (self.lat, self.lon, self.timestamp)
