import logging
import math
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from tripclean.errors import MalformedRecordError, SourceUnavailableError
from .point import TripPoint
from .route import Route

logger = logging.getLogger(__name__)


class RouteReader:
    """
    Reads raw `lat,lon,timestamp` records into a Route.
    No header row, no quoting. Blank lines are not records and are ignored.

    With strict=True the first malformed line aborts the whole load.
    With strict=False malformed lines are dropped and reported in `skipped`
    as (line_number, line, reason) tuples.
    """

    def __init__(self, sep: str = ',', strict: bool = True, encoding: str = 'utf-8-sig'):
        self.sep = sep
        self.strict = strict
        self.encoding = encoding
        self.skipped: List[Tuple[int, str, str]] = []

    def read(self, filepath: str | Path) -> Route:
        """
        Loads a route from a file. Raises SourceUnavailableError if it cannot be read.
        """
        path = Path(filepath)
        try:
            with open(path, mode='r', encoding=self.encoding) as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(path, str(e)) from e

        route = self.parse(lines)
        logger.info("Loaded %d points from %s", len(route), path)
        return route

    def parse(self, lines: Iterable[str]) -> Route:
        """
        Parses an iterable of raw lines, keeping input order.
        """
        self.skipped = []
        points = []
        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue
            try:
                points.append(self.parse_line(line, line_number))
            except MalformedRecordError as e:
                if self.strict:
                    raise
                logger.warning("Skipping line %d: %s", line_number, e.reason)
                self.skipped.append((line_number, line, e.reason))
        return Route(points=points)

    def parse_line(self, line: str, line_number: int = 1) -> TripPoint:
        fields = [f.strip() for f in line.split(self.sep)]
        if len(fields) < 3:
            raise MalformedRecordError(line_number, line, f"expected 3 fields, got {len(fields)}")
        # int() and float() accept digit separators, records do not
        for field in fields[:3]:
            if '_' in field:
                raise MalformedRecordError(line_number, line, f"unexpected '_' in field {field!r}")

        lat = self._parse_coordinate(fields[0], 'latitude', line, line_number)
        lon = self._parse_coordinate(fields[1], 'longitude', line, line_number)
        try:
            timestamp = int(fields[2])
        except ValueError:
            raise MalformedRecordError(line_number, line, f"timestamp {fields[2]!r} is not an integer") from None

        return TripPoint(lat=lat, lon=lon, timestamp=timestamp)

    @staticmethod
    def _parse_coordinate(value: str, name: str, line: str, line_number: int) -> float:
        try:
            number = float(value)
        except ValueError:
            raise MalformedRecordError(line_number, line, f"{name} {value!r} is not a number") from None
        if not math.isfinite(number):
            raise MalformedRecordError(line_number, line, f"{name} {value!r} is not finite")
        return number


def load_route(filepath: str | Path, strict: bool = True, reader: Optional[RouteReader] = None) -> Route:
    """
    Convenience wrapper: reads `filepath` with a fresh (or the given) RouteReader.
    """
    reader = reader or RouteReader(strict=strict)
    return reader.read(filepath)
