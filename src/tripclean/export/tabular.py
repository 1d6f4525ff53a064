import csv
import io
from pathlib import Path

import numpy as np
import pandas as pd

from tripclean.core.route import Route


def _format_coordinate(value: float) -> str:
    return np.format_float_positional(value, trim='0')


def _write_rows(route: Route, f) -> int:
    writer = csv.writer(f, lineterminator='\n')
    count = 0
    for p in route.valid_points:
        writer.writerow([_format_coordinate(p.lon), _format_coordinate(p.lat), p.timestamp])
        count += 1
    return count


def to_csv(route: Route) -> str:
    """
    Renders the valid points as `lon,lat,timestamp` lines. Invalid points are omitted.
    """
    buffer = io.StringIO()
    _write_rows(route, buffer)
    return buffer.getvalue()


def write_csv(route: Route, filepath: str | Path) -> int:
    """
    Writes the tabular export to a file and returns the number of rows written.
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        return _write_rows(route, f)


def to_dataframe(route: Route) -> pd.DataFrame:
    """
    All points, valid or not, as a DataFrame with columns lat, lon, timestamp, valid.
    """
    return pd.DataFrame(
        [(p.lat, p.lon, p.timestamp, p.valid) for p in route.points],
        columns=['lat', 'lon', 'timestamp', 'valid'],
    )
