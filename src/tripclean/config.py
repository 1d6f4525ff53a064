"""Defaults and run configuration for route cleaning."""

import logging
from dataclasses import dataclass

DEFAULT_SPEED_LIMIT_KMH = 80.0
EARTH_RADIUS_KM = 6367.0
SECONDS_PER_HOUR = 3600


@dataclass
class CleanerConfig:
    """Strongly-typed settings for one load -> clean -> export run."""

    speed_limit: float = DEFAULT_SPEED_LIMIT_KMH
    strict: bool = True
    log_level: int = logging.WARNING
