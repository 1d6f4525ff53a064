from tripclean.core import Route, RouteReader, TripPoint, load_route
from tripclean.errors import MalformedRecordError, SourceUnavailableError, TripCleanError
from tripclean.modules.cleaning import RouteCleaner, haversine_distance, implied_speed

__version__ = "0.1.0"

__all__ = [
    "TripPoint",
    "Route",
    "RouteReader",
    "load_route",
    "RouteCleaner",
    "haversine_distance",
    "implied_speed",
    "TripCleanError",
    "SourceUnavailableError",
    "MalformedRecordError",
]
