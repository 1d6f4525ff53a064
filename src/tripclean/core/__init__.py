from .point import TripPoint
from .route import Route
from .stream import RouteReader, load_route

__all__ = ["TripPoint", "Route", "RouteReader", "load_route"]
