from .speed_filter import RouteCleaner, haversine_distance, implied_speed

__all__ = ["RouteCleaner", "haversine_distance", "implied_speed"]
