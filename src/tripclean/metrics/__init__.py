from .rejection import calculate_rejection_ratio, calculate_retention_ratio
from .speed import calculate_speed_stats, speed_profile

__all__ = [
    "calculate_rejection_ratio",
    "calculate_retention_ratio",
    "calculate_speed_stats",
    "speed_profile",
]
