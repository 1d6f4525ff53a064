from tripclean.core.route import Route


def calculate_rejection_ratio(route: Route) -> float:
    """
    Share of points the cleaning pass marked invalid. Returns 0.0 for an empty route.
    """
    if not route.points:
        return 0.0
    return len(route.invalid_points) / len(route.points)


def calculate_retention_ratio(route: Route) -> float:
    """
    Share of points kept. Returns 1.0 for an empty route.
    """
    return 1.0 - calculate_rejection_ratio(route)
