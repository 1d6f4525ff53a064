from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from tripclean.core.route import Route


def plot_route(route: Route, ax: Optional[Axes] = None, title: Optional[str] = None) -> Figure:
    """
    Plots raw fixes, the cleaned path and the rejected fixes on one set of axes.

    Args:
        route: A route that has already been through RouteCleaner.
        ax: Axes to draw on. A new figure is created if None.
        title: Optional axes title.

    Returns:
        The figure containing the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 10))
    else:
        fig = ax.figure

    if route.points:
        ax.scatter([p.lon for p in route.points], [p.lat for p in route.points],
                   color='blue', s=5, alpha=0.5, label='GPS fixes')

    valid = route.valid_points
    if valid:
        ax.plot([p.lon for p in valid], [p.lat for p in valid],
                color='red', linewidth=2, alpha=0.7, label='Cleaned route')

    invalid = route.invalid_points
    if invalid:
        ax.scatter([p.lon for p in invalid], [p.lat for p in invalid],
                   color='black', marker='x', s=40, zorder=5, label='Rejected')

    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    if title:
        ax.set_title(title)
    if route.points:
        ax.legend()

    return fig
