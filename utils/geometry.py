"""
Geometry Utility
Distance and angle helpers used by the region classifiers.
"""

import numpy as np


def euclidean_distance(ax: float, bx: float, ay: float, by: float) -> float:
    """
    Distance between (ax, ay) and (bx, by).

    The arguments are grouped by axis, not by point. Callers may pass any two
    coordinate axes (e.g. depth and height) as the pair.

    Args:
        ax: First point, first axis
        bx: Second point, first axis
        ay: First point, second axis
        by: Second point, second axis

    Returns:
        sqrt((bx - ax)^2 + (by - ay)^2)
    """
    dx = bx - ax
    dy = by - ay
    return float(np.sqrt(dx * dx + dy * dy))


def radians_to_degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return float(rad * 180.0 / np.pi)
