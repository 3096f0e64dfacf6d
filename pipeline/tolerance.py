"""
Tolerance policy shared by the region classifiers.
"""

import config

TOLERANCE_FACTOR = config.TOLERANCE_FACTOR
MIN_TARGET_ANGLE = config.MIN_TARGET_ANGLE
MAX_TARGET_ANGLE = config.MAX_TARGET_ANGLE


def upper_bound(reference: float, tolerance: float = TOLERANCE_FACTOR) -> float:
    """reference * (1 + tolerance)."""
    return reference * (1 + tolerance)


def lower_bound(reference: float, tolerance: float = TOLERANCE_FACTOR) -> float:
    """reference * (1 - tolerance)."""
    return reference * (1 - tolerance)


def is_valid_target_angle(angle: float) -> bool:
    """Target angles are accepted within [MIN_TARGET_ANGLE, MAX_TARGET_ANGLE]."""
    return MIN_TARGET_ANGLE <= angle <= MAX_TARGET_ANGLE
