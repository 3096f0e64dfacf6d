import math

import pytest

from pipeline.tolerance import is_valid_target_angle, lower_bound, upper_bound
from utils.geometry import euclidean_distance, radians_to_degrees


def test_euclidean_distance_groups_arguments_by_axis():
    # (ax, bx, ay, by): points (0, 0) and (3, 4)
    assert euclidean_distance(0.0, 3.0, 0.0, 4.0) == pytest.approx(5.0)


def test_euclidean_distance_single_axis():
    assert euclidean_distance(2.0, 2.0, -0.4, -0.8) == pytest.approx(0.4)
    assert euclidean_distance(1.0, 1.0, 5.0, 5.0) == 0.0


def test_euclidean_distance_returns_builtin_float():
    assert type(euclidean_distance(0.0, 1.0, 0.0, 1.0)) is float


def test_radians_to_degrees():
    assert radians_to_degrees(math.pi) == pytest.approx(180.0)
    assert radians_to_degrees(math.pi / 4) == pytest.approx(45.0)
    assert radians_to_degrees(0.0) == 0.0


def test_tolerance_band_edges():
    assert upper_bound(2.0) == pytest.approx(2.1)
    assert lower_bound(2.0) == pytest.approx(1.9)
    assert upper_bound(2.0, 0.1) == pytest.approx(2.2)


def test_tolerance_band_flips_for_negative_reference():
    assert upper_bound(-1.0) < lower_bound(-1.0)


@pytest.mark.parametrize("angle,valid", [
    (-0.1, False), (0.0, True), (45.0, True), (90.0, True), (90.1, False),
])
def test_target_angle_range_is_inclusive(angle, valid):
    assert is_valid_target_angle(angle) is valid
