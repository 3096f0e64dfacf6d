import math

import pytest

from conftest import arms_snapshot, leg_snapshot, make_snapshot
from pipeline.skeleton import JointSnapshot, JointType
from pipeline.step3_region_classifiers import (
    ArmsCrossClassifier,
    ClassificationConfig,
    LegLiftClassifier,
    RegionCode,
    grade_leg_angle,
)

NO_GATE = ClassificationConfig(gate_untracked_joints=False)


# ---------------------------------------------------------------------------
# Arms
# ---------------------------------------------------------------------------

def test_arms_levels_outside_band_are_correct():
    snapshot = arms_snapshot(0.0, 1.0, 1.0, 0.0, 1.0, 1.0)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT


def test_arms_positive_shoulder_height_is_always_correct():
    # With shoulder.y > 0 the upper edge lies above the lower one, so every
    # height satisfies one side of the check
    snapshot = arms_snapshot(0.5, 2.0, -3.0, 0.5, 0.5, 0.49)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT


def test_arms_all_inside_negative_band_are_above():
    snapshot = arms_snapshot(-1.0, -1.0, -1.0, -1.0, -1.0, -1.0)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.ABOVE


def test_arms_mixed_heights_are_incorrect():
    # elbow inside the band, wrist well below the upper edge
    snapshot = arms_snapshot(-1.0, -1.0, -2.0, -1.0, -1.0, -1.0)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.INCORRECT


def test_arms_upper_edge_is_inclusive():
    shoulder = -1.0
    edge = shoulder * (1 + 0.05)
    snapshot = arms_snapshot(shoulder, edge, edge, shoulder, edge, edge)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT


def test_arms_one_ulp_above_upper_edge():
    shoulder = -1.0
    edge = shoulder * (1 + 0.05)
    elbow = math.nextafter(edge, math.inf)
    snapshot = arms_snapshot(shoulder, elbow, edge, shoulder, edge, edge)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.ABOVE


def test_arms_one_ulp_below_upper_edge():
    shoulder = -1.0
    edge = shoulder * (1 + 0.05)
    elbow = math.nextafter(edge, -math.inf)
    snapshot = arms_snapshot(shoulder, elbow, edge, shoulder, edge, edge)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT


def test_arms_edge_with_positive_shoulder():
    shoulder = 1.0
    edge = shoulder * (1 + 0.05)
    for elbow in (math.nextafter(edge, -math.inf), edge, math.nextafter(edge, math.inf)):
        snapshot = arms_snapshot(shoulder, elbow, shoulder, shoulder, shoulder, shoulder)
        assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT


def test_arms_untracked_joint_is_invalid_when_gated():
    snapshot = arms_snapshot(0.0, 1.0, 1.0, 0.0, 1.0, 1.0,
                             untracked=(JointType.WRIST_RIGHT,))
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.INVALID


def test_arms_untracked_joint_is_classified_without_gate():
    snapshot = arms_snapshot(0.0, 1.0, 1.0, 0.0, 1.0, 1.0,
                             untracked=(JointType.WRIST_RIGHT,))
    assert ArmsCrossClassifier.classify(snapshot, NO_GATE) is RegionCode.CORRECT


def test_arms_empty_snapshot():
    assert ArmsCrossClassifier.classify(JointSnapshot()) is RegionCode.INVALID
    # Without the gate all heights read as 0 and the check passes
    assert ArmsCrossClassifier.classify(JointSnapshot(), NO_GATE) is RegionCode.CORRECT


def test_arms_tolerance_comes_from_config():
    snapshot = arms_snapshot(-1.0, -1.08, -1.08, -1.0, -1.08, -1.08)
    assert ArmsCrossClassifier.classify(snapshot) is RegionCode.CORRECT
    wide = ClassificationConfig(tolerance_factor=0.10)
    assert ArmsCrossClassifier.classify(snapshot, wide) is RegionCode.ABOVE


def test_arms_classification_is_repeatable():
    snapshot = arms_snapshot(-1.0, -1.0, -2.0, -1.0, -1.0, -1.0)
    first = ArmsCrossClassifier.classify(snapshot)
    assert all(ArmsCrossClassifier.classify(snapshot) is first for _ in range(5))


# ---------------------------------------------------------------------------
# Leg
# ---------------------------------------------------------------------------

def _leg_at(angle_deg):
    """Knee/ankle geometry whose pseudo angle is angle_deg (opposite side = 1)."""
    adjacent = math.tan(math.radians(angle_deg))
    return leg_snapshot(knee=(adjacent, 1.0), ankle=(0.0, 2.0))


def test_leg_angle_mixes_height_and_depth():
    snapshot = leg_snapshot(knee=(-0.4, 2.0), ankle=(-0.8, 1.6))
    assert LegLiftClassifier.leg_angle(snapshot) == pytest.approx(45.0)


def test_leg_angle_ignores_x_and_right_leg():
    base = leg_snapshot(knee=(0.1, 1.0), ankle=(0.0, 2.0))
    moved = make_snapshot(positions={
        JointType.KNEE_LEFT: (0.7, 0.1, 1.0),
        JointType.ANKLE_LEFT: (-0.3, 0.0, 2.0),
        JointType.KNEE_RIGHT: (0.2, 5.0, 3.0),
        JointType.ANKLE_RIGHT: (0.2, -5.0, 0.5),
    })
    expected = math.degrees(math.atan(0.1))
    assert LegLiftClassifier.leg_angle(base) == pytest.approx(expected)
    assert LegLiftClassifier.leg_angle(moved) == LegLiftClassifier.leg_angle(base)


def test_leg_small_angle_is_above():
    assert LegLiftClassifier.classify(_leg_at(5.0)) is RegionCode.ABOVE


def test_leg_large_angle_is_below():
    assert LegLiftClassifier.classify(_leg_at(30.0)) is RegionCode.BELOW


def test_leg_angle_at_target_is_incorrect():
    # The CORRECT branch needs angle >= target*1.05 and <= target*0.95
    config = ClassificationConfig(target_leg_angle_degrees=20.0)
    assert LegLiftClassifier.classify(_leg_at(20.0), config) is RegionCode.INCORRECT
    assert grade_leg_angle(20.0, 20.0) is RegionCode.INCORRECT


def test_leg_inside_band_is_incorrect():
    for angle in (9.6, 10.0, 10.4):
        assert grade_leg_angle(angle, 10.0) is RegionCode.INCORRECT


def test_leg_band_edges_are_inclusive():
    assert grade_leg_angle(10.0 * (1 - 0.05), 10.0) is RegionCode.ABOVE
    assert grade_leg_angle(10.0 * (1 + 0.05), 10.0) is RegionCode.BELOW


def test_leg_zero_angle_is_incorrect():
    snapshot = leg_snapshot(knee=(-0.5, 1.0), ankle=(-0.5, 2.0))
    assert LegLiftClassifier.leg_angle(snapshot) == 0.0
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INCORRECT


def test_leg_zero_angle_with_zero_target_is_below():
    assert grade_leg_angle(0.0, 0.0) is RegionCode.BELOW


def test_leg_target_out_of_range_is_invalid():
    snapshot = _leg_at(20.0)
    for target in (95.0, -1.0):
        config = ClassificationConfig(target_leg_angle_degrees=target)
        assert LegLiftClassifier.classify(snapshot, config) is RegionCode.INVALID
    assert grade_leg_angle(20.0, 95.0) is RegionCode.INVALID


def test_leg_target_at_range_limit_is_valid():
    config = ClassificationConfig(target_leg_angle_degrees=90.0)
    assert LegLiftClassifier.classify(_leg_at(45.0), config) is RegionCode.ABOVE


def test_leg_zero_opposite_side_falls_back_to_incorrect():
    # knee and ankle at the same depth
    snapshot = leg_snapshot(knee=(-0.4, 2.0), ankle=(-0.8, 2.0))
    assert math.isnan(LegLiftClassifier.leg_angle(snapshot))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INCORRECT


def test_leg_fully_degenerate_geometry_is_incorrect():
    snapshot = leg_snapshot(knee=(0.0, 0.0), ankle=(0.0, 0.0))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INCORRECT


def test_leg_non_finite_coordinates_are_incorrect():
    snapshot = leg_snapshot(knee=(math.inf, 1.0), ankle=(0.0, 2.0))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INCORRECT
    snapshot = leg_snapshot(knee=(math.nan, 1.0), ankle=(0.0, 2.0))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INCORRECT


def test_leg_untracked_knee_is_invalid_when_gated():
    snapshot = leg_snapshot(knee=(0.1, 1.0), ankle=(0.0, 2.0),
                            untracked=(JointType.KNEE_LEFT,))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.INVALID
    assert LegLiftClassifier.classify(snapshot, NO_GATE) is RegionCode.ABOVE


def test_leg_untracked_right_leg_is_not_gated():
    snapshot = leg_snapshot(knee=(0.1, 1.0), ankle=(0.0, 2.0),
                            untracked=(JointType.KNEE_RIGHT, JointType.ANKLE_RIGHT))
    assert LegLiftClassifier.classify(snapshot) is RegionCode.ABOVE


def test_leg_out_of_range_target_wins_over_gate():
    snapshot = leg_snapshot(knee=(0.1, 1.0), ankle=(0.0, 2.0),
                            untracked=(JointType.KNEE_LEFT,))
    config = ClassificationConfig(target_leg_angle_degrees=120.0)
    assert LegLiftClassifier.classify(snapshot, config) is RegionCode.INVALID


def test_leg_default_target_is_ten_degrees():
    assert ClassificationConfig().target_leg_angle_degrees == 10.0
    # 15 degrees is BELOW a 10 degree target but ABOVE a 20 degree one
    snapshot = _leg_at(15.0)
    assert LegLiftClassifier.classify(snapshot) is RegionCode.BELOW
    config = ClassificationConfig(target_leg_angle_degrees=20.0)
    assert LegLiftClassifier.classify(snapshot, config) is RegionCode.ABOVE


def test_leg_classification_is_repeatable():
    snapshot = _leg_at(12.0)
    first = LegLiftClassifier.classify(snapshot)
    assert all(LegLiftClassifier.classify(snapshot) is first for _ in range(5))


def test_region_codes_keep_numeric_values():
    assert [code.value for code in RegionCode] == [-1, 0, 1, 2, 3]
