"""
Step 3: Region Classifiers
Classifies the arms ("cross") and the lifted left leg of one skeleton
against their targets. Rule-based, one frame at a time.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import config as app_config
from pipeline.skeleton import JointSnapshot, JointType
from pipeline.tolerance import is_valid_target_angle, lower_bound, upper_bound
from utils.geometry import euclidean_distance, radians_to_degrees

logger = logging.getLogger(__name__)


class RegionCode(Enum):
    """Classification of one body region."""
    INVALID = -1
    INCORRECT = 0
    CORRECT = 1
    BELOW = 2
    ABOVE = 3


@dataclass(frozen=True)
class ClassificationConfig:
    """Per-call classification parameters."""
    target_leg_angle_degrees: float = app_config.TARGET_LEG_ANGLE
    tolerance_factor: float = app_config.TOLERANCE_FACTOR
    gate_untracked_joints: bool = app_config.GATE_UNTRACKED_JOINTS


DEFAULT_CONFIG = ClassificationConfig()


class ArmsCrossClassifier:
    """
    Checks whether both arms are held out at shoulder height.

    Only the vertical coordinate of the shoulders, elbows and wrists is used.
    Each (shoulder, joint) pair is compared against a band of
    +/- tolerance around the shoulder height.
    """

    PAIRS: Tuple[Tuple[JointType, JointType], ...] = (
        (JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT),
        (JointType.SHOULDER_LEFT, JointType.WRIST_LEFT),
        (JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT),
        (JointType.SHOULDER_RIGHT, JointType.WRIST_RIGHT),
    )

    REQUIRED_JOINTS = (
        JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT, JointType.WRIST_LEFT,
        JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT, JointType.WRIST_RIGHT,
    )

    @classmethod
    def classify(
        cls,
        snapshot: JointSnapshot,
        config: ClassificationConfig = DEFAULT_CONFIG
    ) -> RegionCode:
        """
        Classify the arms region.

        Args:
            snapshot: Joints of one skeleton
            config: Tolerance and gating settings

        Returns:
            CORRECT, ABOVE, BELOW or INCORRECT. INVALID only when gating is
            enabled and a required joint is not tracked.
        """
        if config.gate_untracked_joints:
            missing = snapshot.untracked(cls.REQUIRED_JOINTS)
            if missing:
                logger.debug("Arms region gated, untracked: %s",
                             [jt.value for jt in missing])
                return RegionCode.INVALID

        t = config.tolerance_factor
        heights = [
            (snapshot[shoulder].position.y, snapshot[joint].position.y)
            for shoulder, joint in cls.PAIRS
        ]

        if all(y <= upper_bound(s, t) or y >= lower_bound(s, t) for s, y in heights):
            return RegionCode.CORRECT
        if all(y >= upper_bound(s, t) for s, y in heights):
            return RegionCode.ABOVE
        if all(y <= upper_bound(s, t) for s, y in heights):
            return RegionCode.BELOW
        return RegionCode.INCORRECT


def grade_leg_angle(
    current_angle: float,
    target: float,
    tolerance: float = app_config.TOLERANCE_FACTOR
) -> RegionCode:
    """
    Compare a measured knee-ankle angle against the target angle.

    The CORRECT branch requires the angle to be both above the upper band
    edge and below the lower one, which never holds for a positive target.
    Angles inside the band therefore grade as INCORRECT.
    """
    if not is_valid_target_angle(target):
        return RegionCode.INVALID

    code = RegionCode.INCORRECT
    if current_angle <= lower_bound(target, tolerance) and current_angle != 0:
        code = RegionCode.ABOVE
    elif current_angle >= upper_bound(target, tolerance):
        code = RegionCode.BELOW
    elif (current_angle >= upper_bound(target, tolerance)
          and current_angle <= lower_bound(target, tolerance)):
        code = RegionCode.CORRECT
    return code


class LegLiftClassifier:
    """
    Checks the lifted left leg against the configured target angle.

    The angle is built from two pseudo-cathetus lengths that mix the depth (z)
    and height (y) axes of the left knee and ankle:

    - adjacent: |knee.y - ankle.y|
    - opposite: |knee.z - ankle.z|
    """

    REQUIRED_JOINTS = (JointType.KNEE_LEFT, JointType.ANKLE_LEFT)

    @staticmethod
    def leg_angle(snapshot: JointSnapshot) -> float:
        """
        Current knee-ankle angle in degrees.

        Returns:
            Angle in degrees, NaN when the ratio is undefined
            (zero opposite side or non-finite coordinates)
        """
        knee = snapshot[JointType.KNEE_LEFT].position
        ankle = snapshot[JointType.ANKLE_LEFT].position
        # Right leg is read but does not enter the formula
        _knee_right = snapshot[JointType.KNEE_RIGHT].position
        _ankle_right = snapshot[JointType.ANKLE_RIGHT].position

        adjacent = euclidean_distance(ankle.z, ankle.z, knee.y, ankle.y)
        opposite = euclidean_distance(ankle.z, knee.z, knee.y, knee.y)

        if opposite == 0 or not math.isfinite(opposite) or not math.isfinite(adjacent):
            return math.nan
        return radians_to_degrees(math.atan(adjacent / opposite))

    @classmethod
    def classify(
        cls,
        snapshot: JointSnapshot,
        config: ClassificationConfig = DEFAULT_CONFIG
    ) -> RegionCode:
        """
        Classify the leg region.

        Args:
            snapshot: Joints of one skeleton
            config: Target angle, tolerance and gating settings

        Returns:
            INVALID for a target outside [0, 90] or gated joints,
            INCORRECT for an undefined angle, otherwise the graded code
        """
        target = config.target_leg_angle_degrees
        if not is_valid_target_angle(target):
            logger.debug("Leg target angle %.2f out of range", target)
            return RegionCode.INVALID

        if config.gate_untracked_joints:
            missing = snapshot.untracked(cls.REQUIRED_JOINTS)
            if missing:
                logger.debug("Leg region gated, untracked: %s",
                             [jt.value for jt in missing])
                return RegionCode.INVALID

        current_angle = cls.leg_angle(snapshot)
        if math.isnan(current_angle):
            logger.debug("Leg angle undefined (degenerate knee/ankle geometry)")
            return RegionCode.INCORRECT

        return grade_leg_angle(current_angle, target, config.tolerance_factor)
