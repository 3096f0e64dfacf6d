"""
Step 4: Frame Classification
Combines the arms and leg region codes of one skeleton into a per-frame result.
Stateless: every frame is classified on its own.
"""

from dataclasses import dataclass
from typing import List, Optional

from pipeline.skeleton import JointSnapshot, Skeleton, SkeletonFrame
from pipeline.step3_region_classifiers import (
    DEFAULT_CONFIG,
    ArmsCrossClassifier,
    ClassificationConfig,
    LegLiftClassifier,
    RegionCode,
)


@dataclass(frozen=True)
class FrameClassification:
    """Region codes for one skeleton in one frame."""
    arms_code: RegionCode
    leg_code: RegionCode

    @property
    def is_correct(self) -> bool:
        return (self.arms_code is RegionCode.CORRECT
                and self.leg_code is RegionCode.CORRECT)

    def as_dict(self) -> dict:
        return {"arms": self.arms_code.name, "leg": self.leg_code.name}


@dataclass(frozen=True)
class SkeletonClassification:
    """A tracked skeleton together with its classification."""
    skeleton: Skeleton
    result: FrameClassification


def classify_frame(
    snapshot: JointSnapshot,
    config: ClassificationConfig = DEFAULT_CONFIG
) -> FrameClassification:
    """
    Classify both regions of one joint snapshot.

    Args:
        snapshot: Joints of one skeleton
        config: Classification parameters

    Returns:
        FrameClassification(arms_code, leg_code)
    """
    return FrameClassification(
        arms_code=ArmsCrossClassifier.classify(snapshot, config),
        leg_code=LegLiftClassifier.classify(snapshot, config),
    )


def classify_skeletons(
    frame: SkeletonFrame,
    config: ClassificationConfig = DEFAULT_CONFIG
) -> List[SkeletonClassification]:
    """
    Classify every fully tracked skeleton of a frame, in input order.

    Position-only and untracked skeletons are skipped.
    """
    return [
        SkeletonClassification(skeleton, classify_frame(skeleton.joints, config))
        for skeleton in frame.tracked_skeletons()
    ]


class FrameClassifier:
    """
    Holds a ClassificationConfig and classifies snapshots with it.

    Carries no per-frame state, so one instance can serve any number of
    skeletons and threads.
    """

    def __init__(self, config: Optional[ClassificationConfig] = None):
        """
        Initialize frame classifier.

        Args:
            config: Classification parameters (defaults from config.py)
        """
        self.config = config or DEFAULT_CONFIG

    def classify(self, snapshot: JointSnapshot) -> FrameClassification:
        return classify_frame(snapshot, self.config)

    def classify_skeleton(self, skeleton: Optional[Skeleton]) -> Optional[FrameClassification]:
        """
        Classify a skeleton from the tracker.

        Returns:
            FrameClassification, or None if no skeleton was tracked
        """
        if skeleton is None:
            return None
        return self.classify(skeleton.joints)

    def classify_frame(self, frame: SkeletonFrame) -> List[SkeletonClassification]:
        return classify_skeletons(frame, self.config)
