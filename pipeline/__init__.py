"""
Cross Pose Coach Pipeline

4-Step Pipeline:
1. Frame Capture - Capture frames from webcam/video
2. Skeleton Tracking - Sensor-space skeleton using MediaPipe
3. Region Classification - Arms "cross" and lifted-leg region codes
4. Frame Classification - Combine region codes per skeleton
"""

from .skeleton import (
    Joint,
    JointSnapshot,
    JointType,
    Point3D,
    Skeleton,
    SkeletonFrame,
    TrackingState,
)
from .step1_frame_capture import FrameCapture, VideoCapture, WebcamCapture
from .step2_skeleton_tracking import SkeletonTracker, TrackedSkeleton
from .step3_region_classifiers import (
    ArmsCrossClassifier,
    ClassificationConfig,
    LegLiftClassifier,
    RegionCode,
)
from .step4_frame_classifier import FrameClassification, FrameClassifier, classify_frame

__all__ = [
    'Joint',
    'JointSnapshot',
    'JointType',
    'Point3D',
    'Skeleton',
    'SkeletonFrame',
    'TrackingState',
    'FrameCapture',
    'VideoCapture',
    'WebcamCapture',
    'SkeletonTracker',
    'TrackedSkeleton',
    'ArmsCrossClassifier',
    'ClassificationConfig',
    'LegLiftClassifier',
    'RegionCode',
    'FrameClassification',
    'FrameClassifier',
    'classify_frame',
]
