"""
Step 2: Skeleton Tracking
Turns camera frames into sensor-space skeletons using MediaPipe Pose.

MediaPipe world landmarks are hip-centred meters with y pointing down. They are
converted to the depth-sensor convention used by the classifiers: y up,
z = distance from the camera.
"""

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

import cv2
import numpy as np

import config
from pipeline.skeleton import (
    FrameEdges,
    Joint,
    JointSnapshot,
    JointType,
    Point3D,
    Skeleton,
    SkeletonTrackingState,
    TrackingState,
)


# MediaPipe Pose landmark indices feeding each joint; several indices are averaged
MEDIAPIPE_JOINTS: Dict[JointType, Tuple[int, ...]] = {
    JointType.HEAD: (0,),
    JointType.SHOULDER_CENTER: (11, 12),
    JointType.SPINE: (11, 12, 23, 24),
    JointType.HIP_CENTER: (23, 24),
    JointType.SHOULDER_LEFT: (11,),
    JointType.ELBOW_LEFT: (13,),
    JointType.WRIST_LEFT: (15,),
    JointType.HAND_LEFT: (19,),
    JointType.SHOULDER_RIGHT: (12,),
    JointType.ELBOW_RIGHT: (14,),
    JointType.WRIST_RIGHT: (16,),
    JointType.HAND_RIGHT: (20,),
    JointType.HIP_LEFT: (23,),
    JointType.KNEE_LEFT: (25,),
    JointType.ANKLE_LEFT: (27,),
    JointType.FOOT_LEFT: (31,),
    JointType.HIP_RIGHT: (24,),
    JointType.KNEE_RIGHT: (26,),
    JointType.ANKLE_RIGHT: (28,),
    JointType.FOOT_RIGHT: (32,),
}

N_LANDMARKS = 33


class TrackedSkeleton(NamedTuple):
    """A skeleton plus the pixel position of each joint in the source frame."""
    skeleton: Skeleton
    screen_points: Dict[JointType, Tuple[int, int]]


def visibility_to_state(visibility: float) -> TrackingState:
    """Map a MediaPipe visibility score to a joint tracking state."""
    if visibility >= config.TRACKED_VISIBILITY:
        return TrackingState.TRACKED
    if visibility >= config.INFERRED_VISIBILITY:
        return TrackingState.INFERRED
    return TrackingState.NOT_TRACKED


def clipped_edges(image_landmarks: Sequence) -> FrameEdges:
    """Edges of the image that body landmarks fall outside of."""
    edges = FrameEdges.NONE
    for lm in image_landmarks:
        if lm.x < 0:
            edges |= FrameEdges.LEFT
        elif lm.x > 1:
            edges |= FrameEdges.RIGHT
        if lm.y < 0:
            edges |= FrameEdges.TOP
        elif lm.y > 1:
            edges |= FrameEdges.BOTTOM
    return edges


def landmarks_to_skeleton(
    world_landmarks: Sequence,
    image_landmarks: Sequence,
    width: int,
    height: int,
    tracking_id: int = 0
) -> TrackedSkeleton:
    """
    Convert one MediaPipe pose result into a sensor-space skeleton.

    Args:
        world_landmarks: 33 landmarks in meters (pose_world_landmarks.landmark)
        image_landmarks: 33 normalized landmarks (pose_landmarks.landmark)
        width: Frame width in pixels
        height: Frame height in pixels
        tracking_id: Identifier stored on the skeleton

    Returns:
        TrackedSkeleton with joints and screen points
    """
    if len(world_landmarks) < N_LANDMARKS or len(image_landmarks) < N_LANDMARKS:
        raise ValueError(
            f"Expected {N_LANDMARKS} landmarks, got "
            f"{len(world_landmarks)} world / {len(image_landmarks)} image"
        )

    world = np.array([[lm.x, lm.y, lm.z] for lm in world_landmarks], dtype=np.float64)
    image = np.array([[lm.x, lm.y] for lm in image_landmarks], dtype=np.float64)
    visibility = np.array([lm.visibility for lm in world_landmarks], dtype=np.float64)

    joints = {}
    screen_points = {}
    for joint_type, indices in MEDIAPIPE_JOINTS.items():
        idx = list(indices)
        x, y, z = world[idx].mean(axis=0)
        u, v = image[idx].mean(axis=0)

        joints[joint_type] = Joint(
            joint_type,
            Point3D(float(x), float(-y), float(config.SENSOR_DEPTH_OFFSET + z)),
            # Composite joints are only as reliable as their weakest source
            visibility_to_state(float(visibility[idx].min())),
        )
        screen_points[joint_type] = (int(u * width), int(v * height))

    snapshot = JointSnapshot(joints)
    skeleton = Skeleton(
        joints=snapshot,
        tracking_state=SkeletonTrackingState.TRACKED,
        tracking_id=tracking_id,
        position=snapshot[JointType.HIP_CENTER].position,
        clipped_edges=clipped_edges(image_landmarks),
    )
    return TrackedSkeleton(skeleton, screen_points)


@dataclass
class TrackerSettings:
    min_detection_confidence: float = config.MIN_DETECTION_CONFIDENCE
    min_tracking_confidence: float = config.MIN_TRACKING_CONFIDENCE
    model_complexity: int = config.MODEL_COMPLEXITY


class SkeletonTracker:
    """Track a single skeleton per frame with MediaPipe Pose."""

    def __init__(self, settings: Optional[TrackerSettings] = None):
        """
        Initialize MediaPipe Pose.

        Args:
            settings: Detection/tracking confidences and model complexity
        """
        self.settings = settings or TrackerSettings()
        self.pose = None
        self._init_mediapipe()

    def _init_mediapipe(self) -> None:
        import mediapipe as mp

        self.mp_pose = mp.solutions.pose
        self.pose = self.mp_pose.Pose(
            static_image_mode=False,  # Video mode for better tracking
            model_complexity=self.settings.model_complexity,
            min_detection_confidence=self.settings.min_detection_confidence,
            min_tracking_confidence=self.settings.min_tracking_confidence,
        )

    def track(self, frame: np.ndarray) -> Optional[TrackedSkeleton]:
        """
        Track the skeleton in a BGR frame.

        Returns:
            TrackedSkeleton, or None if no person was found
        """
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        results = self.pose.process(rgb_frame)

        if not results.pose_world_landmarks or not results.pose_landmarks:
            return None

        h, w = frame.shape[:2]
        return landmarks_to_skeleton(
            results.pose_world_landmarks.landmark,
            results.pose_landmarks.landmark,
            w, h,
        )

    def close(self) -> None:
        """Release MediaPipe resources."""
        if self.pose is not None:
            self.pose.close()
            self.pose = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
