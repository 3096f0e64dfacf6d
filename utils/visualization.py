"""
Utils: Visualization
Drawing helpers for the Cross Pose Coach skeleton overlay.

Region codes are turned into colors on demand by region_color(); nothing here
keeps color state between frames.
"""

from typing import Dict, Optional, Sequence, Tuple

import cv2
import numpy as np

import config
from pipeline.skeleton import FrameEdges, JointType, Skeleton, TrackingState
from pipeline.step3_region_classifiers import RegionCode
from pipeline.step4_frame_classifier import FrameClassification

Color = Tuple[int, int, int]
ScreenPoints = Dict[JointType, Tuple[int, int]]
Bone = Tuple[JointType, JointType]


REGION_COLORS: Dict[RegionCode, Optional[Color]] = {
    RegionCode.INCORRECT: config.COLOR_RED,
    RegionCode.CORRECT: config.COLOR_GREEN,
    RegionCode.BELOW: config.COLOR_YELLOW,
    RegionCode.ABOVE: config.COLOR_CYAN,
    RegionCode.INVALID: None,   # region is not drawn
}

# Bones drawn in the default color regardless of classification
BODY_BONES: Tuple[Bone, ...] = (
    (JointType.HEAD, JointType.SHOULDER_CENTER),
    (JointType.SHOULDER_CENTER, JointType.SPINE),
    (JointType.SPINE, JointType.HIP_CENTER),
    (JointType.HIP_CENTER, JointType.HIP_LEFT),
    (JointType.HIP_CENTER, JointType.HIP_RIGHT),
    (JointType.HIP_RIGHT, JointType.KNEE_RIGHT),
    (JointType.KNEE_RIGHT, JointType.ANKLE_RIGHT),
    (JointType.ANKLE_RIGHT, JointType.FOOT_RIGHT),
)

# Colored by the arms code
CROSS_BONES: Tuple[Bone, ...] = (
    (JointType.SHOULDER_CENTER, JointType.SHOULDER_LEFT),
    (JointType.SHOULDER_CENTER, JointType.SHOULDER_RIGHT),
    (JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT),
    (JointType.ELBOW_LEFT, JointType.WRIST_LEFT),
    (JointType.WRIST_LEFT, JointType.HAND_LEFT),
    (JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT),
    (JointType.ELBOW_RIGHT, JointType.WRIST_RIGHT),
    (JointType.WRIST_RIGHT, JointType.HAND_RIGHT),
)

# Colored by the leg code
LEG_BONES: Tuple[Bone, ...] = (
    (JointType.HIP_LEFT, JointType.KNEE_LEFT),
    (JointType.KNEE_LEFT, JointType.ANKLE_LEFT),
    (JointType.ANKLE_LEFT, JointType.FOOT_LEFT),
)


def region_color(code: RegionCode) -> Optional[Color]:
    """BGR color for a region code, None if the region should not be drawn."""
    return REGION_COLORS[code]


def bone_style(
    state0: TrackingState,
    state1: TrackingState,
    color: Color
) -> Optional[Tuple[Color, int]]:
    """
    Pen for a bone given the tracking state of its two joints.

    Returns:
        (color, thickness), or None if the bone must not be drawn
    """
    if TrackingState.NOT_TRACKED in (state0, state1):
        return None
    if state0 is TrackingState.INFERRED and state1 is TrackingState.INFERRED:
        return None
    if state0 is TrackingState.TRACKED and state1 is TrackingState.TRACKED:
        return color, config.BONE_THICKNESS
    return config.COLOR_GRAY, config.INFERRED_BONE_THICKNESS


def _draw_bones(
    canvas: np.ndarray,
    skeleton: Skeleton,
    points: ScreenPoints,
    bones: Sequence[Bone],
    color: Color
) -> None:
    for jt0, jt1 in bones:
        if jt0 not in points or jt1 not in points:
            continue
        style = bone_style(
            skeleton.joints[jt0].tracking_state,
            skeleton.joints[jt1].tracking_state,
            color,
        )
        if style is None:
            continue
        pen_color, thickness = style
        cv2.line(canvas, points[jt0], points[jt1], pen_color, thickness)


def _draw_joints(
    canvas: np.ndarray,
    skeleton: Skeleton,
    points: ScreenPoints,
    region_joints: frozenset
) -> None:
    for joint_type, point in points.items():
        state = skeleton.joints[joint_type].tracking_state
        if state is TrackingState.TRACKED:
            color = (config.COLOR_JOINT_REGION if joint_type in region_joints
                     else config.COLOR_JOINT_TRACKED)
        elif state is TrackingState.INFERRED:
            color = config.COLOR_JOINT_INFERRED
        else:
            continue
        cv2.circle(canvas, point, config.JOINT_RADIUS, color, -1)


def _joints_of(bones: Sequence[Bone]) -> frozenset:
    return frozenset(jt for bone in bones for jt in bone)


def draw_skeleton(
    frame: np.ndarray,
    skeleton: Skeleton,
    points: ScreenPoints,
    result: Optional[FrameClassification] = None
) -> np.ndarray:
    """
    Draw a tracked skeleton with its regions colored by classification.

    Args:
        frame: Input frame (BGR)
        skeleton: Skeleton to draw
        points: Screen position of each joint
        result: Region codes; without it only the body bones are drawn
    """
    frame_copy = frame.copy()

    _draw_bones(frame_copy, skeleton, points, BODY_BONES, config.COLOR_BONE_TRACKED)

    region_joints = set()
    if result is not None:
        for bones, code in ((CROSS_BONES, result.arms_code), (LEG_BONES, result.leg_code)):
            color = region_color(code)
            if color is None:
                continue
            _draw_bones(frame_copy, skeleton, points, bones, color)
            if code is not RegionCode.INCORRECT:
                region_joints |= _joints_of(bones)

    _draw_joints(frame_copy, skeleton, points, frozenset(region_joints))
    return frame_copy


def draw_clipped_edges(frame: np.ndarray, edges: FrameEdges) -> np.ndarray:
    """Red bars along the edges a skeleton is clipped by."""
    frame_copy = frame.copy()
    h, w = frame_copy.shape[:2]
    t = config.CLIP_BOUNDS_THICKNESS

    bars = {
        FrameEdges.BOTTOM: ((0, h - t), (w, h)),
        FrameEdges.TOP: ((0, 0), (w, t)),
        FrameEdges.LEFT: ((0, 0), (t, h)),
        FrameEdges.RIGHT: ((w - t, 0), (w, h)),
    }
    for edge, (p1, p2) in bars.items():
        if edge in edges:
            cv2.rectangle(frame_copy, p1, p2, config.COLOR_RED, -1)

    return frame_copy


def draw_position_only(frame: np.ndarray, point: Tuple[int, int]) -> np.ndarray:
    """Body-center dot for skeletons tracked by position only."""
    frame_copy = frame.copy()
    cv2.circle(frame_copy, point, config.BODY_CENTER_RADIUS, config.COLOR_BLUE, -1)
    return frame_copy


def draw_status_overlay(
    frame: np.ndarray,
    result: Optional[FrameClassification],
    fps: float,
    target_angle: float
) -> np.ndarray:
    """
    Draw the FPS and per-region code text.

    Args:
        frame: Input frame (BGR)
        result: Classification of the current frame, None if nobody is tracked
        fps: Frames per second
        target_angle: Configured leg target angle
    """
    frame_copy = frame.copy()

    cv2.putText(frame_copy, f"FPS: {fps:.1f}", (10, 30),
                cv2.FONT_HERSHEY_SIMPLEX, config.FONT_SCALE, config.COLOR_WHITE, 2)

    if result is None:
        cv2.putText(frame_copy, "No skeleton tracked", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, config.FONT_SCALE, config.COLOR_RED, 2)
        return frame_copy

    rows = (
        ("Arms", result.arms_code),
        (f"Leg ({target_angle:.0f} deg)", result.leg_code),
    )
    y = 60
    for label, code in rows:
        color = region_color(code) or config.COLOR_GRAY
        cv2.putText(frame_copy, f"{label}: {code.name}", (10, y),
                    cv2.FONT_HERSHEY_SIMPLEX, config.FONT_SCALE, color, 2)
        y += 30

    return frame_copy
