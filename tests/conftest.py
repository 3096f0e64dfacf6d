"""Shared skeleton builders."""

import pytest

from pipeline.skeleton import Joint, JointSnapshot, JointType, Point3D, TrackingState


def make_snapshot(heights=None, positions=None, state=TrackingState.TRACKED, untracked=()):
    """
    Build a snapshot with every joint TRACKED at the origin.

    Args:
        heights: {JointType: y} overrides for the vertical coordinate
        positions: {JointType: (x, y, z)} full position overrides
        state: Tracking state for every joint
        untracked: Joint types to mark NOT_TRACKED
    """
    heights = heights or {}
    positions = positions or {}
    joints = {}
    for jt in JointType:
        if jt in positions:
            point = Point3D(*positions[jt])
        else:
            point = Point3D(0.0, heights.get(jt, 0.0), 0.0)
        joint_state = TrackingState.NOT_TRACKED if jt in untracked else state
        joints[jt] = Joint(jt, point, joint_state)
    return JointSnapshot(joints)


def arms_snapshot(shoulder_left, elbow_left, wrist_left,
                  shoulder_right, elbow_right, wrist_right, **kwargs):
    return make_snapshot(heights={
        JointType.SHOULDER_LEFT: shoulder_left,
        JointType.ELBOW_LEFT: elbow_left,
        JointType.WRIST_LEFT: wrist_left,
        JointType.SHOULDER_RIGHT: shoulder_right,
        JointType.ELBOW_RIGHT: elbow_right,
        JointType.WRIST_RIGHT: wrist_right,
    }, **kwargs)


def leg_snapshot(knee, ankle, **kwargs):
    """knee/ankle given as (y, z); x is 0."""
    return make_snapshot(positions={
        JointType.KNEE_LEFT: (0.0, knee[0], knee[1]),
        JointType.ANKLE_LEFT: (0.0, ankle[0], ankle[1]),
    }, **kwargs)


@pytest.fixture
def cross_snapshot():
    """Arms classify CORRECT; the leg sits at 45 degrees (BELOW a 10 degree target)."""
    snapshot = make_snapshot(
        heights={
            JointType.SHOULDER_LEFT: 0.0, JointType.ELBOW_LEFT: 1.0,
            JointType.WRIST_LEFT: 1.0, JointType.SHOULDER_RIGHT: 0.0,
            JointType.ELBOW_RIGHT: 1.0, JointType.WRIST_RIGHT: 1.0,
        },
        positions={
            JointType.KNEE_LEFT: (0.0, -0.4, 2.0),
            JointType.ANKLE_LEFT: (0.0, -0.8, 1.6),
        },
    )
    return snapshot
