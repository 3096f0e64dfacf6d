import pytest

from conftest import make_snapshot
from pipeline.skeleton import (
    FrameEdges,
    Joint,
    JointSnapshot,
    JointType,
    Point3D,
    Skeleton,
    SkeletonFrame,
    SkeletonTrackingState,
    TrackingState,
)


def test_missing_joint_reads_as_not_tracked():
    snapshot = JointSnapshot()
    joint = snapshot[JointType.ELBOW_LEFT]
    assert joint.joint_type is JointType.ELBOW_LEFT
    assert joint.tracking_state is TrackingState.NOT_TRACKED
    assert not joint.is_usable
    assert JointType.ELBOW_LEFT not in snapshot


def test_snapshot_is_read_only():
    snapshot = make_snapshot()
    with pytest.raises(TypeError):
        snapshot[JointType.HEAD] = Joint(JointType.HEAD)
    with pytest.raises(TypeError):
        snapshot._joints[JointType.HEAD] = Joint(JointType.HEAD)


def test_snapshot_copies_its_input():
    joints = {JointType.HEAD: Joint(JointType.HEAD, Point3D(0, 1, 2), TrackingState.TRACKED)}
    snapshot = JointSnapshot(joints)
    joints.clear()
    assert JointType.HEAD in snapshot


def test_snapshot_rejects_mismatched_keys():
    with pytest.raises(ValueError):
        JointSnapshot({JointType.HEAD: Joint(JointType.SPINE)})


def test_untracked_lists_only_not_tracked_joints():
    snapshot = make_snapshot(state=TrackingState.INFERRED, untracked=(JointType.KNEE_LEFT,))
    wanted = (JointType.KNEE_LEFT, JointType.ANKLE_LEFT)
    assert snapshot.untracked(wanted) == [JointType.KNEE_LEFT]


def test_from_joints_and_equality():
    joints = [Joint(jt, Point3D(1.0, 2.0, 3.0), TrackingState.TRACKED) for jt in JointType]
    assert JointSnapshot.from_joints(joints) == JointSnapshot.from_joints(reversed(joints))
    assert len(JointSnapshot.from_joints(joints)) == len(JointType)


def test_skeleton_dict_round_trip():
    skeleton = Skeleton(
        joints=make_snapshot(heights={JointType.WRIST_LEFT: 0.4}, untracked=(JointType.HEAD,)),
        tracking_state=SkeletonTrackingState.TRACKED,
        tracking_id=2,
        position=Point3D(0.1, 0.2, 2.5),
        clipped_edges=FrameEdges.LEFT | FrameEdges.BOTTOM,
    )
    assert Skeleton.from_dict(skeleton.to_dict()) == skeleton


def test_joint_tracking_state_defaults_to_tracked_when_decoding():
    snapshot = JointSnapshot.from_dict({"knee_left": {"position": [0, -0.4, 2.0]}})
    assert snapshot[JointType.KNEE_LEFT].is_tracked


def test_tracked_skeletons():
    frame = SkeletonFrame(1, [
        Skeleton(make_snapshot(), SkeletonTrackingState.POSITION_ONLY, tracking_id=1),
        Skeleton(make_snapshot(), SkeletonTrackingState.TRACKED, tracking_id=2),
    ])
    assert [s.tracking_id for s in frame.tracked_skeletons()] == [2]
