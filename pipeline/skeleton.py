"""
Skeleton data model.
Joints, joint snapshots and whole-body skeletons as delivered per sensor frame.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional


class JointType(Enum):
    """Skeletal landmarks of the Kinect v1 skeleton (20 joints)."""
    HIP_CENTER = "hip_center"
    SPINE = "spine"
    SHOULDER_CENTER = "shoulder_center"
    HEAD = "head"
    SHOULDER_LEFT = "shoulder_left"
    ELBOW_LEFT = "elbow_left"
    WRIST_LEFT = "wrist_left"
    HAND_LEFT = "hand_left"
    SHOULDER_RIGHT = "shoulder_right"
    ELBOW_RIGHT = "elbow_right"
    WRIST_RIGHT = "wrist_right"
    HAND_RIGHT = "hand_right"
    HIP_LEFT = "hip_left"
    KNEE_LEFT = "knee_left"
    ANKLE_LEFT = "ankle_left"
    FOOT_LEFT = "foot_left"
    HIP_RIGHT = "hip_right"
    KNEE_RIGHT = "knee_right"
    ANKLE_RIGHT = "ankle_right"
    FOOT_RIGHT = "foot_right"


class TrackingState(Enum):
    """Per-joint tracking confidence."""
    NOT_TRACKED = "not_tracked"
    INFERRED = "inferred"
    TRACKED = "tracked"


class SkeletonTrackingState(Enum):
    """Per-skeleton tracking state."""
    NOT_TRACKED = "not_tracked"
    POSITION_ONLY = "position_only"
    TRACKED = "tracked"


class FrameEdges(Flag):
    """Edges of the field of view a skeleton is clipped by."""
    NONE = 0
    BOTTOM = 1
    TOP = 2
    LEFT = 4
    RIGHT = 8


class Point3D(NamedTuple):
    """Position in sensor space (y vertical, z depth)."""
    x: float
    y: float
    z: float


ORIGIN = Point3D(0.0, 0.0, 0.0)


def _expect_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Joint:
    """One tracked skeletal landmark."""
    joint_type: JointType
    position: Point3D = ORIGIN
    tracking_state: TrackingState = TrackingState.NOT_TRACKED

    @property
    def is_tracked(self) -> bool:
        return self.tracking_state is TrackingState.TRACKED

    @property
    def is_usable(self) -> bool:
        """False when the position carries no information."""
        return self.tracking_state is not TrackingState.NOT_TRACKED


class JointSnapshot(Mapping):
    """
    Read-only mapping JointType -> Joint for one skeleton at one instant.

    Landmarks missing from the snapshot read back as NOT_TRACKED joints at
    the origin, so lookups by JointType never raise.
    """

    __slots__ = ("_joints",)

    def __init__(self, joints: Optional[Mapping[JointType, Joint]] = None):
        joints = dict(joints or {})
        for joint_type, joint in joints.items():
            if joint.joint_type is not joint_type:
                raise ValueError(
                    f"Joint {joint.joint_type.value} stored under {joint_type.value}"
                )
        self._joints = MappingProxyType(joints)

    @classmethod
    def from_joints(cls, joints) -> "JointSnapshot":
        """Build a snapshot from an iterable of Joint objects."""
        return cls({joint.joint_type: joint for joint in joints})

    def __getitem__(self, joint_type: JointType) -> Joint:
        joint = self._joints.get(joint_type)
        if joint is None:
            return Joint(joint_type)
        return joint

    def __contains__(self, joint_type: object) -> bool:
        return joint_type in self._joints

    def __iter__(self) -> Iterator[JointType]:
        return iter(self._joints)

    def __len__(self) -> int:
        return len(self._joints)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JointSnapshot):
            return dict(self._joints) == dict(other._joints)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._joints.items()))

    def __repr__(self) -> str:
        return f"JointSnapshot({len(self)} joints)"

    def untracked(self, joint_types) -> List[JointType]:
        """Return those of joint_types whose joints are NOT_TRACKED."""
        return [jt for jt in joint_types if not self[jt].is_usable]

    def to_dict(self) -> Dict[str, Any]:
        return {
            jt.value: {
                "position": list(joint.position),
                "tracking_state": joint.tracking_state.value,
            }
            for jt, joint in self._joints.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JointSnapshot":
        joints = {}
        for name, item in _expect_mapping(data, "joints").items():
            item = _expect_mapping(item, f"joint {name!r}")
            joint_type = JointType(name)
            x, y, z = (float(v) for v in item["position"])
            joints[joint_type] = Joint(
                joint_type,
                Point3D(x, y, z),
                TrackingState(item.get("tracking_state", TrackingState.TRACKED.value)),
            )
        return cls(joints)


@dataclass(frozen=True)
class Skeleton:
    """One body in a sensor frame."""
    joints: JointSnapshot
    tracking_state: SkeletonTrackingState = SkeletonTrackingState.TRACKED
    tracking_id: int = 0
    position: Point3D = ORIGIN
    clipped_edges: FrameEdges = FrameEdges.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tracking_id": self.tracking_id,
            "tracking_state": self.tracking_state.value,
            "position": list(self.position),
            "clipped_edges": self.clipped_edges.value,
            "joints": self.joints.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Skeleton":
        data = _expect_mapping(data, "skeleton")
        x, y, z = (float(v) for v in data.get("position", ORIGIN))
        return cls(
            joints=JointSnapshot.from_dict(data.get("joints", {})),
            tracking_state=SkeletonTrackingState(
                data.get("tracking_state", SkeletonTrackingState.TRACKED.value)
            ),
            tracking_id=int(data.get("tracking_id", 0)),
            position=Point3D(x, y, z),
            clipped_edges=FrameEdges(int(data.get("clipped_edges", 0))),
        )


@dataclass
class SkeletonFrame:
    """All skeletons delivered by the source for one frame."""
    frame_number: int
    skeletons: List[Skeleton] = field(default_factory=list)
    timestamp: Optional[float] = None

    def tracked_skeletons(self) -> List[Skeleton]:
        return [
            s for s in self.skeletons
            if s.tracking_state is SkeletonTrackingState.TRACKED
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frame_number": self.frame_number,
            "timestamp": self.timestamp,
            "skeletons": [s.to_dict() for s in self.skeletons],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkeletonFrame":
        data = _expect_mapping(data, "frame")
        timestamp = data.get("timestamp")
        return cls(
            frame_number=int(data["frame_number"]),
            skeletons=[Skeleton.from_dict(s) for s in data.get("skeletons", [])],
            timestamp=float(timestamp) if timestamp is not None else None,
        )
