"""
Utils: Projection
Maps sensor-space points (meters, y up, z depth) to screen pixels.
"""

import math
from typing import Dict, Optional, Tuple

import config
from pipeline.skeleton import JointType, Point3D, Skeleton, TrackingState


class SkeletonProjector:
    """
    Pinhole projection onto the render canvas.

    Defaults match the 640x480 depth stream of a Kinect v1 sensor.
    """

    def __init__(
        self,
        width: int = config.RENDER_WIDTH,
        height: int = config.RENDER_HEIGHT,
        focal_length: float = config.FOCAL_LENGTH_PX
    ):
        self.width = width
        self.height = height
        self.focal_length = focal_length

    def to_screen(self, point: Point3D) -> Optional[Tuple[int, int]]:
        """
        Project one point.

        Returns:
            (u, v) pixel coordinates, None for points at or behind the camera
            or with non-finite coordinates
        """
        if point.z <= 0:
            return None
        u = self.width / 2 + self.focal_length * point.x / point.z
        v = self.height / 2 - self.focal_length * point.y / point.z
        if not (math.isfinite(u) and math.isfinite(v)):
            return None
        return int(round(u)), int(round(v))

    def project(self, skeleton: Skeleton) -> Dict[JointType, Tuple[int, int]]:
        """Screen points of every usable joint of a skeleton."""
        points = {}
        for joint_type, joint in skeleton.joints.items():
            if joint.tracking_state is TrackingState.NOT_TRACKED:
                continue
            screen = self.to_screen(joint.position)
            if screen is not None:
                points[joint_type] = screen
        return points
