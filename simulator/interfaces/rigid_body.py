"""
Rigid Body Interface

Minimal capability set a door controller needs from a physics engine body.
Each supported engine binding provides one adapter implementing IRigidBody.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Tuple

Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Pose:
    """World pose: position plus roll/pitch/yaw orientation"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0

    @property
    def position(self) -> Vector3:
        return (self.x, self.y, self.z)

    @property
    def orientation(self) -> Vector3:
        return (self.roll, self.pitch, self.yaw)

    def with_planar_position(self, x: float, y: float) -> 'Pose':
        """Copy of this pose with X/Y replaced; Z and orientation kept verbatim"""
        return replace(self, x=x, y=y)


class IRigidBody(ABC):
    """
    Interface for a physics-engine-owned rigid body

    Holders of an IRigidBody never own the body: its lifetime belongs
    to the physics engine.
    """

    @abstractmethod
    def get_world_pose(self) -> Pose:
        pass

    @abstractmethod
    def set_world_pose(self, pose: Pose):
        pass

    @abstractmethod
    def get_linear_velocity(self) -> Vector3:
        pass

    @abstractmethod
    def set_linear_velocity(self, velocity: Vector3):
        pass

    def get_world_position(self) -> Vector3:
        return self.get_world_pose().position

    def set_world_position(self, position: Vector3):
        x, y, z = position
        pose = self.get_world_pose()
        self.set_world_pose(replace(pose, x=x, y=y, z=z))

    def get_orientation(self) -> Vector3:
        return self.get_world_pose().orientation

    def set_orientation(self, orientation: Vector3):
        roll, pitch, yaw = orientation
        pose = self.get_world_pose()
        self.set_world_pose(replace(pose, roll=roll, pitch=pitch, yaw=yaw))
