"""
Kinematic physics world

A deliberately small stand-in for a full physics engine: free bodies with
no gravity and no collisions, whose positions are integrated from their
linear velocities once per step. Controllers hook into the start and end
of every world update, the same way engine plugins do.
"""

import numpy as np
import simpy
from typing import Callable, Dict, List, Optional, Sequence

from ..interfaces.rigid_body import IRigidBody, Pose, Vector3


class KinematicBody(IRigidBody):
    """IRigidBody adapter for bodies owned by PhysicsWorld"""

    def __init__(self, name: str, pose: Pose):
        self.name = name
        self._position = np.array(pose.position, dtype=float)
        self._orientation = np.array(pose.orientation, dtype=float)
        self._velocity = np.zeros(3)

    def get_world_pose(self) -> Pose:
        x, y, z = self._position
        roll, pitch, yaw = self._orientation
        return Pose(float(x), float(y), float(z), float(roll), float(pitch), float(yaw))

    def set_world_pose(self, pose: Pose):
        self._position = np.array(pose.position, dtype=float)
        self._orientation = np.array(pose.orientation, dtype=float)

    def get_linear_velocity(self) -> Vector3:
        vx, vy, vz = self._velocity
        return (float(vx), float(vy), float(vz))

    def set_linear_velocity(self, velocity: Vector3):
        self._velocity = np.array(velocity, dtype=float)

    def integrate(self, dt: float):
        self._position = self._position + self._velocity * dt


class Model(IRigidBody):
    """
    Named group of links

    The model's own pose and velocity are those of its canonical (first) link.
    """

    def __init__(self, name: str, pose: Pose, link_names: Sequence[str]):
        if not link_names:
            raise ValueError(f"Model '{name}' needs at least one link")
        self.name = name
        self.links: Dict[str, KinematicBody] = {
            link_name: KinematicBody(f"{name}::{link_name}", pose) for link_name in link_names
        }
        self.canonical_link = self.links[link_names[0]]

    def get_link(self, link_name: str) -> Optional[KinematicBody]:
        return self.links.get(link_name)

    def get_world_pose(self) -> Pose:
        return self.canonical_link.get_world_pose()

    def set_world_pose(self, pose: Pose):
        """
        Move the whole model so its canonical link lands on pose

        Every link is shifted by the canonical link's offset, so the links
        keep their placement relative to each other. Orientation offsets are
        applied per component; link offsets are translated, not rotated.
        """
        current = self.canonical_link.get_world_pose()
        shift = np.subtract(pose.position, current.position)
        turn = np.subtract(pose.orientation, current.orientation)
        for link in self.links.values():
            link_pose = link.get_world_pose()
            x, y, z = np.add(link_pose.position, shift)
            roll, pitch, yaw = np.add(link_pose.orientation, turn)
            link.set_world_pose(Pose(float(x), float(y), float(z), float(roll), float(pitch), float(yaw)))
        # Exact placement for the canonical link
        self.canonical_link.set_world_pose(pose)

    def get_linear_velocity(self) -> Vector3:
        return self.canonical_link.get_linear_velocity()

    def set_linear_velocity(self, velocity: Vector3):
        self.canonical_link.set_linear_velocity(velocity)


class PhysicsWorld:
    """
    Owns every model and advances simulation time in fixed ticks

    One tick: update-begin hooks -> integrate all bodies -> update-end hooks.
    """

    def __init__(self, env: simpy.Environment, tick: float = 0.01):
        if tick <= 0:
            raise ValueError("tick must be positive")
        self.env = env
        self.tick = tick
        self.models: Dict[str, Model] = {}
        self.iterations = 0
        self._update_begin: List[Callable[[], None]] = []
        self._update_end: List[Callable[[], None]] = []

    def add_model(self, name: str, pose: Pose, link_names: Sequence[str] = ("link",)) -> Model:
        if name in self.models:
            raise ValueError(f"Model '{name}' already exists")
        model = Model(name, pose, link_names)
        self.models[name] = model
        print(f"{self.env.now:.2f} [PhysicsWorld] Model '{name}' spawned at "
              f"({pose.x:.3f}, {pose.y:.3f}, {pose.z:.3f})")
        return model

    def model_by_name(self, name: str) -> Optional[Model]:
        return self.models.get(name)

    def connect_update_begin(self, callback: Callable[[], None]):
        self._update_begin.append(callback)

    def connect_update_end(self, callback: Callable[[], None]):
        self._update_end.append(callback)

    def step(self, dt: Optional[float] = None):
        """Run one full world update"""
        dt = self.tick if dt is None else dt
        for callback in self._update_begin:
            callback()
        for model in self.models.values():
            for link in model.links.values():
                link.integrate(dt)
        for callback in self._update_end:
            callback()
        self.iterations += 1

    def run(self):
        """SimPy process: step the world once per tick, forever"""
        while True:
            self.step()
            yield self.env.timeout(self.tick)
