"""
Door Logic

Pure decision and constraint functions behind the auto door controller.
Nothing here touches the physics world or the message broker, so every rule
can be exercised directly with plain values.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from config.door import DoorDirection
from simulator.interfaces.rigid_body import Pose

# Maximum car/door height difference (m) for the car to count as level
HEIGHT_LEVEL_TOLERANCE = 1.5


class DoorCommand(IntEnum):
    """Manual door command, wire values as published on the door topic"""
    FORCE_CLOSE = 0
    FORCE_OPEN = 1
    FREE = 2

    @classmethod
    def parse(cls, value) -> Optional['DoorCommand']:
        """
        Return the matching command, or None for unrecognized values

        Booleans and non-integral numbers are unrecognized rather than
        truncated; numeric strings such as "2" are accepted.
        """
        if isinstance(value, bool):
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        if not isinstance(value, str) and number != value:
            return None
        try:
            return cls(number)
        except ValueError:
            return None


class DoorAction(Enum):
    OPEN = "OPEN"
    CLOSE = "CLOSE"


@dataclass(frozen=True)
class ControllerSnapshot:
    """Inputs of one tick's decision, read once at the start of the tick"""
    target_floor: Optional[int] = None  # unknown until the first update
    est_current_floor: Optional[int] = None
    door_command: DoorCommand = DoorCommand.FREE
    is_active: bool = False

    def with_update(self, **changes) -> 'ControllerSnapshot':
        return replace(self, **changes)


@dataclass(frozen=True)
class SlideVelocities:
    """Signed slide speeds for opening and closing"""
    open_vel: float
    close_vel: float

    @classmethod
    def from_direction(cls, direction: DoorDirection, speed: float) -> 'SlideVelocities':
        if direction == DoorDirection.RIGHT:
            return cls(open_vel=-speed, close_vel=speed)
        return cls(open_vel=speed, close_vel=-speed)

    def for_action(self, action: DoorAction) -> float:
        return self.open_vel if action == DoorAction.OPEN else self.close_vel


@dataclass(frozen=True)
class TravelEnvelope:
    """
    Rectangular bound on the door's planar position

    Derived once from the spawn position: a right-sliding door travels
    towards negative coordinates, a left-sliding door towards positive ones.
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"Malformed travel envelope: {self}")

    @classmethod
    def from_spawn(cls, spawn_x: float, spawn_y: float,
                   direction: DoorDirection, max_trans_dist: float) -> 'TravelEnvelope':
        if max_trans_dist < 0:
            raise ValueError("max_trans_dist cannot be negative")
        if direction == DoorDirection.RIGHT:
            return cls(min_x=spawn_x - max_trans_dist, max_x=spawn_x,
                       min_y=spawn_y - max_trans_dist, max_y=spawn_y)
        return cls(min_x=spawn_x, max_x=spawn_x + max_trans_dist,
                   min_y=spawn_y, max_y=spawn_y + max_trans_dist)

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def clamp(self, pose: Pose) -> Pose:
        """
        Clamp X and Y into the envelope, independently per axis

        Z and the orientation components are carried over from the input pose.
        """
        x = float(np.clip(pose.x, self.min_x, self.max_x))
        y = float(np.clip(pose.y, self.min_y, self.max_y))
        return pose.with_planar_position(x, y)


def is_car_level(car_z: float, door_z: float, tolerance: float = HEIGHT_LEVEL_TOLERANCE) -> bool:
    """True when the car is within the tolerance band of the door's height"""
    return abs(car_z - door_z) <= tolerance


def decide_door_action(snapshot: ControllerSnapshot, car_z: float, door_z: float,
                       require_active: bool = False) -> DoorAction:
    """
    Decide whether the door should slide open or closed this tick

    Rules, first match wins:
        1. car not level with the door, or not yet at the target floor
           (including floors not yet received) -> close
        2. FORCE_OPEN -> open
        3. FORCE_CLOSE -> close
        4. FREE -> open

    With require_active, a car missing from the active set closes the door
    before any other rule is considered. It does not hold the door: a
    controller that skipped the update for an inactive car would leave the
    door sliding at its previous velocity, while this gate still yields
    exactly one open or close decision per tick.
    """
    if require_active and not snapshot.is_active:
        return DoorAction.CLOSE

    # Primary condition: the car is behind the door
    floors_match = snapshot.target_floor is not None and snapshot.est_current_floor == snapshot.target_floor
    if not is_car_level(car_z, door_z) or not floors_match:
        return DoorAction.CLOSE

    # Manual override
    if snapshot.door_command == DoorCommand.FORCE_OPEN:
        return DoorAction.OPEN
    if snapshot.door_command == DoorCommand.FORCE_CLOSE:
        return DoorAction.CLOSE

    return DoorAction.OPEN

