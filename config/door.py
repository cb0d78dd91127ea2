"""
Auto Door Configuration

Per-door plugin settings and the shared elevator parameters every door
controller needs at setup time. Resolved once, immutable afterwards.
"""

import re
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict

DEFAULT_MODEL_DOMAIN_SPACE = "auto_door_"
DEFAULT_SLIDE_DISTANCE = 0.711305
DEFAULT_SLIDE_SPEED = 1.0  # m/s
DEFAULT_DOOR_LINK = "door"

ELEVATOR_DOMAIN_SPACE_PARAM = "/model_dynamics_manager/elevator_domain_space"


class ConfigurationError(ValueError):
    """Raised when a required setting is missing or unusable at setup time."""


class DoorDirection(Enum):
    """Side the door panel slides towards when opening"""
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: str) -> 'DoorDirection':
        # Anything that is not exactly "right" slides left
        return cls.RIGHT if value == "right" else cls.LEFT


@dataclass(frozen=True)
class AutoDoorConfig:
    """Settings of a single automatic sliding door"""
    elevator_name: str
    model_domain_space: str = DEFAULT_MODEL_DOMAIN_SPACE
    door_direction: DoorDirection = DoorDirection.LEFT
    max_trans_dist: float = DEFAULT_SLIDE_DISTANCE  # meters
    speed: float = DEFAULT_SLIDE_SPEED  # m/s
    require_active: bool = False
    door_link: str = DEFAULT_DOOR_LINK

    def __post_init__(self):
        if not self.elevator_name:
            raise ConfigurationError("elevator_name cannot be empty")
        if self.max_trans_dist < 0:
            raise ConfigurationError("max_trans_dist cannot be negative")
        if self.speed <= 0:
            raise ConfigurationError("speed must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], owner: str = "AutoDoor") -> 'AutoDoorConfig':
        """
        Create AutoDoorConfig from a plugin settings dictionary

        Missing optional settings fall back to their defaults with a warning.
        A missing elevator_name is fatal: a door can only exist next to an elevator.

        Args:
            data: Plugin settings
            owner: Tag used in warning output

        Raises:
            ConfigurationError: If elevator_name is missing
        """
        if not data.get('elevator_name'):
            raise ConfigurationError(
                "Elevator name not specified in the plugin reference. "
                "An auto door can exist only if there is a corresponding elevator."
            )

        if 'model_domain_space' not in data:
            print(f"[{owner}] WARNING: Model domain space not specified. "
                  f"Defaulting to '{DEFAULT_MODEL_DOMAIN_SPACE}'")
        if 'door_direction' not in data:
            print(f"[{owner}] WARNING: Door direction not specified. Defaulting to 'left'")
        if 'max_trans_dist' not in data:
            print(f"[{owner}] WARNING: Maximum translation distance not specified. "
                  f"Defaulting to '{DEFAULT_SLIDE_DISTANCE}'")
        if 'speed' not in data:
            print(f"[{owner}] WARNING: Sliding speed not specified. "
                  f"Defaulting to '{DEFAULT_SLIDE_SPEED} m/s'")

        return cls(
            elevator_name=str(data['elevator_name']),
            model_domain_space=str(data.get('model_domain_space', DEFAULT_MODEL_DOMAIN_SPACE)),
            door_direction=DoorDirection.parse(data.get('door_direction', 'left')),
            max_trans_dist=float(data.get('max_trans_dist', DEFAULT_SLIDE_DISTANCE)),
            speed=float(data.get('speed', DEFAULT_SLIDE_SPEED)),
            require_active=bool(data.get('require_active', False)),
            door_link=str(data.get('door_link', DEFAULT_DOOR_LINK)),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        data = asdict(self)
        data['door_direction'] = self.door_direction.value
        return data


@dataclass(frozen=True)
class SharedParameters:
    """
    Parameters published by the elevator side and shared by every door

    The host resolves these once from the process-wide parameter store and
    hands them to each controller explicitly.
    """
    elevator_domain_space: str

    def __post_init__(self):
        if not self.elevator_domain_space:
            raise ConfigurationError("elevator_domain_space cannot be empty")

    @classmethod
    def from_parameter_server(cls, params) -> 'SharedParameters':
        """
        Resolve shared parameters from a ParameterServer

        Raises:
            ConfigurationError: If the elevator domain space was never published
        """
        if not params.has_param(ELEVATOR_DOMAIN_SPACE_PARAM):
            raise ConfigurationError(
                "The parameter 'elevator_domain_space' does not exist. "
                "Check that the elevator side sets this param"
            )
        return cls(elevator_domain_space=str(params.get_param(ELEVATOR_DOMAIN_SPACE_PARAM)))


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_elevator_ref_num(elevator_name: str, elevator_domain_space: str) -> int:
    """
    Derive the numeric elevator id from its model name

    The first occurrence of the domain space prefix is removed and the leading
    integer of what remains is the id; no leading digits yields 0.

    Raises:
        ConfigurationError: If the name does not contain the domain space
    """
    if elevator_domain_space not in elevator_name:
        raise ConfigurationError(
            f"Elevator name '{elevator_name}' does not contain the elevator "
            f"domain space '{elevator_domain_space}'"
        )
    remainder = elevator_name.replace(elevator_domain_space, "", 1)
    match = _LEADING_INT.match(remainder)
    return int(match.group(1)) if match else 0
