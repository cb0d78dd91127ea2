"""
Scenario Configuration

Describes the simulated world the door controllers run in: building geometry,
the elevator car and its itinerary, the door settings shared by every floor,
and scripted manual door commands.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

from .door import AutoDoorConfig


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 5
    floor_height: float = 3.5  # meters
    door_position: Tuple[float, float] = (0.0, 0.0)  # X, Y of every closed door

    def __post_init__(self):
        if self.num_floors < 2:
            raise ValueError("num_floors must be at least 2")
        if self.floor_height <= 0:
            raise ValueError("floor_height must be positive")
        if len(self.door_position) != 2:
            raise ValueError("door_position must be [x, y]")
        self.door_position = (float(self.door_position[0]), float(self.door_position[1]))


@dataclass
class CarConfig:
    """Elevator car specifications"""
    name: str = "auto_elevator_1"
    rated_speed: float = 1.0  # m/s
    dwell_time: float = 5.0  # seconds
    home_floor: int = 1
    itinerary: List[int] = field(default_factory=list)
    position: Tuple[float, float] = (0.0, 1.0)  # X, Y of the car body

    def __post_init__(self):
        if not self.name:
            raise ValueError("car name cannot be empty")
        if self.rated_speed <= 0:
            raise ValueError("rated_speed must be positive")
        if self.dwell_time < 0:
            raise ValueError("dwell_time cannot be negative")
        self.position = (float(self.position[0]), float(self.position[1]))


@dataclass
class DoorCommandEvent:
    """Manual door command published at a fixed simulation time"""
    time: float
    command: int  # 0=FORCE_CLOSE, 1=FORCE_OPEN, 2=FREE

    def __post_init__(self):
        if self.time < 0:
            raise ValueError("door command time cannot be negative")


@dataclass
class ScenarioConfig:
    """
    Complete scenario configuration

    elevator_domain_space is published to the parameter store by the host,
    standing in for the elevator side of the world.
    """
    building: BuildingConfig
    car: CarConfig
    door: AutoDoorConfig
    elevator_domain_space: Optional[str] = "auto_elevator_"
    door_commands: List[DoorCommandEvent] = field(default_factory=list)
    tick: float = 0.01  # seconds
    duration: float = 60.0  # seconds
    plot: bool = False

    def __post_init__(self):
        if self.tick <= 0:
            raise ValueError("tick must be positive")
        if self.duration <= 0:
            raise ValueError("duration must be positive")

    @classmethod
    def from_dict(cls, data: dict) -> 'ScenarioConfig':
        """Create ScenarioConfig from dictionary"""
        scenario_data = data.get('scenario', data)

        building_data = scenario_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 5),
            floor_height=building_data.get('floor_height', 3.5),
            door_position=tuple(building_data.get('door_position', (0.0, 0.0)))
        )

        car_data = scenario_data.get('car', {})
        car = CarConfig(
            name=car_data.get('name', 'auto_elevator_1'),
            rated_speed=car_data.get('rated_speed', 1.0),
            dwell_time=car_data.get('dwell_time', 5.0),
            home_floor=car_data.get('home_floor', 1),
            itinerary=list(car_data.get('itinerary', [])),
            position=tuple(car_data.get('position', (0.0, 1.0)))
        )

        # The door block is the plugin reference; its warnings are emitted here
        door = AutoDoorConfig.from_dict(scenario_data.get('door', {}), owner="ScenarioConfig")

        door_commands = [
            DoorCommandEvent(time=float(item['time']), command=int(item['command']))
            for item in scenario_data.get('door_commands', [])
        ]

        return cls(
            building=building,
            car=car,
            door=door,
            elevator_domain_space=scenario_data.get('elevator_domain_space', 'auto_elevator_'),
            door_commands=door_commands,
            tick=scenario_data.get('tick', 0.01),
            duration=scenario_data.get('duration', 60.0),
            plot=scenario_data.get('plot', False)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'scenario': {
                'building': {
                    'num_floors': self.building.num_floors,
                    'floor_height': self.building.floor_height,
                    'door_position': list(self.building.door_position)
                },
                'car': {
                    'name': self.car.name,
                    'rated_speed': self.car.rated_speed,
                    'dwell_time': self.car.dwell_time,
                    'home_floor': self.car.home_floor,
                    'itinerary': list(self.car.itinerary),
                    'position': list(self.car.position)
                },
                'door': self.door.to_dict(),
                'door_commands': [
                    {'time': event.time, 'command': event.command}
                    for event in self.door_commands
                ],
                'tick': self.tick,
                'duration': self.duration,
                'plot': self.plot
            }
        }

        if self.elevator_domain_space is not None:
            result['scenario']['elevator_domain_space'] = self.elevator_domain_space

        return result

    def validate(self):
        """Validate configuration consistency"""
        floors = [self.car.home_floor] + list(self.car.itinerary)
        for floor in floors:
            if not (1 <= floor <= self.building.num_floors):
                raise ValueError(f"car floor {floor} must be between 1 and {self.building.num_floors}")

        if self.door.elevator_name != self.car.name:
            raise ValueError(
                f"door.elevator_name ({self.door.elevator_name}) must match car.name ({self.car.name})"
            )

    def door_model_name(self, floor: int) -> str:
        """Name of the door model serving the given floor"""
        return f"{self.door.model_domain_space}{floor}"

    def floor_elevation(self, floor: int) -> float:
        """Height of the given floor's landing (floor 1 is at zero)"""
        return (floor - 1) * self.building.floor_height

    def get_summary(self) -> Dict[str, Any]:
        return {
            'floors': self.building.num_floors,
            'car': self.car.name,
            'itinerary': list(self.car.itinerary),
            'door_direction': self.door.door_direction.value,
            'duration': self.duration,
        }
