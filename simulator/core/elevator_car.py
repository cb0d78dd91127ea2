import simpy
from typing import List, Optional, Tuple

from config.door import parse_elevator_ref_num
from ..infrastructure.message_broker import MessageBroker
from ..infrastructure import topics
from ..interfaces.rigid_body import Pose
from ..physics.world import PhysicsWorld
from .entity import Entity


class ElevatorCar(Entity):
    """
    Scripted elevator car: the elevator side of the door controllers' world

    Visits the floors of its itinerary at constant speed, dwelling at each.
    Publishes the target floor when it departs, its estimated current floor
    whenever the nearest landing changes, and announces itself on the active
    set while in service.
    """
    def __init__(self, env: simpy.Environment, name: str, broker: MessageBroker, world: PhysicsWorld,
                 elevator_domain_space: str, num_floors: int, floor_height: float,
                 rated_speed: float = 1.0, dwell_time: float = 5.0, home_floor: int = 1,
                 itinerary: Optional[List[int]] = None, position: Tuple[float, float] = (0.0, 1.0)):
        self.broker = broker
        self.world = world
        self.car_id = parse_elevator_ref_num(name, elevator_domain_space)
        self.num_floors = num_floors
        self.floor_height = floor_height
        self.rated_speed = rated_speed
        self.dwell_time = dwell_time
        self.itinerary: List[int] = list(itinerary or [])
        self.current_floor = home_floor
        self.model = world.add_model(
            name, Pose(position[0], position[1], self.floor_elevation(home_floor)), link_names=("car",)
        )
        super().__init__(env, name)

    def floor_elevation(self, floor: int) -> float:
        return (floor - 1) * self.floor_height

    def nearest_floor(self, z: float) -> int:
        floor = int(round(z / self.floor_height)) + 1
        return max(1, min(self.num_floors, floor))

    def run(self):
        self.set_state("IDLE")
        self._publish(topics.ACTIVE_ELEVATORS_TOPIC, [self.car_id])
        self._publish(topics.estimated_floor_topic(self.name), self.current_floor)
        self._publish(topics.TARGET_FLOOR_TOPIC, self.current_floor)

        for floor in self.itinerary:
            yield from self._travel_to(floor)
            self.set_state("DWELL")
            yield self.env.timeout(self.dwell_time)

        self.set_state("OUT_OF_SERVICE")
        self._publish(topics.ACTIVE_ELEVATORS_TOPIC, [])

    def _travel_to(self, floor: int):
        """Move the car to the given floor's landing"""
        self._publish(topics.TARGET_FLOOR_TOPIC, floor)
        target_z = self.floor_elevation(floor)
        z = self.model.get_world_pose().z

        if abs(target_z - z) > 1e-9:
            direction = 1.0 if target_z > z else -1.0
            self.set_state("UP" if direction > 0 else "DOWN")
            self.model.set_linear_velocity((0.0, 0.0, direction * self.rated_speed))

            while (target_z - z) * direction > 0:
                yield self.env.timeout(self.world.tick)
                z = self.model.get_world_pose().z
                self._update_estimated_floor(z)

            # Level the car exactly at the landing
            self.model.set_linear_velocity((0.0, 0.0, 0.0))
            x, y, _ = self.model.get_world_position()
            self.model.set_world_position((x, y, target_z))

        self._update_estimated_floor(target_z)
        print(f"{self.env.now:.2f} [{self.name}] Arrived at floor {floor}")

    def _update_estimated_floor(self, z: float):
        floor = self.nearest_floor(z)
        if floor != self.current_floor:
            self.current_floor = floor
            self._publish(topics.estimated_floor_topic(self.name), floor)

    def _publish(self, topic: str, data):
        self.broker.put(topic, {'data': data, 'timestamp': self.env.now})
