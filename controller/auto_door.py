from collections import deque
from typing import Deque, Generator, List, Optional, Tuple

from config.door import AutoDoorConfig, ConfigurationError, SharedParameters, parse_elevator_ref_num
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure import topics
from simulator.interfaces.rigid_body import IRigidBody
from simulator.physics.world import PhysicsWorld
from .door_logic import (
    ControllerSnapshot,
    DoorAction,
    DoorCommand,
    SlideVelocities,
    TravelEnvelope,
    decide_door_action,
)


class AutoDoorController:
    """
    Drives one sliding landing door from the state of its elevator car

    The door body is a free body moved purely by velocity: each world update
    this controller drains its inbox into a snapshot, commands the open or
    close slide velocity, and, once the world has integrated, clamps the door
    back into its travel envelope.

    Architecture: the controller only talks to the elevator side through the
    MessageBroker and only touches bodies through IRigidBody handles, which it
    never owns.
    """
    def __init__(self, name: str, broker: MessageBroker, world: PhysicsWorld,
                 config: AutoDoorConfig, shared: SharedParameters):
        self.name = name
        self.broker = broker
        self.world = world
        self.config = config
        self.shared = shared

        self.state = ControllerSnapshot()
        self.last_action: Optional[DoorAction] = None
        self._inbox: Deque[Tuple[str, object]] = deque()
        self._handlers = {
            topics.TARGET_FLOOR_TOPIC: self.on_target_floor,
            topics.estimated_floor_topic(config.elevator_name): self.on_est_current_floor,
            topics.DOOR_COMMAND_TOPIC: self.on_door_command,
            topics.ACTIVE_ELEVATORS_TOPIC: self.on_active_elevators,
        }

        self._establish_links()
        self._init_vars()

        self.world.connect_update_begin(self.on_update_begin)
        self.world.connect_update_end(self.on_update_end)

        print(f"{self._now():.2f} [{self.name}] Auto door ready: elevator {config.elevator_name} "
              f"(id {self.elevator_ref_num}), direction {config.door_direction.value}, "
              f"envelope X[{self.envelope.min_x:.4f}, {self.envelope.max_x:.4f}] "
              f"Y[{self.envelope.min_y:.4f}, {self.envelope.max_y:.4f}]")

    # --- Setup ---

    def _establish_links(self):
        model = self.world.model_by_name(self.name)
        if model is None:
            raise ConfigurationError(f"Door model '{self.name}' does not exist in the world")
        door_link = model.get_link(self.config.door_link)
        if door_link is None:
            raise ConfigurationError(f"Door model '{self.name}' has no link '{self.config.door_link}'")

        self.model: IRigidBody = model
        self.door_link: IRigidBody = door_link

    def _init_vars(self):
        self.elevator_ref_num = parse_elevator_ref_num(
            self.config.elevator_name, self.shared.elevator_domain_space
        )

        self.velocities = SlideVelocities.from_direction(self.config.door_direction, self.config.speed)

        spawn = self.door_link.get_world_pose()
        self.envelope = TravelEnvelope.from_spawn(
            spawn.x, spawn.y, self.config.door_direction, self.config.max_trans_dist
        )

        elevator_model = self.world.model_by_name(self.config.elevator_name)
        if elevator_model is None:
            raise ConfigurationError(f"Elevator model '{self.config.elevator_name}' does not exist in the world")
        self.elevator_model: IRigidBody = elevator_model

    @property
    def subscribed_topics(self) -> List[str]:
        """Topics this controller listens to"""
        return list(self._handlers)

    def start_listener(self, topic: str) -> Generator:
        """
        Start a listener process for one of this controller's topics

        This method returns a generator that should be passed to env.process()
        by the simulator initialization code.
        """
        if topic not in self._handlers:
            raise ValueError(f"[{self.name}] Not listening to topic '{topic}'")
        return self._listener(topic, self.broker.subscribe(topic))

    def _listener(self, topic: str, pipe):
        while True:
            message = yield pipe.get()
            self.enqueue(topic, message.get('data') if isinstance(message, dict) else message)

    # --- Inbound updates ---

    def enqueue(self, topic: str, data):
        """Queue an inbound update; it takes effect at the next world update"""
        self._inbox.append((topic, data))

    def drain_inbox(self) -> ControllerSnapshot:
        """Apply every queued update in arrival order and return the resulting snapshot"""
        while self._inbox:
            topic, data = self._inbox.popleft()
            self._handlers[topic](data)
        return self.state

    def on_target_floor(self, data):
        floor = self._as_int(data, "target floor")
        if floor is not None:
            self.state = self.state.with_update(target_floor=floor)

    def on_est_current_floor(self, data):
        floor = self._as_int(data, "estimated current floor")
        if floor is not None:
            self.state = self.state.with_update(est_current_floor=floor)

    def on_door_command(self, data):
        command = DoorCommand.parse(data)
        if command is None:
            # Unknown values keep the previous command
            print(f"{self._now():.2f} [{self.name}] WARNING: Ignoring unrecognized door command {data!r}, "
                  f"keeping {self.state.door_command.name}")
            return
        if command != self.state.door_command:
            print(f"{self._now():.2f} [{self.name}] Door command -> {command.name}")
        self.state = self.state.with_update(door_command=command)

    def on_active_elevators(self, data):
        try:
            is_active = any(int(elevator_id) == self.elevator_ref_num for elevator_id in data)
        except (TypeError, ValueError):
            print(f"{self._now():.2f} [{self.name}] WARNING: Ignoring malformed active set {data!r}")
            return
        self.state = self.state.with_update(is_active=is_active)

    # --- World update hooks ---

    def on_update_begin(self):
        snapshot = self.drain_inbox()
        self.activate_door(snapshot)

    def on_update_end(self):
        self.check_slide_constraints()

    def activate_door(self, snapshot: ControllerSnapshot) -> DoorAction:
        """Command the slide velocity decided for this snapshot"""
        car_z = self.elevator_model.get_world_pose().z
        door_z = self.model.get_world_pose().z

        action = decide_door_action(snapshot, car_z, door_z, require_active=self.config.require_active)
        if action != self.last_action:
            print(f"{self._now():.2f} [{self.name}] {action.value} (target {snapshot.target_floor}, "
                  f"estimated {snapshot.est_current_floor}, command {snapshot.door_command.name}, "
                  f"active {snapshot.is_active})")
            self.last_action = action

        self._set_door_slide_vel(self.velocities.for_action(action))
        return action

    def _set_door_slide_vel(self, vel: float):
        # Both X and Y: the door may face either axis
        _, _, vz = self.door_link.get_linear_velocity()
        self.door_link.set_linear_velocity((vel, vel, vz))

    def check_slide_constraints(self):
        """
        Clamp the door back into its travel envelope and re-apply the pose

        Acts on the door link, the body the slide velocity is written to,
        which need not be the model's canonical link.
        """
        pose = self.door_link.get_world_pose()
        self.door_link.set_world_pose(self.envelope.clamp(pose))

    # --- Helpers ---

    def _as_int(self, data, label: str) -> Optional[int]:
        try:
            return int(data)
        except (TypeError, ValueError):
            print(f"{self._now():.2f} [{self.name}] WARNING: Ignoring malformed {label} {data!r}")
            return None

    def _now(self) -> float:
        return self.broker.get_current_time()
