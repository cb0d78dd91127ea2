import simpy
import sys

# Configuration
from config import (
    ELEVATOR_DOMAIN_SPACE_PARAM,
    ScenarioConfig,
    SharedParameters,
    load_scenario_config
)

# Simulator components
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.parameter_server import ParameterServer
from simulator.infrastructure import topics
from simulator.interfaces.rigid_body import Pose
from simulator.physics.world import PhysicsWorld
from simulator.core.elevator_car import ElevatorCar

# Controller
from controller.auto_door import AutoDoorController

# Analyzer
from analyzer.door_trace import DoorTrace


def build_scenario(env: simpy.Environment, config: ScenarioConfig, verbose: bool = True):
    """
    Assemble the world, the car, and one door controller per floor

    Returns:
        (world, car, controllers, trace)

    Raises:
        ConfigurationError: If a required setting cannot be resolved
    """
    broker = MessageBroker(env, verbose=verbose)
    world = PhysicsWorld(env, tick=config.tick)

    # The elevator side publishes its domain space for every door to read
    params = ParameterServer()
    if config.elevator_domain_space is not None:
        params.set_param(ELEVATOR_DOMAIN_SPACE_PARAM, config.elevator_domain_space)
    shared = SharedParameters.from_parameter_server(params)

    car = ElevatorCar(
        env, config.car.name, broker, world,
        elevator_domain_space=shared.elevator_domain_space,
        num_floors=config.building.num_floors,
        floor_height=config.building.floor_height,
        rated_speed=config.car.rated_speed,
        dwell_time=config.car.dwell_time,
        home_floor=config.car.home_floor,
        itinerary=config.car.itinerary,
        position=config.car.position
    )

    door_x, door_y = config.building.door_position
    controllers = []
    for floor in range(1, config.building.num_floors + 1):
        name = config.door_model_name(floor)
        world.add_model(name, Pose(door_x, door_y, config.floor_elevation(floor)),
                        link_names=(config.door.door_link,))
        controller = AutoDoorController(name, broker, world, config.door, shared)
        for topic in controller.subscribed_topics:
            env.process(controller.start_listener(topic))
        controllers.append(controller)

    trace = DoorTrace(world)
    for controller in controllers:
        trace.register(controller)

    env.process(door_command_publisher(env, broker, config))
    env.process(world.run())

    return world, car, controllers, trace


def door_command_publisher(env, broker, config: ScenarioConfig):
    """Publish the scenario's scripted manual door commands"""
    for event in sorted(config.door_commands, key=lambda e: e.time):
        yield env.timeout(event.time - env.now)
        broker.put(topics.DOOR_COMMAND_TOPIC, {'data': event.command, 'timestamp': env.now})


def run_scenario(scenario_path="scenarios/single_car.yaml"):
    """
    Set up and run a whole scenario

    Args:
        scenario_path: Path to scenario configuration YAML file

    Returns:
        DoorTrace with the recorded run
    """
    print("--- Loading Configuration ---")
    config = load_scenario_config(scenario_path)
    print(f"Scenario Config: {scenario_path}")
    print(f"Summary: {config.get_summary()}")

    print("\n--- Simulation Setup ---")
    env = simpy.Environment()
    _, _, _, trace = build_scenario(env, config)

    print("\n--- Simulation Start ---")
    env.run(until=config.duration)
    print("--- Simulation End ---")

    trace.print_summary()
    if config.plot:
        trace.plot()

    return trace


def main():
    scenario_path = sys.argv[1] if len(sys.argv) > 1 else "scenarios/single_car.yaml"
    try:
        run_scenario(scenario_path)
    except (ValueError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
