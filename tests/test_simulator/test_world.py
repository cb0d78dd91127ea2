"""
Physics World Tests

Integration of free bodies, update hook ordering, and the IRigidBody
convenience accessors.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy

from simulator.interfaces.rigid_body import Pose
from simulator.physics.world import PhysicsWorld


def test_step_integrates_velocity():
    world = PhysicsWorld(simpy.Environment(), tick=0.1)
    model = world.add_model("box", Pose(1.0, 2.0, 3.0, 0.0, 0.0, 0.5))
    model.set_linear_velocity((1.0, -2.0, 0.5))

    for _ in range(10):
        world.step()

    pose = model.get_world_pose()
    assert pose.x == pytest.approx(2.0)
    assert pose.y == pytest.approx(0.0)
    assert pose.z == pytest.approx(3.5)
    assert pose.yaw == 0.5
    assert world.iterations == 10


def test_hooks_run_around_integration():
    world = PhysicsWorld(simpy.Environment(), tick=1.0)
    model = world.add_model("box", Pose())
    seen = []

    def begin():
        seen.append(('begin', model.get_world_pose().x))
        model.set_linear_velocity((1.0, 0.0, 0.0))

    world.connect_update_begin(begin)
    world.connect_update_end(lambda: seen.append(('end', model.get_world_pose().x)))
    world.step()

    assert seen == [('begin', 0.0), ('end', 1.0)]


def test_model_links_and_lookup():
    world = PhysicsWorld(simpy.Environment())
    model = world.add_model("door_model", Pose(), link_names=("door", "frame"))

    assert world.model_by_name("door_model") is model
    assert world.model_by_name("missing") is None
    assert model.get_link("door") is model.canonical_link
    assert model.get_link("handle") is None

    with pytest.raises(ValueError):
        world.add_model("door_model", Pose())
    with pytest.raises(ValueError):
        world.add_model("empty", Pose(), link_names=())


def test_model_pose_moves_every_link():
    world = PhysicsWorld(simpy.Environment(), tick=1.0)
    model = world.add_model("door_model", Pose(10.0, 0.0, 3.5), link_names=("frame", "door"))
    door = model.get_link("door")
    door.set_linear_velocity((-1.0, -1.0, 0.0))
    world.step()

    model.set_world_pose(Pose(12.0, 1.0, 3.5, 0.0, 0.0, 0.5))

    assert model.get_world_pose() == Pose(12.0, 1.0, 3.5, 0.0, 0.0, 0.5)
    pose = door.get_world_pose()
    assert pose.x == pytest.approx(11.0)
    assert pose.y == pytest.approx(0.0)
    assert pose.z == pytest.approx(3.5)
    assert pose.yaw == pytest.approx(0.5)


def test_position_and_orientation_accessors():
    world = PhysicsWorld(simpy.Environment())
    body = world.add_model("box", Pose(1.0, 1.0, 1.0, 0.1, 0.2, 0.3))

    body.set_world_position((4.0, 5.0, 6.0))
    assert body.get_world_position() == (4.0, 5.0, 6.0)
    assert body.get_orientation() == (0.1, 0.2, 0.3)

    body.set_orientation((0.0, 0.0, 1.0))
    assert body.get_world_pose() == Pose(4.0, 5.0, 6.0, 0.0, 0.0, 1.0)


def test_run_steps_once_per_tick():
    env = simpy.Environment()
    world = PhysicsWorld(env, tick=0.5)
    env.process(world.run())
    env.run(until=2.0)
    assert world.iterations == 4


def test_invalid_tick_rejected():
    with pytest.raises(ValueError):
        PhysicsWorld(simpy.Environment(), tick=0.0)
