"""
Door Logic Tests

Decision rules, slide velocities, and travel envelope clamping, exercised
with plain values and no simulation.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from config.door import ConfigurationError, DoorDirection, parse_elevator_ref_num
from controller.door_logic import (
    ControllerSnapshot,
    DoorAction,
    DoorCommand,
    HEIGHT_LEVEL_TOLERANCE,
    SlideVelocities,
    TravelEnvelope,
    decide_door_action,
    is_car_level,
)
from simulator.interfaces.rigid_body import Pose

OUTSIDE_COORDS = [-1e6, -3.0, 9.0, 9.2, 9.5, 10.0, 10.7, 11.0, 1e6]


def level_snapshot(command=DoorCommand.FREE, is_active=False):
    return ControllerSnapshot(target_floor=3, est_current_floor=3,
                              door_command=command, is_active=is_active)


def test_envelope_right_matches_known_scenario():
    envelope = TravelEnvelope.from_spawn(10.0, 0.0, DoorDirection.RIGHT, 0.7113)
    assert envelope.min_x == pytest.approx(9.2887)
    assert envelope.max_x == 10.0
    assert envelope.min_y == pytest.approx(-0.7113)
    assert envelope.max_y == 0.0

    velocities = SlideVelocities.from_direction(DoorDirection.RIGHT, 1.0)
    assert velocities.open_vel == -1.0
    assert velocities.close_vel == 1.0


def test_envelope_left_extends_positive():
    envelope = TravelEnvelope.from_spawn(-2.0, 5.0, DoorDirection.LEFT, 0.5)
    assert (envelope.min_x, envelope.max_x) == (-2.0, -1.5)
    assert (envelope.min_y, envelope.max_y) == (5.0, 5.5)

    velocities = SlideVelocities.from_direction(DoorDirection.LEFT, 0.8)
    assert velocities.open_vel == 0.8
    assert velocities.close_vel == -0.8


def test_envelope_is_well_formed_for_any_spawn():
    for spawn in [-100.0, -0.5, 0.0, 3.25, 1e4]:
        for dist in [0.0, 0.1, 0.711305, 25.0]:
            for direction in DoorDirection:
                envelope = TravelEnvelope.from_spawn(spawn, spawn, direction, dist)
                assert envelope.min_x <= envelope.max_x
                assert envelope.min_y <= envelope.max_y
                assert spawn in (envelope.min_x, envelope.max_x)
                assert envelope.max_x - envelope.min_x == pytest.approx(dist)


def test_malformed_envelope_rejected():
    with pytest.raises(ValueError):
        TravelEnvelope(min_x=1.0, max_x=0.0, min_y=0.0, max_y=1.0)
    with pytest.raises(ValueError):
        TravelEnvelope.from_spawn(0.0, 0.0, DoorDirection.LEFT, -1.0)


def test_clamp_keeps_position_inside_envelope():
    envelope = TravelEnvelope.from_spawn(10.0, 10.0, DoorDirection.RIGHT, 0.711305)
    for x in OUTSIDE_COORDS:
        for y in OUTSIDE_COORDS:
            clamped = envelope.clamp(Pose(x, y, 0.0))
            assert envelope.min_x <= clamped.x <= envelope.max_x
            assert envelope.min_y <= clamped.y <= envelope.max_y
            if envelope.contains(x, y):
                assert (clamped.x, clamped.y) == (x, y)


def test_clamp_axes_are_independent():
    envelope = TravelEnvelope(min_x=0.0, max_x=1.0, min_y=0.0, max_y=1.0)
    clamped = envelope.clamp(Pose(5.0, 0.5, 0.0))
    assert (clamped.x, clamped.y) == (1.0, 0.5)
    clamped = envelope.clamp(Pose(0.5, -5.0, 0.0))
    assert (clamped.x, clamped.y) == (0.5, 0.0)


def test_clamp_never_touches_height_or_orientation():
    envelope = TravelEnvelope.from_spawn(0.0, 0.0, DoorDirection.LEFT, 0.7)
    for pose in [Pose(-4.0, 9.0, 7.0, 0.1, -0.2, 3.1),
                 Pose(0.3, 0.3, -1.5, 0.0, 0.0, -1.57),
                 Pose(1e6, -1e6, 123.456, 2.0, 2.0, 2.0)]:
        clamped = envelope.clamp(pose)
        assert clamped.z == pose.z
        assert clamped.orientation == pose.orientation


def test_free_and_level_opens():
    assert decide_door_action(level_snapshot(), car_z=7.0, door_z=7.0) == DoorAction.OPEN


def test_floor_mismatch_closes_regardless_of_command():
    for command in DoorCommand:
        snapshot = ControllerSnapshot(target_floor=4, est_current_floor=3, door_command=command, is_active=True)
        assert decide_door_action(snapshot, car_z=7.0, door_z=7.0) == DoorAction.CLOSE


def test_car_out_of_level_closes_even_when_forced_open():
    snapshot = level_snapshot(DoorCommand.FORCE_OPEN)
    door_z = 7.0
    assert decide_door_action(snapshot, car_z=door_z + HEIGHT_LEVEL_TOLERANCE + 0.01, door_z=door_z) == DoorAction.CLOSE
    assert decide_door_action(snapshot, car_z=door_z - 3.5, door_z=door_z) == DoorAction.CLOSE


def test_tolerance_boundary_counts_as_level():
    assert is_car_level(1.5, 0.0)
    assert not is_car_level(1.5001, 0.0)
    snapshot = level_snapshot()
    assert decide_door_action(snapshot, car_z=HEIGHT_LEVEL_TOLERANCE, door_z=0.0) == DoorAction.OPEN


def test_force_open_when_level_opens():
    assert decide_door_action(level_snapshot(DoorCommand.FORCE_OPEN), 0.0, 0.0) == DoorAction.OPEN


def test_force_close_when_level_closes():
    assert decide_door_action(level_snapshot(DoorCommand.FORCE_CLOSE), 0.0, 0.0) == DoorAction.CLOSE


def test_unknown_floors_close():
    assert decide_door_action(ControllerSnapshot(), 0.0, 0.0) == DoorAction.CLOSE
    assert decide_door_action(ControllerSnapshot(target_floor=2), 0.0, 0.0) == DoorAction.CLOSE


def test_active_flag_ignored_by_default():
    snapshot = level_snapshot(is_active=False)
    assert decide_door_action(snapshot, 0.0, 0.0) == DoorAction.OPEN


def test_require_active_gates_opening():
    assert decide_door_action(level_snapshot(is_active=False), 0.0, 0.0, require_active=True) == DoorAction.CLOSE
    assert decide_door_action(level_snapshot(is_active=True), 0.0, 0.0, require_active=True) == DoorAction.OPEN


def test_door_command_parse():
    assert DoorCommand.parse(0) == DoorCommand.FORCE_CLOSE
    assert DoorCommand.parse(1) == DoorCommand.FORCE_OPEN
    assert DoorCommand.parse("2") == DoorCommand.FREE
    assert DoorCommand.parse(7) is None
    assert DoorCommand.parse(None) is None
    assert DoorCommand.parse("open") is None


def test_door_command_parse_rejects_non_integral_values():
    assert DoorCommand.parse(1.0) == DoorCommand.FORCE_OPEN
    assert DoorCommand.parse(1.7) is None
    assert DoorCommand.parse(0.5) is None
    assert DoorCommand.parse(True) is None
    assert DoorCommand.parse(False) is None


def test_slide_velocity_for_action():
    velocities = SlideVelocities.from_direction(DoorDirection.RIGHT, 2.0)
    assert velocities.for_action(DoorAction.OPEN) == -2.0
    assert velocities.for_action(DoorAction.CLOSE) == 2.0


def test_parse_elevator_ref_num():
    assert parse_elevator_ref_num("auto_elevator_1", "auto_elevator_") == 1
    assert parse_elevator_ref_num("auto_elevator_42b", "auto_elevator_") == 42
    assert parse_elevator_ref_num("auto_elevator_main", "auto_elevator_") == 0
    with pytest.raises(ConfigurationError):
        parse_elevator_ref_num("lift_1", "auto_elevator_")
