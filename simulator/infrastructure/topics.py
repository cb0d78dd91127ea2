"""Topic names shared by the elevator side and the door controllers"""

TARGET_FLOOR_TOPIC = "elevator_controller/target_floor"
DOOR_COMMAND_TOPIC = "elevator_controller/door"
ACTIVE_ELEVATORS_TOPIC = "elevator_controller/active"


def estimated_floor_topic(elevator_name: str) -> str:
    """Per-elevator topic carrying the estimated current floor"""
    return f"elevator_controller/{elevator_name}/estimated_current_floor"
