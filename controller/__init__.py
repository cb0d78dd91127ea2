"""
Auto Elevator Door Controller

This package provides the door controller that slides landing doors open
and closed in step with the elevator car.
"""

__version__ = "0.1.0"

from .auto_door import AutoDoorController
from .door_logic import (
    ControllerSnapshot,
    DoorAction,
    DoorCommand,
    SlideVelocities,
    TravelEnvelope,
    decide_door_action,
)

__all__ = [
    'AutoDoorController',
    'ControllerSnapshot',
    'DoorAction',
    'DoorCommand',
    'SlideVelocities',
    'TravelEnvelope',
    'decide_door_action',
]
