"""
Auto Door Simulator - World the door controllers run in

This package provides the kinematic physics world, the scripted elevator
car, and the messaging infrastructure connecting them to door controllers.
"""

__version__ = "0.1.0"

from .core.entity import Entity
from .core.elevator_car import ElevatorCar

from .interfaces.rigid_body import IRigidBody, Pose

from .physics.world import KinematicBody, Model, PhysicsWorld

from .infrastructure.message_broker import MessageBroker
from .infrastructure.parameter_server import ParameterServer

__all__ = [
    'Entity',
    'ElevatorCar',
    'IRigidBody',
    'Pose',
    'KinematicBody',
    'Model',
    'PhysicsWorld',
    'MessageBroker',
    'ParameterServer',
]
