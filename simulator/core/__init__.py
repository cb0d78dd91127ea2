"""Core simulation entities"""

from .entity import Entity
from .elevator_car import ElevatorCar

__all__ = [
    'Entity',
    'ElevatorCar',
]
