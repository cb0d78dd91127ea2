"""Kinematic physics world and rigid body adapters"""

from .world import KinematicBody, Model, PhysicsWorld

__all__ = [
    'KinematicBody',
    'Model',
    'PhysicsWorld',
]
