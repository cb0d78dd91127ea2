"""Interfaces for pluggable simulation components"""

from .rigid_body import IRigidBody, Pose

__all__ = [
    'IRigidBody',
    'Pose',
]
