"""
Door Trace Analyzer

Per-tick recording and reporting of door positions, used to verify that
every door stays inside its travel envelope.
"""

__version__ = "0.1.0"

from .door_trace import DoorTrace

__all__ = ['DoorTrace']
