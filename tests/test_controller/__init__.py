"""
Door Controller Tests

Tests for the door decision rules, the travel envelope, and the
AutoDoorController wired into a kinematic world.
"""
