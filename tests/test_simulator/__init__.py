"""
Simulator Tests

Tests for the physics world, the message broker, the scripted elevator car,
and whole scenarios.
"""
