"""
Configuration Tests

Tests for door plugin settings, shared parameters, and YAML scenario loading.
"""
