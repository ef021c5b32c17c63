"""Headless game simulation: geometry, platformer physics, particle emitters and arcade game models."""

__version__ = "0.1.0"