"""Actuator components for garden simulation."""

from gardensim.components.actuators.sprinkler import Sprinkler

__all__ = [
    "Sprinkler",
]
