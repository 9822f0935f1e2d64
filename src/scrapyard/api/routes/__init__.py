"""Route group exports."""

from . import drivers, health, identity, pickups

__all__ = ["drivers", "health", "identity", "pickups"]
