"""Route group exports."""

from . import ai, evacuation, health, realtime

__all__ = ["ai", "evacuation", "health", "realtime"]
