"""floorgraph - A Python library for editing floor plans as corner/wall graphs."""

__version__ = "0.1.0"

from .core.model import Corner, Door, Plan, Point, Room, Selection, Wall, Window

__all__ = ["Corner", "Door", "Plan", "Point", "Room", "Selection", "Wall", "Window"]
