"""Core data models for floor plan graphs."""

from .model import Corner, Door, Plan, Point, Room, Selection, Wall, Window
from .topology import build_plan_graph, build_room_graph, build_wall_adjacency

__all__ = [
    "Corner",
    "Door",
    "Plan",
    "Point",
    "Room",
    "Selection",
    "Wall",
    "Window",
    "build_plan_graph",
    "build_wall_adjacency",
    "build_room_graph",
]
