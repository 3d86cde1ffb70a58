"""Core data models for floor plan graphs.

This module defines the fundamental data structures used to represent
a floor plan as a planar graph: corners (vertices), walls (edges between
two corners) and the openings placed along walls. Rooms are derived from
the graph and never stored on the plan.

All coordinates are in feet.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from .. import config

WALL_TYPES = ("solid", "virtual", "partition")
DOOR_TYPES = ("single", "double", "sliding", "french", "opening")
WINDOW_TYPES = ("standard", "bay", "picture", "sliding")
ROOM_TYPES = tuple(config.ROOM_TYPE_LABELS)


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in feet.

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Corner:
    """Represents a graph vertex.

    Attributes:
        id: Unique identifier for the corner.
        x: The x-coordinate in feet.
        y: The y-coordinate in feet.
        elevation: Floor elevation of the corner in feet.
    """

    id: str
    x: float
    y: float
    elevation: float = 0.0


@dataclass(frozen=True)
class Wall:
    """Represents a wall connecting two distinct corners.

    Attributes:
        id: Unique identifier for the wall.
        start_corner_id: ID of the corner the wall starts at.
        end_corner_id: ID of the corner the wall ends at.
        thickness: Wall thickness in feet.
        height: Wall height in feet.
        wall_type: One of "solid", "virtual" (room divider) or "partition".
    """

    id: str
    start_corner_id: str
    end_corner_id: str
    thickness: float = config.WALL_THICKNESS
    height: float = config.WALL_HEIGHT
    wall_type: str = "solid"

    def touches(self, corner_id: str) -> bool:
        return corner_id in (self.start_corner_id, self.end_corner_id)

    def other_corner(self, corner_id: str) -> str:
        """Return the endpoint opposite to ``corner_id``."""
        if self.start_corner_id == corner_id:
            return self.end_corner_id
        return self.start_corner_id

    @property
    def corner_pair(self) -> frozenset:
        return frozenset((self.start_corner_id, self.end_corner_id))


@dataclass(frozen=True)
class Door:
    """Represents a door placed on a wall.

    Attributes:
        id: Unique identifier for the door.
        wall_id: ID of the wall this door is on.
        position: Fraction of the wall length from the start corner to the
            door center, in [0, 1].
        type: Door style.
        width: Width of the door opening.
        height: Height of the door opening.
        orientation: Hinge/swing variant, 0-3.
    """

    id: str
    wall_id: str
    position: float
    type: str = "single"
    width: float = config.DOOR_WIDTH_SINGLE
    height: float = config.DOOR_HEIGHT
    orientation: int = 0


@dataclass(frozen=True)
class Window:
    """Represents a window placed on a wall.

    Attributes:
        id: Unique identifier for the window.
        wall_id: ID of the wall this window is on.
        position: Fraction of the wall length from the start corner to the
            window center, in [0, 1].
        type: Window style.
        width: Width of the window.
        height: Height of the window.
        sill_height: Height from the floor to the bottom of the window.
        orientation: Opening variant, 0-3.
    """

    id: str
    wall_id: str
    position: float
    type: str = "standard"
    width: float = config.WINDOW_WIDTH
    height: float = config.WINDOW_HEIGHT
    sill_height: float = config.WINDOW_SILL_HEIGHT
    orientation: int = 0


@dataclass(frozen=True)
class Room:
    """Represents a room traced from the corner/wall graph.

    Rooms are derived values. They are recomputed after every edit and are
    never part of a :class:`Plan`.

    Attributes:
        id: Canonical id, the sorted participant corner ids joined by ",".
        corners: The corner cycle in counter-clockwise order.
        walls: The walls bounding the room, one per consecutive corner pair.
        area: Enclosed area in square feet.
        center: Mean of the corner coordinates.
        name: Display name.
        type: Room classification (see ``ROOM_TYPES``).
    """

    id: str
    corners: tuple[Corner, ...]
    walls: tuple[Wall, ...]
    area: float
    center: Point
    name: str
    type: str = "other"

    @property
    def corner_ids(self) -> frozenset:
        return frozenset(c.id for c in self.corners)


@dataclass(frozen=True)
class Plan:
    """Represents a floor plan snapshot.

    Every entity lives in a flat mapping keyed by its id and every cross
    reference is an id. Mutations never change a plan in place; they return
    a new one.

    Attributes:
        corners: Mapping of corner ID to Corner objects.
        walls: Mapping of wall ID to Wall objects.
        doors: Mapping of door ID to Door objects.
        windows: Mapping of window ID to Window objects.
    """

    corners: Mapping[str, Corner] = field(default_factory=dict)
    walls: Mapping[str, Wall] = field(default_factory=dict)
    doors: Mapping[str, Door] = field(default_factory=dict)
    windows: Mapping[str, Window] = field(default_factory=dict)

    def replace(self, **changes) -> Plan:
        """Return a copy of the plan with some mappings swapped out."""
        return Plan(
            corners=changes.get("corners", self.corners),
            walls=changes.get("walls", self.walls),
            doors=changes.get("doors", self.doors),
            windows=changes.get("windows", self.windows),
        )

    def walls_at(self, corner_id: str) -> list[Wall]:
        """Walls touching a corner, in plan order."""
        return [w for w in self.walls.values() if w.touches(corner_id)]

    def find_wall_between(self, a: str, b: str) -> Wall | None:
        """Return the wall joining two corners in either direction."""
        pair = frozenset((a, b))
        for wall in self.walls.values():
            if wall.corner_pair == pair:
                return wall
        return None

    def wall_length(self, wall_id: str) -> float | None:
        """Length of a wall, or None if the wall or its corners are missing."""
        wall = self.walls.get(wall_id)
        if wall is None:
            return None
        start = self.corners.get(wall.start_corner_id)
        end = self.corners.get(wall.end_corner_id)
        if start is None or end is None:
            return None
        return math.hypot(end.x - start.x, end.y - start.y)


@dataclass(frozen=True)
class Selection:
    """A set of selected entity ids, passed explicitly between edits.

    Attributes:
        corner_ids: Selected corners.
        wall_ids: Selected walls.
        door_ids: Selected doors.
        window_ids: Selected windows.
    """

    corner_ids: frozenset = frozenset()
    wall_ids: frozenset = frozenset()
    door_ids: frozenset = frozenset()
    window_ids: frozenset = frozenset()

    def is_empty(self) -> bool:
        return not (self.corner_ids or self.wall_ids or self.door_ids or self.window_ids)
