"""Operations engine for floor plan editing.

This module wraps the graph editing functions as named operations that can
be dispatched from plain dictionaries, as produced by an editor front end:
``{"op": "split_wall", "wall": "w1", "point": {"x": 2, "y": 0}}``.

Points are given as ``{"x": ..., "y": ...}`` dicts or ``[x, y]`` pairs, ids
as strings. ``precheck`` reports whether the referenced entities exist;
operations whose precheck fails are skipped by the API rather than raising.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol

from .. import config
from ..core.model import Door, Plan, Point, Selection, Wall, Window
from ..geom import edit
from .rooms import detect_rooms


class Operation(Protocol):
    """Protocol for plan editing operations.

    All operations must implement this interface to be compatible
    with the operation registry and execution engine.
    """

    def precheck(self, plan: Plan, **kwargs: Any) -> bool:
        """Check that the entities the operation references exist.

        Args:
            plan: The plan to check against.
            **kwargs: Operation-specific parameters.

        Returns:
            True if the operation would change the plan, False if it is a
            no-op.
        """
        ...

    def apply(self, plan: Plan, **kwargs: Any) -> Plan:
        """Apply the operation to the plan.

        Args:
            plan: The plan to modify.
            **kwargs: Operation-specific parameters.

        Returns:
            A new Plan object with the operation applied.
        """
        ...


def to_point(value: Any) -> Point:
    """Convert a ``{"x", "y"}`` dict, an ``(x, y)`` pair or a Point."""
    if isinstance(value, Point):
        return value
    if isinstance(value, dict):
        return Point(float(value["x"]), float(value["y"]))
    x, y = value
    return Point(float(x), float(y))


def _selection(
    corners: Optional[Iterable[str]] = None,
    walls: Optional[Iterable[str]] = None,
    doors: Optional[Iterable[str]] = None,
    windows: Optional[Iterable[str]] = None,
) -> Selection:
    return Selection(
        corner_ids=frozenset(corners or ()),
        wall_ids=frozenset(walls or ()),
        door_ids=frozenset(doors or ()),
        window_ids=frozenset(windows or ()),
    )


# --------------------------------------------------------------------------- #
# Corners
# --------------------------------------------------------------------------- #
class AddCornerOp:
    """Operation to add a corner at a point."""

    def precheck(self, plan: Plan, **kwargs: Any) -> bool:
        return True

    def apply(
        self, plan: Plan, x: float, y: float, id: Optional[str] = None, elevation: float = 0.0, **kwargs: Any
    ) -> Plan:
        return edit.add_corner(plan, x, y, corner_id=id, elevation=elevation)


class UpdateCornerOp:
    """Operation to move a corner to new coordinates.

    Walls follow the corner since they only reference it by id. With
    ``merge`` set, a corner dropped near another one is merged into it.
    """

    def precheck(self, plan: Plan, corner: str, **kwargs: Any) -> bool:
        return corner in plan.corners

    def apply(self, plan: Plan, corner: str, x: float, y: float, merge: bool = False, **kwargs: Any) -> Plan:
        if merge:
            return edit.drop_corner(plan, corner, x, y)
        return edit.update_corner(plan, corner, x, y)


class DeleteCornerOp:
    """Operation to delete a corner, merging its walls when it joins exactly two."""

    def precheck(self, plan: Plan, corner: str, **kwargs: Any) -> bool:
        return corner in plan.corners

    def apply(self, plan: Plan, corner: str, **kwargs: Any) -> Plan:
        return edit.delete_corner(plan, corner)


class MergeCornersOp:
    """Operation to merge a source corner into a target corner."""

    def precheck(self, plan: Plan, source: str, target: str, **kwargs: Any) -> bool:
        return source != target and source in plan.corners and target in plan.corners

    def apply(self, plan: Plan, source: str, target: str, **kwargs: Any) -> Plan:
        return edit.merge_corners(plan, source, target)


# --------------------------------------------------------------------------- #
# Walls
# --------------------------------------------------------------------------- #
class AddWallOp:
    """Operation to add a wall between two existing corners.

    Degenerate and duplicate walls are not rejected here unless ``checked``
    is set, in which case the wall is only added when it is new.
    """

    def precheck(self, plan: Plan, start: str, end: str, **kwargs: Any) -> bool:
        return start in plan.corners and end in plan.corners

    def apply(
        self,
        plan: Plan,
        start: str,
        end: str,
        id: Optional[str] = None,
        thickness: float = config.WALL_THICKNESS,
        height: float = config.WALL_HEIGHT,
        wall_type: str = "solid",
        checked: bool = False,
        **kwargs: Any,
    ) -> Plan:
        if checked:
            return edit.connect_corners(
                plan, start, end, wall_id=id, thickness=thickness, height=height, wall_type=wall_type
            )
        wall = Wall(
            id=id or edit.new_id("wall"),
            start_corner_id=start,
            end_corner_id=end,
            thickness=thickness,
            height=height,
            wall_type=wall_type,
        )
        return edit.add_wall(plan, wall)


class UpdateWallOp:
    """Operation to change wall thickness, height or type."""

    def precheck(self, plan: Plan, wall: str, **kwargs: Any) -> bool:
        return wall in plan.walls

    def apply(
        self,
        plan: Plan,
        wall: str,
        thickness: Optional[float] = None,
        height: Optional[float] = None,
        wall_type: Optional[str] = None,
        **kwargs: Any,
    ) -> Plan:
        return edit.update_wall(plan, wall, thickness=thickness, height=height, wall_type=wall_type)


class DeleteWallOp:
    def precheck(self, plan: Plan, wall: str, **kwargs: Any) -> bool:
        return wall in plan.walls

    def apply(self, plan: Plan, wall: str, **kwargs: Any) -> Plan:
        return edit.delete_wall(plan, wall)


class SplitWallOp:
    """Operation to insert a corner into a wall, splitting it in two."""

    def precheck(self, plan: Plan, wall: str, **kwargs: Any) -> bool:
        return wall in plan.walls

    def apply(self, plan: Plan, wall: str, point: Any, corner_id: Optional[str] = None, **kwargs: Any) -> Plan:
        return edit.split_wall(plan, wall, to_point(point), corner_id=corner_id)


class AddRectangleOp:
    """Operation to draw a rectangular room from two opposite corners."""

    def precheck(self, plan: Plan, **kwargs: Any) -> bool:
        return True

    def apply(
        self, plan: Plan, start: Any, end: Any, snap_radius: float = config.SNAP_CORNER_RADIUS, **kwargs: Any
    ) -> Plan:
        return edit.add_rectangle(plan, to_point(start), to_point(end), snap_radius=snap_radius)


# --------------------------------------------------------------------------- #
# Openings
# --------------------------------------------------------------------------- #
class AddDoorOp:
    """Operation to add a door.

    The door is placed either on ``wall`` at ``position`` or, when a
    ``point`` is given instead, on the wall nearest to that point.
    """

    def precheck(self, plan: Plan, wall: Optional[str] = None, point: Any = None, **kwargs: Any) -> bool:
        if wall is not None:
            return wall in plan.walls
        return point is not None and bool(plan.walls)

    def apply(
        self,
        plan: Plan,
        wall: Optional[str] = None,
        position: float = 0.5,
        point: Any = None,
        door_type: str = "single",
        width: Optional[float] = None,
        height: float = config.DOOR_HEIGHT,
        orientation: int = 0,
        id: Optional[str] = None,
        **kwargs: Any,
    ) -> Plan:
        if wall is None:
            return edit.place_door(plan, to_point(point), door_type=door_type, door_id=id)

        door = Door(
            id=id or edit.new_id("door"),
            wall_id=wall,
            position=position,
            type=door_type,
            width=width if width is not None else config.DOOR_WIDTHS.get(door_type, config.DOOR_WIDTH_SINGLE),
            height=height,
            orientation=orientation,
        )
        return edit.add_door(plan, door)


class UpdateDoorOp:
    def precheck(self, plan: Plan, door: str, **kwargs: Any) -> bool:
        return door in plan.doors

    def apply(
        self,
        plan: Plan,
        door: str,
        position: Optional[float] = None,
        door_type: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        orientation: Optional[int] = None,
        **kwargs: Any,
    ) -> Plan:
        return edit.update_door(
            plan, door, position=position, type=door_type, width=width, height=height, orientation=orientation
        )


class DeleteDoorOp:
    def precheck(self, plan: Plan, door: str, **kwargs: Any) -> bool:
        return door in plan.doors

    def apply(self, plan: Plan, door: str, **kwargs: Any) -> Plan:
        return edit.delete_door(plan, door)


class AddWindowOp:
    """Operation to add a window, on a wall or at the wall nearest a point."""

    def precheck(self, plan: Plan, wall: Optional[str] = None, point: Any = None, **kwargs: Any) -> bool:
        if wall is not None:
            return wall in plan.walls
        return point is not None and bool(plan.walls)

    def apply(
        self,
        plan: Plan,
        wall: Optional[str] = None,
        position: float = 0.5,
        point: Any = None,
        window_type: str = "standard",
        width: float = config.WINDOW_WIDTH,
        height: float = config.WINDOW_HEIGHT,
        sill_height: float = config.WINDOW_SILL_HEIGHT,
        orientation: int = 0,
        id: Optional[str] = None,
        **kwargs: Any,
    ) -> Plan:
        if wall is None:
            return edit.place_window(plan, to_point(point), window_type=window_type, window_id=id)

        window = Window(
            id=id or edit.new_id("window"),
            wall_id=wall,
            position=position,
            type=window_type,
            width=width,
            height=height,
            sill_height=sill_height,
            orientation=orientation,
        )
        return edit.add_window(plan, window)


class UpdateWindowOp:
    def precheck(self, plan: Plan, window: str, **kwargs: Any) -> bool:
        return window in plan.windows

    def apply(
        self,
        plan: Plan,
        window: str,
        position: Optional[float] = None,
        window_type: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        sill_height: Optional[float] = None,
        orientation: Optional[int] = None,
        **kwargs: Any,
    ) -> Plan:
        return edit.update_window(
            plan,
            window,
            position=position,
            type=window_type,
            width=width,
            height=height,
            sill_height=sill_height,
            orientation=orientation,
        )


class DeleteWindowOp:
    def precheck(self, plan: Plan, window: str, **kwargs: Any) -> bool:
        return window in plan.windows

    def apply(self, plan: Plan, window: str, **kwargs: Any) -> Plan:
        return edit.delete_window(plan, window)


# --------------------------------------------------------------------------- #
# Selections and rooms
# --------------------------------------------------------------------------- #
class DeleteSelectionOp:
    """Operation to delete a batch of selected entities."""

    def precheck(self, plan: Plan, **kwargs: Any) -> bool:
        return not _selection(
            kwargs.get("corners"), kwargs.get("walls"), kwargs.get("doors"), kwargs.get("windows")
        ).is_empty()

    def apply(
        self,
        plan: Plan,
        corners: Optional[Iterable[str]] = None,
        walls: Optional[Iterable[str]] = None,
        doors: Optional[Iterable[str]] = None,
        windows: Optional[Iterable[str]] = None,
        **kwargs: Any,
    ) -> Plan:
        return edit.delete_selection(plan, _selection(corners, walls, doors, windows))


class MoveSelectionOp:
    """Operation to nudge selected corners by an offset."""

    def precheck(self, plan: Plan, corners: Iterable[str] = (), **kwargs: Any) -> bool:
        return any(cid in plan.corners for cid in corners)

    def apply(self, plan: Plan, dx: float, dy: float, corners: Iterable[str] = (), **kwargs: Any) -> Plan:
        return edit.move_selection(plan, _selection(corners), dx, dy)


class RotateSelectionOp:
    """Operation to rotate selected corners and cycle selected opening orientations."""

    def precheck(self, plan: Plan, **kwargs: Any) -> bool:
        return (
            any(cid in plan.corners for cid in kwargs.get("corners") or ())
            or any(did in plan.doors for did in kwargs.get("doors") or ())
            or any(wid in plan.windows for wid in kwargs.get("windows") or ())
        )

    def apply(
        self,
        plan: Plan,
        degrees: float,
        corners: Optional[Iterable[str]] = None,
        doors: Optional[Iterable[str]] = None,
        windows: Optional[Iterable[str]] = None,
        **kwargs: Any,
    ) -> Plan:
        return edit.rotate_selection(plan, _selection(corners, doors=doors, windows=windows), degrees)


class RotateRoomOp:
    """Operation to rotate a detected room about its center.

    The room is identified by its canonical id in the current plan.
    """

    def _find(self, plan: Plan, room: str):
        for candidate in detect_rooms(plan.corners, plan.walls):
            if candidate.id == room:
                return candidate
        return None

    def precheck(self, plan: Plan, room: str, **kwargs: Any) -> bool:
        return self._find(plan, room) is not None

    def apply(self, plan: Plan, room: str, degrees: float, **kwargs: Any) -> Plan:
        found = self._find(plan, room)
        if found is None:
            return plan
        return edit.rotate_room(plan, found, degrees)


# Operation registry
_OPERATIONS: Dict[str, Operation] = {
    "add_corner": AddCornerOp(),
    "update_corner": UpdateCornerOp(),
    "delete_corner": DeleteCornerOp(),
    "merge_corners": MergeCornersOp(),
    "add_wall": AddWallOp(),
    "update_wall": UpdateWallOp(),
    "delete_wall": DeleteWallOp(),
    "split_wall": SplitWallOp(),
    "add_rectangle": AddRectangleOp(),
    "add_door": AddDoorOp(),
    "update_door": UpdateDoorOp(),
    "delete_door": DeleteDoorOp(),
    "add_window": AddWindowOp(),
    "update_window": UpdateWindowOp(),
    "delete_window": DeleteWindowOp(),
    "delete_selection": DeleteSelectionOp(),
    "move_selection": MoveSelectionOp(),
    "rotate_selection": RotateSelectionOp(),
    "rotate_room": RotateRoomOp(),
}


def register_operation(name: str, operation: Operation) -> None:
    """Register a new operation in the registry.

    Args:
        name: Name of the operation.
        operation: Operation instance to register.
    """
    _OPERATIONS[name] = operation


def get_operation(name: str) -> Operation:
    """Get an operation by name.

    Args:
        name: Name of the operation.

    Returns:
        The operation instance.

    Raises:
        KeyError: If the operation is not registered.
    """
    if name not in _OPERATIONS:
        raise KeyError(f"Operation '{name}' is not registered")
    return _OPERATIONS[name]


def list_operations() -> list[str]:
    """List all registered operations.

    Returns:
        List of operation names.
    """
    return list(_OPERATIONS.keys())
