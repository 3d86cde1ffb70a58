"""Parser for floor plan JSON snapshots.

This module converts between JSON snapshots and Plan objects. A snapshot
holds the only persisted entities, each with its stable id:

    {"corners": [...], "walls": [...], "doors": [...], "windows": [...]}

Keys use the editor's camelCase names (``startCornerId``, ``wallType``,
``sillHeight``). Rooms are never written; they are recomputed on load.
"""

import json
from pathlib import Path

from .. import config
from ..core.model import Corner, Door, Plan, Wall, Window


def _entries(data: dict, key: str) -> list:
    """Return a list of entity dicts, accepting lists or id-keyed objects."""
    value = data.get(key, [])
    if isinstance(value, dict):
        return [{"id": entity_id, **entity} for entity_id, entity in value.items()]
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list or an object, got {type(value).__name__}")
    return value


def plan_from_dict(data: dict) -> Plan:
    """Build a Plan from snapshot data.

    Args:
        data: Decoded snapshot JSON.

    Returns:
        Plan object with corners, walls, doors and windows.

    Raises:
        ValueError: If an entity is missing a required field or has an
            invalid value.
    """
    corners = {}
    for corner_data in _entries(data, "corners"):
        try:
            corner = Corner(
                id=str(corner_data["id"]),
                x=float(corner_data["x"]),
                y=float(corner_data["y"]),
                elevation=float(corner_data.get("elevation", 0.0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid corner data {corner_data!r}: {e}") from e
        corners[corner.id] = corner

    walls = {}
    for wall_data in _entries(data, "walls"):
        try:
            wall = Wall(
                id=str(wall_data["id"]),
                start_corner_id=str(wall_data["startCornerId"]),
                end_corner_id=str(wall_data["endCornerId"]),
                thickness=float(wall_data.get("thickness", config.WALL_THICKNESS)),
                height=float(wall_data.get("height", config.WALL_HEIGHT)),
                wall_type=wall_data.get("wallType", "solid"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid wall data {wall_data!r}: {e}") from e
        walls[wall.id] = wall

    doors = {}
    for door_data in _entries(data, "doors"):
        try:
            door_type = door_data.get("type", "single")
            door = Door(
                id=str(door_data["id"]),
                wall_id=str(door_data["wallId"]),
                position=float(door_data["position"]),
                type=door_type,
                width=float(door_data.get("width", config.DOOR_WIDTHS.get(door_type, config.DOOR_WIDTH_SINGLE))),
                height=float(door_data.get("height", config.DOOR_HEIGHT)),
                orientation=int(door_data.get("orientation", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid door data {door_data!r}: {e}") from e
        doors[door.id] = door

    windows = {}
    for window_data in _entries(data, "windows"):
        try:
            window = Window(
                id=str(window_data["id"]),
                wall_id=str(window_data["wallId"]),
                position=float(window_data["position"]),
                type=window_data.get("type", "standard"),
                width=float(window_data.get("width", config.WINDOW_WIDTH)),
                height=float(window_data.get("height", config.WINDOW_HEIGHT)),
                sill_height=float(window_data.get("sillHeight", config.WINDOW_SILL_HEIGHT)),
                orientation=int(window_data.get("orientation", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid window data {window_data!r}: {e}") from e
        windows[window.id] = window

    return Plan(corners=corners, walls=walls, doors=doors, windows=windows)


def plan_to_dict(plan: Plan) -> dict:
    """Convert a Plan to snapshot data."""
    return {
        "corners": [
            {"id": c.id, "x": c.x, "y": c.y, "elevation": c.elevation}
            for c in plan.corners.values()
        ],
        "walls": [
            {
                "id": w.id,
                "startCornerId": w.start_corner_id,
                "endCornerId": w.end_corner_id,
                "thickness": w.thickness,
                "height": w.height,
                "wallType": w.wall_type,
            }
            for w in plan.walls.values()
        ],
        "doors": [
            {
                "id": d.id,
                "wallId": d.wall_id,
                "position": d.position,
                "type": d.type,
                "width": d.width,
                "height": d.height,
                "orientation": d.orientation,
            }
            for d in plan.doors.values()
        ],
        "windows": [
            {
                "id": w.id,
                "wallId": w.wall_id,
                "position": w.position,
                "type": w.type,
                "width": w.width,
                "height": w.height,
                "sillHeight": w.sill_height,
                "orientation": w.orientation,
            }
            for w in plan.windows.values()
        ],
    }


def load_plan(path: str) -> Plan:
    """Load a floor plan from a JSON file.

    Args:
        path: Path to the JSON file containing the snapshot.

    Returns:
        Plan object representing the floor plan.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Plan file must contain a JSON object: {path}")

    return plan_from_dict(data)


def save_plan(plan: Plan, output_path: str) -> None:
    """Save a plan to a JSON file.

    Args:
        plan: The plan object to save.
        output_path: Path where to save the JSON file.
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, indent=2)
