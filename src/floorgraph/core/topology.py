"""Topology analysis for floor plan graphs.

This module exposes the plan as NetworkX graphs: the corner/wall graph
itself and the graph of detected rooms connected through shared walls.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set

import networkx as nx

from .model import Plan, Room


def build_plan_graph(plan: Plan) -> nx.MultiGraph:
    """Build the corner/wall graph.

    Nodes are corner ids carrying their position; edges are walls keyed by
    wall id. Walls referencing missing corners are left out.

    Args:
        plan: The plan to convert.

    Returns:
        NetworkX MultiGraph of corners and walls.
    """
    G = nx.MultiGraph()

    for corner_id, corner in plan.corners.items():
        G.add_node(corner_id, x=corner.x, y=corner.y)

    for wall_id, wall in plan.walls.items():
        if wall.start_corner_id not in plan.corners or wall.end_corner_id not in plan.corners:
            continue
        G.add_edge(
            wall.start_corner_id,
            wall.end_corner_id,
            key=wall_id,
            wall_type=wall.wall_type,
        )

    return G


def build_wall_adjacency(rooms: Iterable[Room]) -> Dict[str, Set[str]]:
    """Build adjacency mapping from walls to the rooms they bound.

    Args:
        rooms: Detected rooms.

    Returns:
        Dictionary mapping wall_id to set of room ids on either side.
    """
    adjacency: Dict[str, Set[str]] = {}
    for room in rooms:
        for wall in room.walls:
            adjacency.setdefault(wall.id, set()).add(room.id)
    return adjacency


def build_room_graph(rooms: Iterable[Room], plan: Plan, physical_only: bool = False) -> nx.Graph:
    """Build a graph representing room connectivity.

    Two rooms are connected when they share a wall. The edge records the
    shared wall ids and whether any of them carries a door.

    Args:
        rooms: Detected rooms.
        plan: Plan holding the doors.
        physical_only: If True, only keep connections through a door or a
            virtual (divider) wall.

    Returns:
        NetworkX Graph with room connectivity.
    """
    rooms = list(rooms)
    G = nx.Graph()

    for room in rooms:
        G.add_node(room.id, name=room.name, area=room.area)

    doored_walls = {door.wall_id for door in plan.doors.values()}

    for wall_id, room_ids in build_wall_adjacency(rooms).items():
        if len(room_ids) != 2:
            continue
        r1, r2 = sorted(room_ids)

        wall = plan.walls.get(wall_id)
        open_wall = wall_id in doored_walls or (wall is not None and wall.wall_type == "virtual")
        if physical_only and not open_wall:
            continue

        if G.has_edge(r1, r2):
            G[r1][r2]["wall_ids"].append(wall_id)
            G[r1][r2]["has_door"] = G[r1][r2]["has_door"] or wall_id in doored_walls
        else:
            G.add_edge(r1, r2, wall_ids=[wall_id], has_door=wall_id in doored_walls)

    return G


def dangling_corners(plan: Plan) -> List[str]:
    """Corners not touched by any wall."""
    G = build_plan_graph(plan)
    return [node for node in G.nodes if G.degree(node) == 0]
