"""Structural invariant checks for a generated LevelModel.

Used by scripts/diagnose_seeds.py and the test suite. Each check returns a
list of human-readable problems; an empty list means the invariant holds.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from .corridors import Corridor
from .geometry import manhattan
from .model import LevelModel
from .raster import orphaned_floor_cells, rasterize
from .room_types import build_adjacency, graph_distances
from .rooms import RoomAccess, RoomType
from .spawns import SPAWN_ROOM_TYPES
from .tiles import TileType


def check_partitions(level: LevelModel) -> List[str]:
    problems = []
    for node in level.root.internal_nodes():
        a, b = node.left.rect, node.right.rect
        if a.intersects(b):
            problems.append(f"children of {tuple(node.rect)} overlap")
        if a.area + b.area != node.rect.area or not (
            node.rect.contains_rect(a) and node.rect.contains_rect(b)
        ):
            problems.append(f"children of {tuple(node.rect)} do not tile it")
    if sum(p.rect.area for p in level.root.leaves()) != level.width * level.height:
        problems.append("leaf areas do not sum to the floor area")
    return problems


def check_rooms(level: LevelModel, min_padding: Optional[int] = None) -> List[str]:
    if min_padding is None:
        min_padding = level.config.min_padding if level.config else 1
    problems = []
    for leaf in level.root.leaves():
        room = leaf.room
        if room is None:
            continue
        if not leaf.rect.shrink(min_padding).contains_rect(room.rect):
            problems.append(f"room {room.id} escapes its partition interior")
        if room.room_type is RoomType.UNASSIGNED:
            problems.append(f"room {room.id} has no type")
    return problems


def check_corridor(corridor: Corridor) -> List[str]:
    problems = []
    a, b = corridor.room_a.rect, corridor.room_b.rect
    tiles = corridor.tiles
    if len(set(tiles)) != len(tiles):
        problems.append(f"corridor {corridor.room_ids} repeats a tile")
    if any(a.contains(*t) or b.contains(*t) for t in tiles):
        problems.append(f"corridor {corridor.room_ids} enters a room")
    if len(tiles) > manhattan(corridor.entry_a, corridor.entry_b) + 1:
        problems.append(f"corridor {corridor.room_ids} longer than its Manhattan bound")
    for p, q in zip(tiles, tiles[1:]):
        if manhattan(p, q) != 1:
            problems.append(f"corridor {corridor.room_ids} is not contiguous at {p}->{q}")
            break
    return problems


def check_connectivity(level: LevelModel) -> List[str]:
    problems = []
    if len(level.corridors) != len(level.rooms) - 1:
        problems.append(f"{len(level.corridors)} corridors for {len(level.rooms)} rooms")
    adjacency = build_adjacency(level.rooms, level.corridors)
    reached = graph_distances(adjacency, level.entrance_room.id)
    if len(reached) != len(level.rooms):
        problems.append(f"{len(level.rooms) - len(reached)} rooms unreachable from entrance")
    entrances = level.rooms_of_type(RoomType.ENTRANCE)
    if len(entrances) != 1:
        problems.append(f"{len(entrances)} entrance rooms")
    if len(level.rooms) > 1 and len(level.rooms_of_type(RoomType.EXIT)) != 1:
        problems.append("exit room missing")
    return problems


def check_raster(level: LevelModel) -> List[str]:
    problems = []
    if len(level.grid) != level.width or any(len(col) != level.height for col in level.grid):
        problems.append("grid dimensions differ from floor bounds")
        return problems
    for room in level.rooms:
        if any(level.grid[x][y] is not TileType.FLOOR for x, y in room.cells()):
            problems.append(f"room {room.id} has non-floor tiles")
    for c in level.corridors:
        if any(level.grid[x][y] is not TileType.FLOOR for x, y in c.tiles):
            problems.append(f"corridor {c.room_ids} has non-floor tiles")
    orphans = orphaned_floor_cells(level.grid)
    if orphans:
        problems.append(f"{len(orphans)} orphaned floor cells")
    if rasterize(level.width, level.height, level.rooms, level.corridors) != level.grid:
        problems.append("re-rasterizing produced a different grid")
    return problems


def check_spawns(level: LevelModel) -> List[str]:
    problems = []
    doors = set(level.door_tiles())
    for room in level.rooms:
        points = room.spawn_points
        if points and room.room_type not in SPAWN_ROOM_TYPES:
            problems.append(f"{room.room_type.value} room {room.id} has spawn points")
        if len(set(points)) != len(points):
            problems.append(f"room {room.id} repeats a spawn point")
        for p in points:
            if not room.contains(*p) or not level.is_floor(*p):
                problems.append(f"room {room.id} spawn {p} is not a floor tile of the room")
            elif p in doors:
                problems.append(f"room {room.id} spawn {p} blocks a doorway")
        expected = RoomAccess.CLOSED if room.room_type in SPAWN_ROOM_TYPES else RoomAccess.OPEN
        if room.access is not expected:
            problems.append(f"room {room.id} starts {room.access.value}, expected {expected.value}")
    return problems


def analyze(level: LevelModel) -> Dict[str, List[str]]:
    corridor_problems = []
    for c in level.corridors:
        corridor_problems.extend(check_corridor(c))
    return {
        "partitions": check_partitions(level),
        "rooms": check_rooms(level),
        "corridors": corridor_problems,
        "connectivity": check_connectivity(level),
        "raster": check_raster(level),
        "spawns": check_spawns(level),
    }


__all__ = [
    "analyze",
    "check_partitions",
    "check_rooms",
    "check_corridor",
    "check_connectivity",
    "check_raster",
    "check_spawns",
]
