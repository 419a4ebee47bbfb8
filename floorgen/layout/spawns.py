"""Enemy spawn points for Combat and Boss rooms.

Runs after rasterization so every point can be checked against the final
grid: a spawn point is always a Floor tile inside its room, at least
`spawn_padding` tiles from the room edge, and never a corridor doorway.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Sequence, Set

from ..logging_utils import get_logger
from .config import FloorConfig
from .corridors import Corridor
from .geometry import Point
from .raster import Grid
from .rooms import Room, RoomType
from .tiles import TileType

log = get_logger("floorgen.spawns")

SPAWN_ROOM_TYPES = (RoomType.COMBAT, RoomType.BOSS)


def spawn_cells(room: Room, grid: Grid, padding: int, blocked: Iterable[Point] = ()) -> List[Point]:
    """Floor cells of `room` inset by `padding`, minus `blocked`, in x-then-y order."""
    blocked = set(blocked)
    out = []
    for x in range(room.x + padding, room.x + room.w - padding):
        for y in range(room.y + padding, room.y + room.h - padding):
            if (x, y) in blocked:
                continue
            if 0 <= x < len(grid) and 0 <= y < len(grid[0]) and grid[x][y] is TileType.FLOOR:
                out.append((x, y))
    return out


def place_spawns(room: Room, grid: Grid, count: int, padding: int, rng=None, blocked=()) -> List[Point]:
    if rng is None:
        rng = random
    cells = spawn_cells(room, grid, padding, blocked)
    if not cells:
        if count:
            log.debug(event="room_too_small_for_spawns", room=room.id, w=room.w, h=room.h, padding=padding)
        return []
    return sorted(rng.sample(cells, min(count, len(cells))))


def assign_spawn_points(
    rooms: Sequence[Room],
    corridors: Sequence[Corridor],
    grid: Grid,
    config: FloorConfig,
    rng=None,
) -> int:
    """Fill `spawn_points` on every Combat/Boss room, in id order; return the total."""
    doors: Set[Point] = set()
    for c in corridors:
        doors.add(c.entry_a)
        doors.add(c.entry_b)
    total = 0
    for room in rooms:
        room.spawn_points = []
        if room.room_type not in SPAWN_ROOM_TYPES:
            continue
        room.spawn_points = place_spawns(
            room, grid, config.spawns_per_room, config.spawn_padding, rng, blocked=doors
        )
        total += len(room.spawn_points)
    return total


__all__ = ["SPAWN_ROOM_TYPES", "spawn_cells", "place_spawns", "assign_spawn_points"]
