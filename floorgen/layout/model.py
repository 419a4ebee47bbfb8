"""LevelModel: the read-only aggregate handed to renderers and spawners."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .config import FloorConfig
from .corridors import Corridor
from .partition import Partition
from .raster import Grid
from .rooms import Room, RoomType
from .tiles import TileType

# Letters drawn at room centres by to_ascii(annotate=True)
ROOM_TYPE_GLYPHS = {
    RoomType.ENTRANCE: "E",
    RoomType.EXIT: "X",
    RoomType.BOSS: "B",
    RoomType.SHOP: "S",
    RoomType.TREASURE: "T",
}


@dataclass
class LevelModel:
    width: int
    height: int
    seed: int
    floor_level: int
    root: Partition
    rooms: List[Room]
    corridors: List[Corridor]
    grid: Grid
    entrance_room: Room
    exit_room: Room
    boss_room: Optional[Room] = None
    candidates: List[Corridor] = field(default_factory=list, repr=False)
    metrics: Dict[str, Any] = field(default_factory=dict, repr=False)
    config: Optional[FloorConfig] = field(default=None, repr=False)

    # -- queries used by spawners / validators ---------------------------
    def tile_at(self, x: int, y: int) -> TileType:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return TileType.EMPTY
        return self.grid[x][y]

    def is_floor(self, x: int, y: int) -> bool:
        """Spawn validation: True only for in-bounds Floor tiles."""
        return self.tile_at(x, y) is TileType.FLOOR

    def room_at(self, x: int, y: int) -> Optional[Room]:
        for room in self.rooms:
            if room.contains(x, y):
                return room
        return None

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        return [r for r in self.rooms if r.room_type is room_type]

    def entrance_position(self, tile_size: float = 1.0) -> Tuple[float, float]:
        """World-space anchor at the middle of the Entrance room's centre tile."""
        cx, cy = self.entrance_room.center
        return ((cx + 0.5) * tile_size, (cy + 0.5) * tile_size)

    def spawn_points(self) -> Dict[int, List[Tuple[int, int]]]:
        """Spawn points keyed by room id, for rooms that have any."""
        return {r.id: list(r.spawn_points) for r in self.rooms if r.spawn_points}

    def door_tiles(self) -> List[Tuple[int, int]]:
        doors = set()
        for c in self.corridors:
            doors.add(c.entry_a)
            doors.add(c.entry_b)
        return sorted(doors)

    # -- serialisation ----------------------------------------------------
    def to_ascii(self, annotate: bool = False) -> str:
        glyphs = {}
        if annotate:
            for r in self.rooms:
                ch = ROOM_TYPE_GLYPHS.get(r.room_type)
                if ch:
                    glyphs[r.center] = ch
        lines = []
        for y in range(self.height):
            lines.append(
                "".join(glyphs.get((x, y), self.grid[x][y].char) for x in range(self.width)).rstrip()
            )
        return "\n".join(lines)

    def to_dict(self, include_grid: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "seed": self.seed,
            "floor_level": self.floor_level,
            "width": self.width,
            "height": self.height,
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "entrance": self.entrance_room.id,
            "exit": self.exit_room.id,
            "boss": self.boss_room.id if self.boss_room else None,
            "doors": [list(d) for d in self.door_tiles()],
        }
        if include_grid:
            # Row-major strings are friendlier to JSON consumers than grid[x][y].
            out["grid"] = [
                "".join(self.grid[x][y].char for x in range(self.width)) for y in range(self.height)
            ]
        if self.metrics:
            out["metrics"] = self.metrics
        return out


__all__ = ["LevelModel", "ROOM_TYPE_GLYPHS"]
