import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .config import FloorConfig
from .errors import RoomTypeAssignmentError
from .geometry import Rect
from .partition import Partition


class RoomType(Enum):
    UNASSIGNED = "unassigned"
    ENTRANCE = "entrance"
    EXIT = "exit"
    BOSS = "boss"
    COMBAT = "combat"
    SHOP = "shop"
    TREASURE = "treasure"


class RoomAccess(Enum):
    OPEN = "open"
    CLOSED = "closed"
    LOCKED = "locked"


# Rooms holding enemies start closed until cleared
_CLOSED_TYPES = (RoomType.COMBAT, RoomType.BOSS)
# Critical-path rooms are known to the player from the start
_REVEALED_TYPES = (RoomType.ENTRANCE, RoomType.EXIT)


@dataclass
class Room:
    id: int
    x: int
    y: int
    w: int
    h: int
    room_type: RoomType = RoomType.UNASSIGNED
    distance_from_entrance: Optional[int] = None
    access: RoomAccess = RoomAccess.OPEN
    revealed: bool = False
    spawn_points: List[Tuple[int, int]] = field(default_factory=list)
    partition: Optional[Rect] = field(default=None, repr=False, compare=False)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def cells(self):
        return self.rect.cells()

    def contains(self, px: int, py: int) -> bool:
        return self.rect.contains(px, py)

    def assign_type(self, room_type: RoomType):
        if self.room_type is not RoomType.UNASSIGNED:
            raise RoomTypeAssignmentError(
                f"room {self.id} already typed {self.room_type.value}", room_id=self.id
            )
        self.room_type = room_type
        self.access = RoomAccess.CLOSED if room_type in _CLOSED_TYPES else RoomAccess.OPEN
        self.revealed = room_type in _REVEALED_TYPES

    def lock(self):
        self.access = RoomAccess.LOCKED

    def clear(self):
        """Enemies defeated: a closed or locked room opens."""
        self.access = RoomAccess.OPEN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "center": list(self.center),
            "type": self.room_type.value,
            "distance": self.distance_from_entrance,
            "access": self.access.value,
            "revealed": self.revealed,
            "spawns": [list(p) for p in self.spawn_points],
        }


def carve_room(leaf: Partition, config: FloorConfig, rng=None, room_id: int = 0) -> Optional[Room]:
    """Carve one room inside `leaf`, or return None when the leaf is too small.

    The room keeps at least min_padding tiles on every side of the partition
    edge; the left/top padding is drawn up to max_padding where space allows.
    """
    if rng is None:
        rng = random
    r = leaf.rect
    avail_w = r.w - 2 * config.min_padding
    avail_h = r.h - 2 * config.min_padding
    if avail_w < config.min_room_size or avail_h < config.min_room_size:
        return None
    w = rng.randint(config.min_room_size, avail_w)
    h = rng.randint(config.min_room_size, avail_h)
    pad_x = rng.randint(config.min_padding, min(config.max_padding, r.w - w - config.min_padding))
    pad_y = rng.randint(config.min_padding, min(config.max_padding, r.h - h - config.min_padding))
    return Room(room_id, r.x + pad_x, r.y + pad_y, w, h, partition=r)


def carve_rooms(root: Partition, config: FloorConfig, rng=None) -> List[Room]:
    """Carve a room into every leaf that fits one; ids follow leaf order."""
    rooms: List[Room] = []
    for leaf in root.leaves():
        room = carve_room(leaf, config, rng, room_id=len(rooms))
        if room is not None:
            leaf.room = room
            rooms.append(room)
    return rooms


__all__ = ["RoomType", "RoomAccess", "Room", "carve_room", "carve_rooms"]
