from enum import Enum


class TileType(Enum):
    EMPTY = "empty"
    FLOOR = "floor"
    WALL = "wall"

    @property
    def char(self) -> str:
        return TILE_CHARS[self]

    @property
    def walkable(self) -> bool:
        return self is TileType.FLOOR


# Single-character rendering used by ASCII dumps and the CLI
TILE_CHARS = {
    TileType.EMPTY: " ",
    TileType.FLOOR: ".",
    TileType.WALL: "#",
}

__all__ = ["TileType", "TILE_CHARS"]
