"""Floor layout generation: BSP partitions, rooms, corridors and tile grid.

Typical use::

    from floorgen.layout import FloorConfig, generate_floor

    result = generate_floor(FloorConfig(seed=42))
    if result.ok:
        print(result.level.to_ascii())
"""

from .config import FloorConfig
from .errors import (
    ConfigurationError,
    DisconnectedError,
    GenerationError,
    NoRoomsError,
    RoomTypeAssignmentError,
)
from .model import LevelModel
from .pipeline import FloorGenerator, GenerationResult, generate_floor
from .rooms import Room, RoomAccess, RoomType
from .tiles import TileType

__all__ = [
    "FloorConfig",
    "FloorGenerator",
    "GenerationResult",
    "generate_floor",
    "LevelModel",
    "Room",
    "RoomType",
    "RoomAccess",
    "TileType",
    "ConfigurationError",
    "GenerationError",
    "NoRoomsError",
    "DisconnectedError",
    "RoomTypeAssignmentError",
]
