import math
import os
from dataclasses import dataclass, fields, replace
from typing import List, Optional

from .errors import ConfigurationError

ADJACENCY_STRATEGIES = ("siblings", "geometric")
CORRIDOR_WEIGHTS = ("length", "distance")
MIN_ROOM_SIZE = 4

_PROBABILITY_FIELDS = ("size_variance_chance", "random_axis_chance", "shop_chance", "treasure_chance")
_COUNT_FIELDS = ("boss_floor_interval", "max_shops", "max_treasures", "spawns_per_room", "spawn_padding")
_FALSEY = {"0", "false", "no", "off", ""}


def depth_for_bounds(width: int, height: int, min_partition_size: int) -> int:
    """Recursion depth needed to reach roughly min-sized leaves for the bounds."""
    cells = max(1, (width // max(1, min_partition_size)) * (height // max(1, min_partition_size)))
    return int(math.log2(cells)) + 1


@dataclass
class FloorConfig:
    width: int = 80
    height: int = 60
    # Partitioning
    min_partition_size: int = 10
    max_partition_size: int = 20
    max_depth: Optional[int] = None
    size_variance_chance: float = 0.25
    random_axis_chance: float = 0.1
    split_ratio_min: float = 0.4
    split_ratio_max: float = 0.6
    # Rooms
    min_room_size: int = 4
    min_padding: int = 1
    max_padding: int = 3
    # Connectivity
    adjacency: str = "siblings"
    corridor_weight: str = "length"
    # Room types
    floor_level: int = 1
    boss_floor_interval: int = 5
    shop_chance: float = 0.1
    max_shops: int = 1
    treasure_chance: float = 0.15
    max_treasures: int = 2
    # Enemy spawns (Combat and Boss rooms)
    spawns_per_room: int = 3
    spawn_padding: int = 1
    seed: Optional[int] = None
    enable_metrics: bool = True

    def resolved_max_depth(self) -> int:
        if self.max_depth is not None:
            return self.max_depth
        return depth_for_bounds(self.width, self.height, self.min_partition_size)

    def problems(self) -> List[str]:
        out = []
        if self.width <= 0 or self.height <= 0:
            out.append(f"bounds must be positive (got {self.width}x{self.height})")
        if self.min_partition_size < 1:
            out.append("min_partition_size must be >= 1")
        if self.min_partition_size >= self.max_partition_size:
            out.append(
                f"min_partition_size ({self.min_partition_size}) must be < "
                f"max_partition_size ({self.max_partition_size})"
            )
        if self.max_depth is not None and self.max_depth < 0:
            out.append("max_depth must be >= 0")
        for name in _PROBABILITY_FIELDS:
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                out.append(f"{name} must be within [0, 1] (got {v})")
        if not (0.0 < self.split_ratio_min <= self.split_ratio_max < 1.0):
            out.append(
                f"split ratios must satisfy 0 < min <= max < 1 "
                f"(got {self.split_ratio_min}, {self.split_ratio_max})"
            )
        # Two interior rows and columns per room keep every separated pair
        # routable by an L corridor; 3-wide rooms offset by one are not.
        if self.min_room_size < MIN_ROOM_SIZE:
            out.append(f"min_room_size must be >= {MIN_ROOM_SIZE}")
        if self.min_padding < 1:
            out.append("min_padding must be >= 1")
        if self.min_padding > self.max_padding:
            out.append(f"min_padding ({self.min_padding}) must be <= max_padding ({self.max_padding})")
        for name in _COUNT_FIELDS:
            if getattr(self, name) < 0:
                out.append(f"{name} must be >= 0")
        if self.floor_level < 1:
            out.append("floor_level must be >= 1")
        if self.adjacency not in ADJACENCY_STRATEGIES:
            out.append(f"adjacency must be one of {ADJACENCY_STRATEGIES} (got {self.adjacency!r})")
        if self.corridor_weight not in CORRIDOR_WEIGHTS:
            out.append(f"corridor_weight must be one of {CORRIDOR_WEIGHTS} (got {self.corridor_weight!r})")
        return out

    def validate(self) -> "FloorConfig":
        """Raise ConfigurationError listing every invalid field; return self otherwise."""
        problems = self.problems()
        if problems:
            raise ConfigurationError(problems)
        return self

    def with_overrides(self, **changes) -> "FloorConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, prefix: str = "FLOORGEN_", environ=None, **defaults) -> "FloorConfig":
        """Build a config from FLOORGEN_<FIELD> environment variables.

        Keyword arguments provide the base values; environment entries win.
        Malformed numbers raise ConfigurationError naming the variable.
        """
        environ = os.environ if environ is None else environ
        base = cls(**defaults)
        changes = {}
        problems = []
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key not in environ:
                continue
            raw = environ[key].strip()
            current = getattr(base, f.name)
            try:
                if isinstance(current, bool):
                    changes[f.name] = raw.lower() not in _FALSEY
                elif isinstance(current, float):
                    changes[f.name] = float(raw)
                elif isinstance(current, str):
                    changes[f.name] = raw
                else:
                    # int fields and the Optional[int] ones (seed, max_depth)
                    changes[f.name] = None if raw.lower() in ("", "none") else int(raw)
            except ValueError:
                problems.append(f"{key}={raw!r} is not a valid value for {f.name}")
        if problems:
            raise ConfigurationError(problems)
        return replace(base, **changes)


__all__ = ["FloorConfig", "depth_for_bounds", "ADJACENCY_STRATEGIES", "CORRIDOR_WEIGHTS", "MIN_ROOM_SIZE"]
