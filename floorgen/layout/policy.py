"""Configuration policy that lives outside the generation core.

The core rejects bad configs outright. Callers that take user input (the
HTTP layer) clamp it first with `clamp_config`, and callers building a run
of floors grow the bounds with `scaled_config`.
"""
from __future__ import annotations

import hashlib
import random
from dataclasses import replace

from .config import ADJACENCY_STRATEGIES, CORRIDOR_WEIGHTS, MIN_ROOM_SIZE, FloorConfig

MIN_BOUND = 8
MAX_BOUND = 200
FLOOR_GROWTH = 10
MAX_FLOOR_SIZE = 160
SEED_MAX = 9223372036854775807


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def coerce_seed(raw):
    """Convert a provided seed (int or str) into a bounded non-negative int.

    Numeric strings are used as-is; any other text is hashed so a seed like
    "crypt-of-ash" always maps to the same floor. None or blank picks a
    random seed.
    """
    if raw is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw, int):
        return raw % SEED_MAX
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def scaled_config(
    base: FloorConfig,
    floor_level: int,
    growth: int = FLOOR_GROWTH,
    max_size: int = MAX_FLOOR_SIZE,
) -> FloorConfig:
    """Config for `floor_level`, growing bounds from `base` as levels go deeper.

    Each level past the first adds `growth` tiles, alternating width then
    height, with neither dimension exceeding `max_size` (or the base size if
    that is already larger).
    """
    floor_level = max(1, floor_level)
    steps = floor_level - 1
    width_steps = (steps + 1) // 2
    height_steps = steps // 2
    width = min(max(base.width, max_size), base.width + width_steps * growth)
    height = min(max(base.height, max_size), base.height + height_steps * growth)
    return replace(base, width=width, height=height, floor_level=floor_level)


def clamp_config(config: FloorConfig) -> FloorConfig:
    """Return a copy pulled into the ranges FloorConfig.validate() accepts."""
    width = _clamp(config.width, MIN_BOUND, MAX_BOUND)
    height = _clamp(config.height, MIN_BOUND, MAX_BOUND)
    min_part = _clamp(config.min_partition_size, 1, max(1, min(width, height)))
    max_part = max(config.max_partition_size, min_part + 1)
    min_pad = max(1, config.min_padding)
    ratio_min = _clamp(config.split_ratio_min, 0.05, 0.95)
    ratio_max = _clamp(config.split_ratio_max, ratio_min, 0.95)
    return replace(
        config,
        width=width,
        height=height,
        min_partition_size=min_part,
        max_partition_size=max_part,
        max_depth=None if config.max_depth is None else _clamp(config.max_depth, 0, 16),
        size_variance_chance=_clamp(config.size_variance_chance, 0.0, 1.0),
        random_axis_chance=_clamp(config.random_axis_chance, 0.0, 1.0),
        split_ratio_min=ratio_min,
        split_ratio_max=ratio_max,
        min_room_size=max(MIN_ROOM_SIZE, config.min_room_size),
        min_padding=min_pad,
        max_padding=max(min_pad, config.max_padding),
        adjacency=config.adjacency if config.adjacency in ADJACENCY_STRATEGIES else "siblings",
        corridor_weight=config.corridor_weight if config.corridor_weight in CORRIDOR_WEIGHTS else "length",
        floor_level=max(1, config.floor_level),
        boss_floor_interval=max(0, config.boss_floor_interval),
        shop_chance=_clamp(config.shop_chance, 0.0, 1.0),
        max_shops=max(0, config.max_shops),
        treasure_chance=_clamp(config.treasure_chance, 0.0, 1.0),
        max_treasures=max(0, config.max_treasures),
        spawns_per_room=_clamp(config.spawns_per_room, 0, 16),
        spawn_padding=max(0, config.spawn_padding),
    )


__all__ = ["coerce_seed", "scaled_config", "clamp_config", "FLOOR_GROWTH", "MAX_FLOOR_SIZE"]
