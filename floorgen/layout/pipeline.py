"""Pipeline orchestration for floor layout generation.

Stages run strictly in order, each consuming the previous stage's output,
the validated FloorConfig and one ``random.Random`` owned by this call:

    partition -> carve_rooms -> neighbors -> corridors -> spanning_tree
    -> room_types -> rasterize -> spawns

`FloorGenerator.run()` raises on failure; `generate_floor()` wraps it and
returns a GenerationResult so callers can retry with another seed without
catching exceptions themselves. Configuration errors are never wrapped.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional

from ..logging_utils import get_logger
from .config import FloorConfig
from .corridors import build_candidates
from .errors import DisconnectedError, GenerationError, NoRoomsError
from .geometry import Rect
from .metrics import init_metrics
from .model import LevelModel
from .neighbors import resolve_pairs
from .partition import build_partition_tree
from .raster import rasterize, tile_counts
from .room_types import assign_room_types
from .rooms import carve_rooms
from .spanning import select_spanning_tree
from .spawns import assign_spawn_points
from .tiles import TileType

log = get_logger("floorgen.pipeline")


def resolve_seed(seed: Optional[int]) -> int:
    # 0 is a valid deterministic seed; None means "pick one and record it"
    if seed is None:
        return random.randint(1, 1_000_000)
    return seed


class FloorGenerator:
    def __init__(self, config: Optional[FloorConfig] = None):
        config = (config or FloorConfig()).validate()
        self.config = replace(config, seed=resolve_seed(config.seed))
        self.seed = self.config.seed
        self.rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self._phase_ms: Dict[str, int] = {}
        self.log = log.bind(seed=self.seed)

    def _phase(self, label: str, fn: Callable, *a, **k):
        if not self.config.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        self._phase_ms[label] = int((time.perf_counter() - ps) * 1000)
        self.log.debug(event="floor_phase", phase=label, ms=self._phase_ms[label])
        return r

    def run(self) -> LevelModel:
        cfg, rng, m = self.config, self.rng, self.metrics
        start = time.perf_counter()

        root = self._phase("partition", build_partition_tree, Rect(0, 0, cfg.width, cfg.height), cfg, rng)
        rooms = self._phase("carve_rooms", carve_rooms, root, cfg, rng)
        if not rooms:
            raise NoRoomsError(
                "no leaf partition was large enough for a room",
                seed=self.seed,
                leaves=len(root.leaves()),
            )

        pairs = self._phase("neighbors", resolve_pairs, root, cfg.adjacency)
        candidates = self._phase(
            "corridors", build_candidates, pairs, rng, cfg.corridor_weight, m if cfg.enable_metrics else None
        )
        tree = self._phase("spanning_tree", select_spanning_tree, candidates, rooms)
        if not tree.connected:
            raise DisconnectedError(
                f"candidate corridors leave {len(tree.components)} disconnected room groups",
                seed=self.seed,
                components=tree.components,
                room_count=len(rooms),
            )

        assignment = self._phase("room_types", assign_room_types, rooms, tree.corridors, cfg, rng)
        grid = self._phase("rasterize", rasterize, cfg.width, cfg.height, rooms, tree.corridors)
        spawn_total = self._phase("spawns", assign_spawn_points, rooms, tree.corridors, grid, cfg, rng)

        level = LevelModel(
            width=cfg.width,
            height=cfg.height,
            seed=self.seed,
            floor_level=cfg.floor_level,
            root=root,
            rooms=rooms,
            corridors=tree.corridors,
            grid=grid,
            entrance_room=assignment.entrance,
            exit_room=assignment.exit,
            boss_room=assignment.boss,
            candidates=candidates,
            metrics=m,
            config=cfg,
        )
        if cfg.enable_metrics:
            leaves = root.leaves()
            counts = tile_counts(grid)
            m.update(
                partitions=sum(1 for _ in root.walk()),
                leaves=len(leaves),
                roomless_leaves=sum(1 for p in leaves if p.room is None),
                rooms=len(rooms),
                candidate_pairs=len(pairs),
                candidate_corridors=len(candidates),
                corridors=len(tree.corridors),
                corridor_tiles=sum(len(c.tiles) for c in tree.corridors),
                tiles_floor=counts[TileType.FLOOR],
                tiles_wall=counts[TileType.WALL],
                tiles_empty=counts[TileType.EMPTY],
                spawn_points=spawn_total,
                runtime_ms=int((time.perf_counter() - start) * 1000),
                phase_ms=dict(self._phase_ms),
            )
        self.log.info(
            event="floor_generated",
            floor_level=cfg.floor_level,
            width=cfg.width,
            height=cfg.height,
            rooms=len(rooms),
            corridors=len(tree.corridors),
            runtime_ms=m.get("runtime_ms"),
        )
        return level


@dataclass
class GenerationResult:
    seed: int
    level: Optional[LevelModel] = None
    error: Optional[GenerationError] = None

    @property
    def ok(self) -> bool:
        return self.level is not None

    @property
    def kind(self) -> Optional[str]:
        return self.error.kind if self.error else None


def generate_floor(config: Optional[FloorConfig] = None) -> GenerationResult:
    """Generate one floor, reporting generation failures instead of raising.

    ConfigurationError still propagates: an invalid config is a caller bug,
    not something a new seed can fix.
    """
    gen = FloorGenerator(config)
    try:
        return GenerationResult(seed=gen.seed, level=gen.run())
    except GenerationError as exc:
        if exc.seed is None:
            exc.seed = gen.seed
        gen.log.warn(event="floor_generation_failed", kind=exc.kind, message=str(exc))
        return GenerationResult(seed=gen.seed, error=exc)


__all__ = ["FloorGenerator", "GenerationResult", "generate_floor", "resolve_seed"]
