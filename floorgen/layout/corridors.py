"""L-shaped corridor routing between two rooms.

A route is planned from the rooms' rectangles alone:

* entry_a / entry_b are tiles on each room's perimeter, never a corner tile
* the corridor starts one tile outside room A, beyond entry_a
* a single corner joins an axis-aligned first segment to the second one
* the path stops on the tile adjacent to entry_b, so it never enters room B

Straight corridors are the degenerate case where the corner is the start.

Every stepping loop is driven by the Manhattan distance left to its
target, which strictly decreases by one per step; a path therefore has
exactly manhattan(start, entry_b) tiles and the router cannot spin.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .geometry import Point, Rect, manhattan, sign
from .rooms import Room

log = get_logger("floorgen.corridors")


@dataclass(frozen=True)
class RoutePlan:
    entry_a: Point
    start: Point
    corner: Point
    entry_b: Point
    horizontal_first: bool


@dataclass
class Corridor:
    room_a: Room
    room_b: Room
    tiles: List[Point]
    entry_a: Point
    entry_b: Point
    corner: Point
    horizontal_first: bool
    weight: float = 0.0
    index: int = field(default=0, compare=False)

    @property
    def room_ids(self) -> Tuple[int, int]:
        return (self.room_a.id, self.room_b.id)

    def to_dict(self) -> dict:
        return {
            "rooms": [self.room_a.id, self.room_b.id],
            "tiles": [list(t) for t in self.tiles],
            "entry_a": list(self.entry_a),
            "entry_b": list(self.entry_b),
            "corner": list(self.corner),
            "horizontal_first": self.horizontal_first,
        }


def walk_segment(origin: Point, target: Point, stop_distance: int = 0) -> List[Point]:
    """Tiles stepped from `origin` toward `target`, origin excluded.

    Stepping ends once the remaining distance equals `stop_distance`. The x
    delta is consumed before the y delta; segments passed here are
    axis-aligned in practice.
    """
    x, y = origin
    out: List[Point] = []
    remaining = manhattan(origin, target)
    while remaining > stop_distance:
        dx = target[0] - x
        if dx:
            x += sign(dx)
        else:
            y += sign(target[1] - y)
        out.append((x, y))
        remaining -= 1
    return out


def _nearest(values: Sequence[int], target: float) -> Optional[int]:
    if not values:
        return None
    return min(values, key=lambda v: (abs(v - target), v))


def _shared(a: range, b: range) -> List[int]:
    return list(range(max(a.start, b.start), min(a.stop, b.stop)))


def _straight_plan(a: Rect, b: Rect) -> Optional[RoutePlan]:
    # Rooms separated along x that share an interior row: one horizontal run.
    if a.right < b.x or b.right < a.x:
        rows = _shared(a.interior_rows(), b.interior_rows())
        if rows:
            r = rows[len(rows) // 2]
            east = b.x > a.right
            entry_a = (a.right if east else a.x, r)
            start = (entry_a[0] + (1 if east else -1), r)
            entry_b = (b.x if east else b.right, r)
            return RoutePlan(entry_a, start, start, entry_b, True)
    if a.bottom < b.y or b.bottom < a.y:
        cols = _shared(a.interior_cols(), b.interior_cols())
        if cols:
            c = cols[len(cols) // 2]
            south = b.y > a.bottom
            entry_a = (c, a.bottom if south else a.y)
            start = (c, entry_a[1] + (1 if south else -1))
            entry_b = (c, b.y if south else b.bottom)
            return RoutePlan(entry_a, start, start, entry_b, False)
    return None


def _l_plan(a: Rect, b: Rect, horizontal_first: bool) -> Optional[RoutePlan]:
    acx, acy = a.center
    bcx, bcy = b.center
    if horizontal_first:
        # Leave A through its east/west wall on a row B does not occupy, then
        # drop into B through its north/south wall on a column A does not occupy.
        b_rows = range(b.y, b.bottom + 1)
        a_cols = range(a.x, a.right + 1)
        r = _nearest([v for v in a.interior_rows() if v not in b_rows], bcy)
        c = _nearest([v for v in b.interior_cols() if v not in a_cols], acx)
        if r is None or c is None:
            return None
        east = c > a.right
        entry_a = (a.right if east else a.x, r)
        start = (entry_a[0] + (1 if east else -1), r)
        entry_b = (c, b.y if r < b.y else b.bottom)
    else:
        a_rows = range(a.y, a.bottom + 1)
        b_cols = range(b.x, b.right + 1)
        c = _nearest([v for v in a.interior_cols() if v not in b_cols], bcx)
        r = _nearest([v for v in b.interior_rows() if v not in a_rows], acy)
        if r is None or c is None:
            return None
        south = r > a.bottom
        entry_a = (c, a.bottom if south else a.y)
        start = (c, entry_a[1] + (1 if south else -1))
        entry_b = (b.x if c < b.x else b.right, r)
    return RoutePlan(entry_a, start, (c, r), entry_b, horizontal_first)


def plan_route(a: Rect, b: Rect, horizontal_first: bool = True) -> Optional[RoutePlan]:
    """Pick entries and a corner for the corridor from `a` to `b`.

    A straight run is preferred when the rooms share an interior row or
    column across a gap; otherwise the requested L orientation is tried
    first, then the other one. Returns None when no single-corner route
    exists (overlapping rooms, or rooms too thin to leave a free row/column).
    """
    if a.intersects(b):
        return None
    plans = [_straight_plan(a, b), _l_plan(a, b, horizontal_first), _l_plan(a, b, not horizontal_first)]
    for plan in plans:
        if plan is None:
            continue
        if a.contains(*plan.start) or b.contains(*plan.start):
            continue
        return plan
    return None


def trace_plan(plan: RoutePlan) -> List[Point]:
    """Tile path for a plan: start..corner inclusive, then corner toward entry_b."""
    tiles = [plan.start]
    tiles.extend(walk_segment(plan.start, plan.corner))
    tiles.extend(walk_segment(plan.corner, plan.entry_b, stop_distance=1))
    return tiles


def route_corridor(room_a: Room, room_b: Room, horizontal_first: bool = True) -> Optional[Corridor]:
    """Route a corridor from room_a to room_b, or None if no valid path exists."""
    if room_a.w <= 0 or room_a.h <= 0 or room_b.w <= 0 or room_b.h <= 0:
        return None
    a, b = room_a.rect, room_b.rect
    plan = plan_route(a, b, horizontal_first)
    if plan is None:
        return None
    tiles = trace_plan(plan)
    if any(a.contains(*t) or b.contains(*t) for t in tiles):
        return None
    return Corridor(
        room_a=room_a,
        room_b=room_b,
        tiles=tiles,
        entry_a=plan.entry_a,
        entry_b=plan.entry_b,
        corner=plan.corner,
        horizontal_first=plan.horizontal_first,
    )


def corridor_weight(corridor: Corridor, weighting: str = "length") -> float:
    if weighting == "distance":
        (ax, ay), (bx, by) = corridor.room_a.center, corridor.room_b.center
        return math.hypot(ax - bx, ay - by)
    return float(len(corridor.tiles))


def build_candidates(pairs, rng=None, weighting: str = "length", metrics=None) -> List[Corridor]:
    """Route every room pair; orientation is drawn once per pair in pair order."""
    if rng is None:
        rng = random
    out: List[Corridor] = []
    for room_a, room_b in pairs:
        horizontal_first = rng.random() < 0.5
        corridor = route_corridor(room_a, room_b, horizontal_first)
        if corridor is None:
            log.debug(event="corridor_unroutable", room_a=room_a.id, room_b=room_b.id)
            if metrics is not None:
                metrics["unroutable_pairs"] = metrics.get("unroutable_pairs", 0) + 1
            continue
        corridor.weight = corridor_weight(corridor, weighting)
        corridor.index = len(out)
        out.append(corridor)
    return out


__all__ = [
    "RoutePlan",
    "Corridor",
    "walk_segment",
    "plan_route",
    "trace_plan",
    "route_corridor",
    "corridor_weight",
    "build_candidates",
]
