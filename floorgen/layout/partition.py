"""BSP partition tree.

The floor rectangle is split recursively into a binary tree. Each internal
node owns exactly two children whose rectangles tile it exactly; leaves may
own a Room once the carver has run. Children are owned by their parent and
there are no parent back-references.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional

from .config import FloorConfig
from .geometry import Rect

if TYPE_CHECKING:  # pragma: no cover
    from .rooms import Room


@dataclass
class Partition:
    rect: Rect
    depth: int = 0
    left: Optional["Partition"] = None
    right: Optional["Partition"] = None
    room: Optional["Room"] = None
    horizontal_cut: Optional[bool] = None  # True: children stacked top/bottom

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def walk(self) -> Iterator["Partition"]:
        """Pre-order, left child first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.right)
                stack.append(node.left)

    def leaves(self) -> List["Partition"]:
        return [p for p in self.walk() if p.is_leaf]

    def internal_nodes(self) -> List["Partition"]:
        return [p for p in self.walk() if not p.is_leaf]

    def find_room(self) -> Optional["Room"]:
        """First room found depth-first, left-biased, or None for a roomless subtree."""
        for node in self.walk():
            if node.is_leaf and node.room is not None:
                return node.room
        return None

    def rooms(self) -> List["Room"]:
        return [p.room for p in self.leaves() if p.room is not None]


def _should_stop(rect: Rect, depth: int, config: FloorConfig, max_depth: int, rng) -> bool:
    if rect.w <= config.min_partition_size or rect.h <= config.min_partition_size:
        return True
    if depth >= max_depth:
        return True
    small = rect.w <= config.max_partition_size and rect.h <= config.max_partition_size
    return small and rng.random() < config.size_variance_chance


def _choose_horizontal_cut(rect: Rect, config: FloorConfig, rng) -> bool:
    # A horizontal cut splits the height (children stacked vertically).
    if rect.w == rect.h or rng.random() < config.random_axis_chance:
        return rng.random() < 0.5
    return rect.h > rect.w


def split_offset(length: int, config: FloorConfig, rng) -> int:
    """Offset of the cut along an axis of `length` tiles.

    Drawn within [ratio_min, ratio_max] of the length and clamped so both
    halves keep at least min_partition_size tiles; an empty range falls back
    to an exact half split.
    """
    lo = max(math.ceil(length * config.split_ratio_min), config.min_partition_size)
    hi = min(math.floor(length * config.split_ratio_max), length - config.min_partition_size)
    if lo > hi:
        return length // 2
    return rng.randint(lo, hi)


def split(node: Partition, config: FloorConfig, rng) -> bool:
    r = node.rect
    horizontal = _choose_horizontal_cut(r, config, rng)
    if horizontal:
        cut = split_offset(r.h, config, rng)
        a, b = Rect(r.x, r.y, r.w, cut), Rect(r.x, r.y + cut, r.w, r.h - cut)
    else:
        cut = split_offset(r.w, config, rng)
        a, b = Rect(r.x, r.y, cut, r.h), Rect(r.x + cut, r.y, r.w - cut, r.h)
    if a.area == 0 or b.area == 0:
        return False
    node.left = Partition(a, node.depth + 1)
    node.right = Partition(b, node.depth + 1)
    node.horizontal_cut = horizontal
    return True


def build_partition_tree(bounds: Rect, config: FloorConfig, rng=None) -> Partition:
    """Recursively split `bounds` and return the root partition.

    Nodes are expanded depth-first, left child before right, so the RNG is
    consumed in a fixed order for a given seed.
    """
    if rng is None:
        rng = random
    max_depth = config.resolved_max_depth()
    root = Partition(bounds, 0)
    stack = [root]
    while stack:
        node = stack.pop()
        if _should_stop(node.rect, node.depth, config, max_depth, rng):
            continue
        if split(node, config, rng):
            stack.append(node.right)
            stack.append(node.left)
    return root


__all__ = ["Partition", "build_partition_tree", "split", "split_offset"]
