"""Candidate room pairs for corridor routing.

Two strategies:

* ``siblings`` (default): one pair per internal BSP node, joining the first
  room found in each child subtree. Produces O(rooms) candidates and always
  yields a connected candidate graph when every pair routes.
* ``geometric``: the sibling pairs plus every pair of room-owning leaves
  whose partitions share an edge segment. Denser, so the spanning tree has
  more to choose from; roomless leaves can never split the graph because
  the sibling pairs are always included.

Pairs are returned as (room_a, room_b) with room_a.id < room_b.id, in a
deterministic order.
"""
from __future__ import annotations

from typing import List, Tuple

from .partition import Partition
from .rooms import Room

RoomPair = Tuple[Room, Room]


def _ordered(a: Room, b: Room) -> RoomPair:
    return (a, b) if a.id < b.id else (b, a)


def sibling_pairs(root: Partition) -> List[RoomPair]:
    pairs: List[RoomPair] = []
    for node in root.internal_nodes():
        a = node.left.find_room()
        b = node.right.find_room()
        if a is None or b is None:
            continue
        pairs.append(_ordered(a, b))
    return pairs


def geometric_pairs(root: Partition) -> List[RoomPair]:
    leaves = [p for p in root.leaves() if p.room is not None]
    pairs: List[RoomPair] = sibling_pairs(root)
    seen = {(a.id, b.id) for a, b in pairs}
    for i, pa in enumerate(leaves):
        for pb in leaves[i + 1:]:
            if not pa.rect.touches(pb.rect):
                continue
            pair = _ordered(pa.room, pb.room)
            key = (pair[0].id, pair[1].id)
            if key in seen:
                continue
            seen.add(key)
            pairs.append(pair)
    pairs.sort(key=lambda p: (p[0].id, p[1].id))
    return pairs


STRATEGIES = {
    "siblings": sibling_pairs,
    "geometric": geometric_pairs,
}


def resolve_pairs(root: Partition, strategy: str = "siblings") -> List[RoomPair]:
    try:
        fn = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"unknown adjacency strategy {strategy!r}") from None
    return fn(root)


__all__ = ["RoomPair", "sibling_pairs", "geometric_pairs", "resolve_pairs", "STRATEGIES"]
