"""Semantic room typing from corridor-graph distances.

Entrance is the first carved room. Breadth-first distances over the final
corridors pick the Exit (farthest room, lowest id on ties). On boss floors
the Exit's farthest corridor neighbour becomes the Boss room. Remaining
rooms draw once each, in id order, for Shop / Treasure / Combat.
"""
from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .config import FloorConfig
from .corridors import Corridor
from .errors import RoomTypeAssignmentError
from .rooms import Room, RoomType


def build_adjacency(rooms: Sequence[Room], corridors: Sequence[Corridor]) -> Dict[int, List[int]]:
    adj: Dict[int, List[int]] = {r.id: [] for r in rooms}
    for c in corridors:
        a, b = c.room_ids
        adj[a].append(b)
        adj[b].append(a)
    for neighbours in adj.values():
        neighbours.sort()
    return adj


def graph_distances(adjacency: Dict[int, List[int]], source: int) -> Dict[int, int]:
    """Hop counts from `source`; unreachable rooms are absent."""
    dist = {source: 0}
    queue = deque([source])
    while queue:
        cur = queue.popleft()
        for nxt in adjacency[cur]:
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return dist


def is_boss_floor(config: FloorConfig) -> bool:
    interval = config.boss_floor_interval
    return interval > 0 and config.floor_level % interval == 0


@dataclass
class RoomAssignment:
    entrance: Room
    exit: Room
    boss: Optional[Room] = None
    distances: Dict[int, int] = field(default_factory=dict)


def assign_room_types(
    rooms: Sequence[Room],
    corridors: Sequence[Corridor],
    config: FloorConfig,
    rng=None,
) -> RoomAssignment:
    """Type every room in place and return the anchors of the assignment.

    Must be called with the final (spanning-tree) corridors. Raises
    RoomTypeAssignmentError when there are no rooms, when a room is not
    reachable from the Entrance, or when a room was already typed.
    """
    if rng is None:
        rng = random
    if not rooms:
        raise RoomTypeAssignmentError("cannot assign room types without rooms", seed=config.seed)

    by_id = {r.id: r for r in rooms}
    adjacency = build_adjacency(rooms, corridors)
    entrance = rooms[0]
    distances = graph_distances(adjacency, entrance.id)
    unreachable = sorted(set(by_id) - set(distances))
    if unreachable:
        raise RoomTypeAssignmentError(
            f"{len(unreachable)} room(s) unreachable from entrance",
            seed=config.seed,
            unreachable=unreachable,
        )
    for r in rooms:
        r.distance_from_entrance = distances[r.id]

    entrance.assign_type(RoomType.ENTRANCE)
    exit_id = min(distances, key=lambda rid: (-distances[rid], rid))
    exit_room = by_id[exit_id]
    # Single-room floor: the entrance doubles as the exit.
    if exit_room is not entrance:
        exit_room.assign_type(RoomType.EXIT)

    boss = None
    if exit_room is not entrance and is_boss_floor(config):
        options = [by_id[n] for n in adjacency[exit_id] if n != entrance.id]
        if options:
            boss = min(options, key=lambda r: (-distances[r.id], r.id))
            boss.assign_type(RoomType.BOSS)

    shops = treasures = 0
    for r in rooms:
        if r.room_type is not RoomType.UNASSIGNED:
            continue
        roll = rng.random()
        if shops < config.max_shops and roll < config.shop_chance:
            r.assign_type(RoomType.SHOP)
            shops += 1
        elif treasures < config.max_treasures and roll < config.shop_chance + config.treasure_chance:
            r.assign_type(RoomType.TREASURE)
            treasures += 1
        else:
            r.assign_type(RoomType.COMBAT)

    return RoomAssignment(entrance=entrance, exit=exit_room, boss=boss, distances=distances)


__all__ = [
    "build_adjacency",
    "graph_distances",
    "is_boss_floor",
    "RoomAssignment",
    "assign_room_types",
]
