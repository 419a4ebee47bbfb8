"""Spanning-tree selection over candidate corridors (Kruskal)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

from .corridors import Corridor
from .rooms import Room

Edge = Tuple[Hashable, Hashable, float]


class UnionFind:
    def __init__(self, items: Iterable[Hashable] = ()):
        self.parent: Dict[Hashable, Hashable] = {}
        self.rank: Dict[Hashable, int] = {}
        for item in items:
            self.add(item)

    def add(self, item: Hashable):
        if item not in self.parent:
            self.parent[item] = item
            self.rank[item] = 0

    def find(self, item: Hashable) -> Hashable:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True

    def components(self) -> List[List[Hashable]]:
        groups: Dict[Hashable, List[Hashable]] = {}
        for item in self.parent:
            groups.setdefault(self.find(item), []).append(item)
        return list(groups.values())


def kruskal(node_ids: Sequence[Hashable], edges: Sequence[Edge]) -> Tuple[List[int], UnionFind]:
    """Return (indices of accepted edges, union-find state).

    Edges are sorted by weight with a stable sort, so equal weights keep
    their input order. Stops after len(node_ids) - 1 acceptances.
    """
    uf = UnionFind(node_ids)
    target = max(0, len(node_ids) - 1)
    accepted: List[int] = []
    order = sorted(range(len(edges)), key=lambda i: edges[i][2])
    for i in order:
        if len(accepted) >= target:
            break
        a, b, _w = edges[i]
        if uf.union(a, b):
            accepted.append(i)
    return accepted, uf


@dataclass
class SpanningTree:
    corridors: List[Corridor]
    components: List[List[int]] = field(default_factory=list)

    @property
    def connected(self) -> bool:
        return len(self.components) <= 1

    @property
    def total_weight(self) -> float:
        return sum(c.weight for c in self.corridors)


def select_spanning_tree(candidates: Sequence[Corridor], rooms: Sequence[Room]) -> SpanningTree:
    """Reduce candidates to a minimal acyclic set spanning as many rooms as possible.

    A forest (more than one component) is returned as-is with `connected`
    False; the pipeline turns that into a DisconnectedError.
    """
    edges = [(c.room_a.id, c.room_b.id, c.weight) for c in candidates]
    accepted, uf = kruskal([r.id for r in rooms], edges)
    components = sorted(sorted(group) for group in uf.components())
    return SpanningTree(corridors=[candidates[i] for i in accepted], components=components)


__all__ = ["UnionFind", "kruskal", "SpanningTree", "select_spanning_tree"]
