import random

import pytest

from floorgen.layout.config import FloorConfig
from floorgen.layout.geometry import Rect
from floorgen.layout.neighbors import geometric_pairs, resolve_pairs, sibling_pairs
from floorgen.layout.partition import Partition, build_partition_tree
from floorgen.layout.rooms import Room, carve_rooms


def carved(seed, **cfg):
    config = FloorConfig(**cfg)
    rng = random.Random(seed)
    root = build_partition_tree(Rect(0, 0, 80, 60), config, rng)
    rooms = carve_rooms(root, config, rng)
    return root, rooms


def test_one_pair_per_internal_node_when_all_leaves_have_rooms():
    # Leaves are never thinner than 5 tiles, so 3x3 rooms always fit.
    root, rooms = carved(4, min_room_size=3)
    assert len(rooms) == len(root.leaves())
    pairs = sibling_pairs(root)
    assert len(pairs) == len(root.internal_nodes()) == len(rooms) - 1


@pytest.mark.parametrize("seed", range(10))
def test_pairs_are_ordered_and_unique(seed):
    root, _rooms = carved(seed)
    for strategy in ("siblings", "geometric"):
        pairs = resolve_pairs(root, strategy)
        keys = [(a.id, b.id) for a, b in pairs]
        assert all(a < b for a, b in keys)
        assert len(keys) == len(set(keys)), f"{strategy} produced duplicate pairs"


def test_roomless_side_produces_no_pair():
    root = Partition(Rect(0, 0, 20, 10))
    root.left = Partition(Rect(0, 0, 10, 10), 1)
    root.right = Partition(Rect(10, 0, 10, 10), 1)
    root.left.room = Room(0, 2, 2, 4, 4)
    assert sibling_pairs(root) == []
    root.right.room = Room(1, 12, 2, 4, 4)
    assert [(a.id, b.id) for a, b in sibling_pairs(root)] == [(0, 1)]


def test_representative_room_comes_from_leftmost_leaf():
    #  root splits into L | R; R splits into R1 / R2
    root = Partition(Rect(0, 0, 30, 20))
    root.left = Partition(Rect(0, 0, 10, 20), 1)
    root.right = Partition(Rect(10, 0, 20, 20), 1)
    root.right.left = Partition(Rect(10, 0, 20, 10), 2)
    root.right.right = Partition(Rect(10, 10, 20, 10), 2)
    root.left.room = Room(0, 2, 2, 5, 5)
    root.right.left.room = Room(1, 12, 2, 5, 5)
    root.right.right.room = Room(2, 12, 12, 5, 5)
    keys = [(a.id, b.id) for a, b in sibling_pairs(root)]
    assert keys == [(0, 1), (1, 2)]


def test_geometric_is_superset_of_siblings():
    for seed in range(10):
        root, _rooms = carved(seed)
        sib = {(a.id, b.id) for a, b in sibling_pairs(root)}
        geo = {(a.id, b.id) for a, b in geometric_pairs(root)}
        assert sib <= geo


def test_geometric_adds_touching_cousins():
    root = Partition(Rect(0, 0, 20, 20))
    root.left = Partition(Rect(0, 0, 10, 20), 1)
    root.right = Partition(Rect(10, 0, 10, 20), 1)
    for parent, base in ((root.left, 0), (root.right, 10)):
        parent.left = Partition(Rect(base, 0, 10, 10), 2)
        parent.right = Partition(Rect(base, 10, 10, 10), 2)
    root.left.left.room = Room(0, 2, 2, 5, 5)
    root.left.right.room = Room(1, 2, 12, 5, 5)
    root.right.left.room = Room(2, 12, 2, 5, 5)
    root.right.right.room = Room(3, 12, 12, 5, 5)
    sib = {(a.id, b.id) for a, b in sibling_pairs(root)}
    geo = {(a.id, b.id) for a, b in geometric_pairs(root)}
    assert sib == {(0, 1), (2, 3), (0, 2)}
    assert geo == {(0, 1), (2, 3), (0, 2), (1, 3)}


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        resolve_pairs(Partition(Rect(0, 0, 4, 4)), "all-pairs")
