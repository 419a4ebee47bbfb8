import pytest

from floorgen.layout.corridors import Corridor
from floorgen.layout.spanning import UnionFind, kruskal, select_spanning_tree
from tests.floor_test_utils import gen, room


def fake_corridor(a, b, weight):
    return Corridor(a, b, tiles=[], entry_a=(0, 0), entry_b=(0, 0), corner=(0, 0),
                    horizontal_first=True, weight=weight)


def has_cycle(n, edges):
    uf = UnionFind(range(n))
    return any(not uf.union(a, b) for a, b in edges)


def test_five_rooms_six_candidates():
    edges = [(0, 1, 1), (1, 2, 2), (0, 2, 2), (2, 3, 3), (3, 4, 4), (1, 4, 5)]
    accepted, _uf = kruskal(range(5), edges)
    chosen = [edges[i] for i in accepted]
    assert len(chosen) == 4
    assert sum(w for _, _, w in chosen) == 10
    assert not has_cycle(5, [(a, b) for a, b, _ in chosen])


def test_equal_weights_keep_candidate_order():
    edges = [(0, 2, 2), (1, 2, 2), (0, 1, 2)]
    accepted, _uf = kruskal(range(3), edges)
    assert accepted == [0, 1]
    edges.reverse()
    accepted, _uf = kruskal(range(3), edges)
    assert accepted == [0, 1]
    assert [edges[i][:2] for i in accepted] == [(0, 1), (1, 2)]


def test_disconnected_candidates_report_forest():
    rooms = [room(i, i * 10, 0, 4, 4) for i in range(4)]
    cands = [fake_corridor(rooms[0], rooms[1], 3), fake_corridor(rooms[2], rooms[3], 1)]
    tree = select_spanning_tree(cands, rooms)
    assert not tree.connected
    assert tree.components == [[0, 1], [2, 3]]
    assert len(tree.corridors) == 2


def test_connected_tree_stops_at_n_minus_one():
    rooms = [room(i, i * 10, 0, 4, 4) for i in range(3)]
    cands = [
        fake_corridor(rooms[0], rooms[1], 1),
        fake_corridor(rooms[1], rooms[2], 1),
        fake_corridor(rooms[0], rooms[2], 5),
    ]
    tree = select_spanning_tree(cands, rooms)
    assert tree.connected
    assert [c.room_ids for c in tree.corridors] == [(0, 1), (1, 2)]
    assert tree.total_weight == 2


def test_single_room_needs_no_edges():
    tree = select_spanning_tree([], [room(0, 1, 1, 4, 4)])
    assert tree.connected and tree.corridors == []


def test_union_find_components():
    uf = UnionFind("abcd")
    assert uf.union("a", "b")
    assert not uf.union("b", "a")
    uf.union("c", "d")
    assert sorted(sorted(g) for g in uf.components()) == [["a", "b"], ["c", "d"]]


@pytest.mark.parametrize("seed", [1, 2, 3, 50, 999])
@pytest.mark.parametrize("adjacency", ["siblings", "geometric"])
def test_generated_tree_is_spanning_and_acyclic(seed, adjacency):
    level = gen(seed, adjacency=adjacency)
    edges = [c.room_ids for c in level.corridors]
    assert len(edges) == len(level.rooms) - 1
    assert not has_cycle(len(level.rooms), edges)
    assert all(r.distance_from_entrance is not None for r in level.rooms)
