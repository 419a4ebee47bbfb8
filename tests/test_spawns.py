"""Enemy spawn points for Combat and Boss rooms."""

import random

import pytest

from floorgen.layout.config import FloorConfig
from floorgen.layout.raster import rasterize
from floorgen.layout.rooms import RoomType
from floorgen.layout.spawns import SPAWN_ROOM_TYPES, assign_spawn_points, place_spawns, spawn_cells
from floorgen.layout.tiles import TileType
from tests.floor_test_utils import gen, room


def typed(room_id, x, y, w, h, room_type):
    r = room(room_id, x, y, w, h)
    r.assign_type(room_type)
    return r


def test_spawn_cells_inset_by_padding():
    r = room(0, 2, 2, 6, 5)
    grid = rasterize(12, 12, [r], [])
    cells = spawn_cells(r, grid, padding=1)
    assert cells[0] == (3, 3) and cells[-1] == (6, 5)
    assert len(cells) == 4 * 3
    assert spawn_cells(r, grid, padding=0) == sorted(r.cells())


def test_spawn_cells_skip_blocked_and_non_floor():
    r = room(0, 0, 0, 5, 5)
    grid = rasterize(8, 8, [r], [])
    grid[2][2] = TileType.WALL
    cells = spawn_cells(r, grid, padding=1, blocked=[(1, 1)])
    assert (2, 2) not in cells and (1, 1) not in cells
    assert len(cells) == 9 - 2


def test_place_spawns_unique_and_capped():
    r = room(0, 0, 0, 4, 4)
    grid = rasterize(6, 6, [r], [])
    points = place_spawns(r, grid, count=10, padding=1, rng=random.Random(1))
    assert sorted(points) == [(1, 1), (1, 2), (2, 1), (2, 2)]


def test_place_spawns_room_too_small():
    r = room(0, 0, 0, 4, 4)
    grid = rasterize(6, 6, [r], [])
    assert place_spawns(r, grid, count=3, padding=2, rng=random.Random(1)) == []


def test_only_combat_and_boss_rooms_get_spawns():
    rooms = [
        typed(0, 0, 0, 6, 6, RoomType.ENTRANCE),
        typed(1, 10, 0, 6, 6, RoomType.COMBAT),
        typed(2, 20, 0, 6, 6, RoomType.BOSS),
        typed(3, 30, 0, 6, 6, RoomType.SHOP),
    ]
    grid = rasterize(40, 10, rooms, [])
    total = assign_spawn_points(rooms, [], grid, FloorConfig(spawns_per_room=3), random.Random(4))
    assert total == 6
    assert [len(r.spawn_points) for r in rooms] == [0, 3, 3, 0]


@pytest.mark.parametrize("seed", range(12))
def test_generated_spawns_are_floor_inside_room(seed):
    level = gen(seed)
    doors = set(level.door_tiles())
    assert level.metrics["spawn_points"] == sum(len(p) for p in level.spawn_points().values())
    for r in level.rooms:
        if r.room_type not in SPAWN_ROOM_TYPES:
            assert r.spawn_points == []
            continue
        assert r.spawn_points, f"seed {seed}: room {r.id} has no spawns"
        assert len(set(r.spawn_points)) == len(r.spawn_points)
        for p in r.spawn_points:
            assert r.contains(*p) and level.is_floor(*p)
            assert p not in doors


def test_spawns_deterministic_and_in_dict():
    a, b = gen(44), gen(44)
    assert a.spawn_points() == b.spawn_points()
    data = a.to_dict()
    for r, d in zip(a.rooms, data["rooms"]):
        assert d["spawns"] == [list(p) for p in r.spawn_points]
        assert d["access"] == r.access.value
        assert d["revealed"] == r.revealed


def test_zero_spawns_per_room():
    level = gen(44, spawns_per_room=0)
    assert level.spawn_points() == {}
    assert level.metrics["spawn_points"] == 0
