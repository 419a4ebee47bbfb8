import json

from floorgen.layout import RoomType, TileType
from tests.floor_test_utils import gen


def test_is_floor_matches_grid_and_bounds():
    level = gen(21)
    cx, cy = level.entrance_room.center
    assert level.is_floor(cx, cy)
    assert not level.is_floor(-1, 0)
    assert not level.is_floor(level.width, 0)
    assert level.tile_at(0, level.height + 5) is TileType.EMPTY
    for x in range(level.width):
        for y in range(level.height):
            assert level.is_floor(x, y) == (level.grid[x][y] is TileType.FLOOR)


def test_entrance_position_is_center_of_center_tile():
    level = gen(22)
    cx, cy = level.entrance_room.center
    assert level.entrance_position() == (cx + 0.5, cy + 0.5)
    assert level.entrance_position(tile_size=2.0) == ((cx + 0.5) * 2.0, (cy + 0.5) * 2.0)


def test_room_at_finds_owner():
    level = gen(23)
    for r in level.rooms:
        assert level.room_at(*r.center) is r
    assert level.room_at(-3, -3) is None


def test_door_tiles_are_room_perimeter_floor():
    level = gen(24)
    doors = level.door_tiles()
    assert doors and len(doors) <= 2 * len(level.corridors)
    assert doors == sorted(set(doors))
    for x, y in doors:
        assert level.is_floor(x, y)
        assert level.room_at(x, y) is not None


def test_ascii_dimensions_and_glyphs():
    level = gen(25, floor_level=5)
    plain = level.to_ascii().split("\n")
    assert len(plain) == level.height
    assert all(len(line) <= level.width for line in plain)
    annotated = level.to_ascii(annotate=True)
    assert "E" in annotated and "X" in annotated
    if level.boss_room is not None:
        assert "B" in annotated


def test_to_dict_is_json_serialisable():
    level = gen(26)
    data = json.loads(json.dumps(level.to_dict()))
    assert data["seed"] == 26
    assert len(data["rooms"]) == len(level.rooms)
    assert len(data["grid"]) == level.height and len(data["grid"][0]) == level.width
    assert data["rooms"][data["entrance"]]["type"] == RoomType.ENTRANCE.value
    assert "grid" not in level.to_dict(include_grid=False)
