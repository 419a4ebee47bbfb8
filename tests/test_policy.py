import pytest

from floorgen.layout import FloorConfig, generate_floor
from floorgen.layout.policy import MAX_FLOOR_SIZE, clamp_config, coerce_seed, scaled_config


def test_first_level_keeps_base_size():
    cfg = scaled_config(FloorConfig(width=60, height=40), 1)
    assert (cfg.width, cfg.height, cfg.floor_level) == (60, 40, 1)


def test_growth_alternates_width_then_height():
    base = FloorConfig(width=60, height=40)
    sizes = [(c.width, c.height) for c in (scaled_config(base, lvl) for lvl in range(1, 6))]
    assert sizes == [(60, 40), (70, 40), (70, 50), (80, 50), (80, 60)]


def test_growth_capped():
    cfg = scaled_config(FloorConfig(width=60, height=40), 100)
    assert cfg.width == MAX_FLOOR_SIZE and cfg.height == MAX_FLOOR_SIZE
    assert cfg.floor_level == 100


def test_scaling_is_deterministic():
    base = FloorConfig(seed=5)
    assert scaled_config(base, 7) == scaled_config(base, 7)


def test_clamp_produces_valid_config():
    wild = FloorConfig(
        width=-5,
        height=10_000,
        min_partition_size=0,
        max_partition_size=-3,
        min_room_size=1,
        min_padding=0,
        max_padding=-1,
        shop_chance=3.0,
        split_ratio_min=0.9,
        split_ratio_max=0.1,
        adjacency="bogus",
        floor_level=-2,
    )
    cfg = clamp_config(wild)
    assert cfg.validate() is cfg
    assert cfg.width == 8 and cfg.height == 200


def test_clamped_tiny_floor_still_generates():
    result = generate_floor(clamp_config(FloorConfig(width=1, height=1, seed=4)))
    assert result.ok
    assert len(result.level.rooms) == 1


@pytest.mark.parametrize(
    "raw, expected",
    [(42, 42), ("42", 42), (" 17 ", 17)],
)
def test_coerce_numeric_seeds(raw, expected):
    assert coerce_seed(raw) == expected


def test_coerce_string_seed_is_stable():
    a = coerce_seed("crypt-of-ash")
    assert a == coerce_seed("crypt-of-ash")
    assert a != coerce_seed("crypt-of-bone")
    assert 0 <= a


def test_coerce_blank_seed_is_random_int():
    assert isinstance(coerce_seed(""), int)
    assert isinstance(coerce_seed(None), int)
