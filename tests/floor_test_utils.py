"""Shared helpers for layout tests."""

from floorgen.layout import FloorConfig, generate_floor
from floorgen.layout.geometry import Rect
from floorgen.layout.rooms import Room


def gen(seed: int = 12345, **overrides):
    """Generate a floor and fail loudly if generation did not succeed."""
    result = generate_floor(FloorConfig(seed=seed, **overrides))
    assert result.ok, f"seed {seed} failed: {result.kind} {result.error}"
    return result.level


def room(room_id: int, x: int, y: int, w: int, h: int) -> Room:
    return Room(room_id, x, y, w, h)


def snapshot(level):
    """Comparable view of everything a consumer can observe."""
    return (
        [r.to_dict() for r in level.rooms],
        [c.to_dict() for c in level.corridors],
        level.to_ascii(annotate=True),
    )


__all__ = ["gen", "room", "snapshot", "Rect"]
