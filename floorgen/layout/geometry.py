"""Integer rectangle helpers shared by every layout stage.

All rectangles are half-open on the far edge: a Rect(x, y, w, h) covers
columns x .. x+w-1 and rows y .. y+h-1. `right` and `bottom` return the
last covered column / row (inclusive).
"""
from __future__ import annotations

from typing import Iterator, NamedTuple, Tuple

Point = Tuple[int, int]


class Rect(NamedTuple):
    x: int; y: int; w: int; h: int

    @property
    def right(self) -> int:
        return self.x + self.w - 1

    @property
    def bottom(self) -> int:
        return self.y + self.h - 1

    @property
    def area(self) -> int:
        return self.w * self.h

    @property
    def center(self) -> Point:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def cells(self) -> Iterator[Point]:
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    def contains(self, px: int, py: int) -> bool:
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def contains_rect(self, other: "Rect") -> bool:
        return (
            other.x >= self.x and other.y >= self.y
            and other.right <= self.right and other.bottom <= self.bottom
        )

    def intersects(self, other: "Rect") -> bool:
        return not (
            other.x > self.right or other.right < self.x
            or other.y > self.bottom or other.bottom < self.y
        )

    def shrink(self, pad: int) -> "Rect":
        """Return the rectangle inset by `pad` on every side (may be empty)."""
        return Rect(self.x + pad, self.y + pad, max(0, self.w - 2 * pad), max(0, self.h - 2 * pad))

    def touches(self, other: "Rect") -> bool:
        """True when the rectangles share an edge segment of positive length."""
        if self.right + 1 == other.x or other.right + 1 == self.x:
            return min(self.bottom, other.bottom) >= max(self.y, other.y)
        if self.bottom + 1 == other.y or other.bottom + 1 == self.y:
            return min(self.right, other.right) >= max(self.x, other.x)
        return False

    def border_cells(self) -> Iterator[Point]:
        """Cells in the one-tile ring surrounding the rectangle (corners included)."""
        x0, y0, x1, y1 = self.x - 1, self.y - 1, self.right + 1, self.bottom + 1
        for ix in range(x0, x1 + 1):
            yield ix, y0
            yield ix, y1
        for iy in range(y0 + 1, y1):
            yield x0, iy
            yield x1, iy

    # Rows / columns that exclude the corner tiles; corridor entries live here.
    def interior_rows(self) -> range:
        return range(self.y + 1, self.bottom)

    def interior_cols(self) -> range:
        return range(self.x + 1, self.right)


def sign(v: int) -> int:
    return (v > 0) - (v < 0)


def manhattan(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


__all__ = ["Point", "Rect", "sign", "manhattan"]
