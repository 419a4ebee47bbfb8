"""Stamp rooms and corridors into a TileType grid.

The grid is column-major (``grid[x][y]``). All Floor is stamped before any
Wall so a wall pass can never cover a room/corridor junction; walls only
ever replace EMPTY cells.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from .corridors import Corridor
from .rooms import Room
from .tiles import TileType

Grid = List[List[TileType]]

_NEIGHBOURS_8 = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


def new_grid(width: int, height: int) -> Grid:
    return [[TileType.EMPTY for _ in range(height)] for _ in range(width)]


def _in_bounds(grid: Grid, x: int, y: int) -> bool:
    return 0 <= x < len(grid) and 0 <= y < len(grid[0])


def _stamp_floor(grid: Grid, cells: Iterable[Tuple[int, int]]):
    for x, y in cells:
        if _in_bounds(grid, x, y):
            grid[x][y] = TileType.FLOOR


def _stamp_wall(grid: Grid, cells: Iterable[Tuple[int, int]]):
    for x, y in cells:
        if _in_bounds(grid, x, y) and grid[x][y] is TileType.EMPTY:
            grid[x][y] = TileType.WALL


def rasterize(width: int, height: int, rooms: Sequence[Room], corridors: Sequence[Corridor]) -> Grid:
    grid = new_grid(width, height)
    for room in rooms:
        _stamp_floor(grid, room.cells())
    for corridor in corridors:
        _stamp_floor(grid, corridor.tiles)
    for room in rooms:
        _stamp_wall(grid, room.rect.border_cells())
    for corridor in corridors:
        _stamp_wall(grid, ((x + dx, y + dy) for x, y in corridor.tiles for dx, dy in _NEIGHBOURS_8))
    return grid


def tile_counts(grid: Grid) -> Dict[TileType, int]:
    counts = {t: 0 for t in TileType}
    for column in grid:
        for tile in column:
            counts[tile] += 1
    return counts


def orphaned_floor_cells(grid: Grid) -> List[Tuple[int, int]]:
    """Floor cells whose in-bounds 8-neighbourhood is entirely EMPTY."""
    out = []
    for x, column in enumerate(grid):
        for y, tile in enumerate(column):
            if tile is not TileType.FLOOR:
                continue
            neighbours = [
                grid[x + dx][y + dy]
                for dx, dy in _NEIGHBOURS_8
                if _in_bounds(grid, x + dx, y + dy)
            ]
            if all(n is TileType.EMPTY for n in neighbours):
                out.append((x, y))
    return out


__all__ = ["Grid", "new_grid", "rasterize", "tile_counts", "orphaned_floor_cells"]
