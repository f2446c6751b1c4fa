"""Pure helpers for the 2048 slide-merge board."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from tilematch.constants import SLIDE_FOUR_CHANCE

Position = Tuple[int, int]
SlideGrid = List[List[int]]


class Direction(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'


@dataclass(slots=True)
class SlideResult:
    moved: bool
    grid: SlideGrid
    score_gained: int = 0
    merged_positions: Set[Position] = field(default_factory=set)


def empty_cells(grid: SlideGrid) -> List[Position]:
    return [(r, c) for r, row in enumerate(grid) for c, value in enumerate(row) if value == 0]


def add_random_tile(grid: SlideGrid, rng: random.Random | None = None) -> Optional[Position]:
    """Drop a 2 (or occasionally a 4) on a random empty cell; None when the board is full."""
    rng = rng or random.Random()
    empties = empty_cells(grid)
    if not empties:
        return None
    row, col = rng.choice(empties)
    grid[row][col] = 4 if rng.random() < SLIDE_FOUR_CHANCE else 2
    return row, col


def _rotate_left(grid: SlideGrid) -> SlideGrid:
    n = len(grid)
    return [[grid[c][n - r - 1] for c in range(n)] for r in range(n)]


def _rotate_right(grid: SlideGrid) -> SlideGrid:
    n = len(grid)
    return [[grid[n - c - 1][r] for c in range(n)] for r in range(n)]


def _flip_rows(grid: SlideGrid) -> SlideGrid:
    return [list(reversed(row)) for row in grid]


def _to_left(grid: SlideGrid, direction: Direction) -> SlideGrid:
    if direction is Direction.UP:
        return _rotate_left(grid)
    if direction is Direction.DOWN:
        return _rotate_right(grid)
    if direction is Direction.RIGHT:
        return _flip_rows(grid)
    return [list(row) for row in grid]


def _from_left(grid: SlideGrid, direction: Direction) -> SlideGrid:
    if direction is Direction.UP:
        return _rotate_right(grid)
    if direction is Direction.DOWN:
        return _rotate_left(grid)
    if direction is Direction.RIGHT:
        return _flip_rows(grid)
    return grid


def _position_from_left(pos: Position, size: int, direction: Direction) -> Position:
    r, c = pos
    if direction is Direction.UP:
        return c, size - 1 - r
    if direction is Direction.DOWN:
        return size - 1 - c, r
    if direction is Direction.RIGHT:
        return r, size - 1 - c
    return r, c


def slide_row(row: List[int]) -> Tuple[List[int], int, List[int]]:
    """Slide one row to the left; returns (new_row, score, merged column indexes)."""
    values = [v for v in row if v != 0]
    compressed: List[int] = []
    merged: List[int] = []
    score = 0
    i = 0
    while i < len(values):
        if i < len(values) - 1 and values[i] == values[i + 1]:
            merged_value = values[i] * 2
            compressed.append(merged_value)
            score += merged_value
            merged.append(len(compressed) - 1)
            i += 2
        else:
            compressed.append(values[i])
            i += 1
    compressed.extend([0] * (len(row) - len(compressed)))
    return compressed, score, merged


def slide_grid(grid: SlideGrid, direction: Direction) -> SlideResult:
    """Apply one move without mutating ``grid``. Each tile merges at most once."""
    size = len(grid)
    working = _to_left(grid, direction)
    moved = False
    score = 0
    merged_left: Set[Position] = set()
    for r in range(size):
        new_row, row_score, merged_cols = slide_row(working[r])
        if new_row != working[r]:
            moved = True
        working[r] = new_row
        score += row_score
        merged_left.update((r, c) for c in merged_cols)
    if not moved:
        return SlideResult(moved=False, grid=[list(row) for row in grid])
    merged = {_position_from_left(pos, size, direction) for pos in merged_left}
    return SlideResult(moved=True, grid=_from_left(working, direction), score_gained=score, merged_positions=merged)


def has_any_moves(grid: SlideGrid) -> bool:
    size = len(grid)
    for r in range(size):
        for c in range(size):
            value = grid[r][c]
            if value == 0:
                return True
            if r + 1 < size and grid[r + 1][c] == value:
                return True
            if c + 1 < size and grid[r][c + 1] == value:
                return True
    return False


def max_tile(grid: SlideGrid) -> int:
    return max((value for row in grid for value in row), default=0)
