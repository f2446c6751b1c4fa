from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from tilematch.components.board import Grid
from tilematch.constants import GENERATION_MAX_ATTEMPTS, MATCH_MIN_LENGTH, POINTS_PER_TILE

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, str]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


class SwapOutcome(Enum):
    SUCCESS = 'success'
    REJECTED = 'rejected'


@dataclass(slots=True)
class SwapAttempt:
    outcome: SwapOutcome
    matches: Set[Position]
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is SwapOutcome.SUCCESS


def grid_dimensions(grid: Grid) -> Tuple[int, int]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def is_valid_position(grid: Grid, pos: Position) -> bool:
    rows, cols = grid_dimensions(grid)
    row, col = pos
    return 0 <= row < rows and 0 <= col < cols


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def _completes_run(grid: Grid, row: int, col: int, type_name: str) -> bool:
    """True if placing type_name at (row, col) finishes a triple to the left or above."""
    if col >= 2 and grid[row][col - 1] == type_name and grid[row][col - 2] == type_name:
        return True
    if row >= 2 and grid[row - 1][col] == type_name and grid[row - 2][col] == type_name:
        return True
    return False


def generate_grid(
    rows: int,
    cols: int,
    types: Sequence[str],
    rng: random.Random | None = None,
    *,
    max_attempts: int = GENERATION_MAX_ATTEMPTS,
) -> Grid:
    """Fill a rows x cols grid in row-major order without any initial match.

    Each cell is redrawn while it would complete a horizontal or vertical triple.
    After ``max_attempts`` draws the cell falls back to a pick among the types that
    do not violate the constraint, or any type if none remain (fewer than three
    types can leave no legal choice).
    """
    if not types:
        raise ValueError("generate_grid requires at least one tile type")
    rng = rng or random.Random()
    grid: Grid = [[None] * cols for _ in range(rows)]
    for r in range(rows):
        for c in range(cols):
            choice = None
            for _ in range(max(1, max_attempts)):
                candidate = rng.choice(types)
                if not _completes_run(grid, r, c, candidate):
                    choice = candidate
                    break
            if choice is None:
                available = [t for t in types if not _completes_run(grid, r, c, t)]
                if available:
                    choice = rng.choice(available)
                else:
                    logger.warning("No legal tile type at %s; accepting a match", (r, c))
                    choice = rng.choice(types)
            grid[r][c] = choice
    return grid


def _collect_runs(grid: Grid) -> List[List[Position]]:
    rows, cols = grid_dimensions(grid)
    runs: List[List[Position]] = []
    # Horizontal runs
    for r in range(rows):
        run: List[Position] = []
        last_type = None
        for c in range(cols):
            tval = grid[r][c]
            if tval is not None and tval == last_type:
                run.append((r, c))
            else:
                if len(run) >= MATCH_MIN_LENGTH:
                    runs.append(run)
                run = [(r, c)] if tval is not None else []
                last_type = tval
        if len(run) >= MATCH_MIN_LENGTH:
            runs.append(run)
    # Vertical runs
    for c in range(cols):
        run = []
        last_type = None
        for r in range(rows):
            tval = grid[r][c]
            if tval is not None and tval == last_type:
                run.append((r, c))
            else:
                if len(run) >= MATCH_MIN_LENGTH:
                    runs.append(run)
                run = [(r, c)] if tval is not None else []
                last_type = tval
        if len(run) >= MATCH_MIN_LENGTH:
            runs.append(run)
    return runs


def find_matches(grid: Grid) -> Set[Position]:
    """Return every cell that belongs to a maximal run of three or more."""
    matched: Set[Position] = set()
    for run in _collect_runs(grid):
        matched.update(run)
    return matched


def find_match_groups(grid: Grid) -> List[List[Position]]:
    """Detect matches and merge runs that share a cell into one group."""
    groups = [set(run) for run in _collect_runs(grid)]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop()
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return [sorted(group) for group in merged]


def swap_cells(grid: Grid, a: Position, b: Position) -> None:
    (ar, ac), (br, bc) = a, b
    grid[ar][ac], grid[br][bc] = grid[br][bc], grid[ar][ac]


def attempt_swap(grid: Grid, a: Position, b: Position) -> SwapAttempt:
    """Exchange two adjacent cells and keep the exchange only if it creates a match.

    A rejected attempt leaves the grid exactly as it was.
    """
    if not (is_valid_position(grid, a) and is_valid_position(grid, b)):
        return SwapAttempt(SwapOutcome.REJECTED, set(), reason="out_of_bounds")
    if not is_adjacent(a, b):
        return SwapAttempt(SwapOutcome.REJECTED, set(), reason="not_adjacent")
    swap_cells(grid, a, b)
    matches = find_matches(grid)
    if not matches:
        swap_cells(grid, a, b)
        return SwapAttempt(SwapOutcome.REJECTED, set(), reason="no_match")
    return SwapAttempt(SwapOutcome.SUCCESS, matches)


def clear_positions(grid: Grid, positions: Iterable[Position]) -> List[TypeEntry]:
    """Empty the given cells and report what they held. Empty or invalid cells are skipped."""
    cleared: List[TypeEntry] = []
    for row, col in sorted(set(positions)):
        if not is_valid_position(grid, (row, col)):
            continue
        type_name = grid[row][col]
        if type_name is None:
            continue
        cleared.append((row, col, type_name))
        grid[row][col] = None
    return cleared


def apply_gravity(grid: Grid) -> List[GravityMove]:
    """Compact each column downward, keeping the vertical order of surviving tiles."""
    rows, cols = grid_dimensions(grid)
    moves: List[GravityMove] = []
    for col in range(cols):
        write_row = rows - 1
        for row in range(rows - 1, -1, -1):
            type_name = grid[row][col]
            if type_name is None:
                continue
            if row != write_row:
                grid[write_row][col] = type_name
                grid[row][col] = None
                moves.append(GravityMove(source=(row, col), target=(write_row, col), type_name=type_name))
            write_row -= 1
    return moves


def refill_empty(grid: Grid, types: Sequence[str], rng: random.Random | None = None) -> List[Position]:
    """Fill every empty cell with a random type. New matches are allowed."""
    if not types:
        raise ValueError("refill_empty requires at least one tile type")
    rng = rng or random.Random()
    rows, cols = grid_dimensions(grid)
    new_tiles: List[Position] = []
    for col in range(cols):
        for row in range(rows):
            if grid[row][col] is None:
                grid[row][col] = rng.choice(types)
                new_tiles.append((row, col))
    return new_tiles


def area_positions(grid: Grid, center: Position, radius: int = 1) -> Set[Position]:
    """Cells of the (2*radius+1)^2 square around center, clipped to the board."""
    row, col = center
    affected: Set[Position] = set()
    for r in range(row - radius, row + radius + 1):
        for c in range(col - radius, col + radius + 1):
            if is_valid_position(grid, (r, c)):
                affected.add((r, c))
    return affected


def color_positions(grid: Grid, target: Position) -> Set[Position]:
    """Every cell holding the same type as target; empty when target is empty or invalid."""
    if not is_valid_position(grid, target):
        return set()
    type_name = grid[target[0]][target[1]]
    if type_name is None:
        return set()
    rows, cols = grid_dimensions(grid)
    return {(r, c) for r in range(rows) for c in range(cols) if grid[r][c] == type_name}


def shuffle_cells(grid: Grid, rng: random.Random | None = None) -> None:
    """Permute all cell values uniformly and write them back in row-major order."""
    rng = rng or random.Random()
    rows, cols = grid_dimensions(grid)
    flat = [grid[r][c] for r in range(rows) for c in range(cols)]
    rng.shuffle(flat)
    for index, value in enumerate(flat):
        grid[index // cols][index % cols] = value


def score_for_clear(count: int) -> int:
    """Points for clearing count tiles at once; grows faster than linearly."""
    if count <= 0:
        return 0
    multiplier = max(1, count - (MATCH_MIN_LENGTH - 1))
    return count * POINTS_PER_TILE * multiplier
