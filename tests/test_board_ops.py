import random
from collections import Counter

from tilematch.systems.board_ops import (
    GravityMove,
    SwapOutcome,
    apply_gravity,
    area_positions,
    attempt_swap,
    clear_positions,
    color_positions,
    find_match_groups,
    find_matches,
    is_adjacent,
    refill_empty,
    score_for_clear,
    shuffle_cells,
)

A, B, C, D = 'red', 'blue', 'green', 'yellow'


def test_run_of_three_excludes_neighbour():
    grid = [
        [A, A, A, B],
        [B, C, D, C],
        [C, D, B, D],
        [D, B, C, A],
    ]
    assert find_matches(grid) == {(0, 0), (0, 1), (0, 2)}


def test_run_is_maximal():
    grid = [
        [A, A, A, A, A],
        [B, C, B, C, B],
        [C, B, C, B, C],
    ]
    assert find_matches(grid) == {(0, c) for c in range(5)}


def test_vertical_run_detected():
    grid = [
        [A, B, C],
        [A, C, B],
        [A, B, C],
        [B, C, B],
    ]
    assert find_matches(grid) == {(0, 0), (1, 0), (2, 0)}


def test_crossing_runs_counted_once():
    grid = [
        [A, B, C, D],
        [A, A, A, B],
        [A, C, D, C],
        [B, D, C, D],
    ]
    matches = find_matches(grid)
    assert matches == {(0, 0), (1, 0), (2, 0), (1, 1), (1, 2)}
    groups = find_match_groups(grid)
    assert groups == [sorted(matches)], 'L-shaped runs sharing a cell form one group'


def test_separate_runs_stay_separate_groups():
    grid = [
        [A, A, A, B],
        [C, D, C, D],
        [B, B, B, C],
    ]
    groups = find_match_groups(grid)
    assert sorted(groups) == [[(0, 0), (0, 1), (0, 2)], [(2, 0), (2, 1), (2, 2)]]


def test_empty_cells_never_match():
    grid = [
        [None, None, None],
        [A, B, C],
        [None, A, None],
    ]
    assert find_matches(grid) == set()


def test_detector_does_not_mutate():
    grid = [[A, A, A], [B, C, B], [C, B, C]]
    before = [list(r) for r in grid]
    find_matches(grid)
    find_matches(grid)
    assert grid == before


def test_adjacency_is_four_directional():
    assert is_adjacent((2, 2), (2, 3))
    assert is_adjacent((2, 2), (1, 2))
    assert not is_adjacent((2, 2), (3, 3))
    assert not is_adjacent((2, 2), (2, 4))
    assert not is_adjacent((2, 2), (2, 2))


def test_rejected_swap_leaves_grid_untouched():
    grid = [
        [A, B, C],
        [B, C, A],
        [C, A, B],
    ]
    before = [list(r) for r in grid]
    result = attempt_swap(grid, (0, 0), (0, 1))
    assert result.outcome is SwapOutcome.REJECTED
    assert result.reason == 'no_match'
    assert grid == before


def test_swap_rejects_bad_positions():
    grid = [[A, B], [B, A]]
    assert attempt_swap(grid, (0, 0), (1, 1)).reason == 'not_adjacent'
    assert attempt_swap(grid, (0, 1), (0, 2)).reason == 'out_of_bounds'
    assert attempt_swap(grid, (-1, 0), (0, 0)).reason == 'out_of_bounds'
    assert grid == [[A, B], [B, A]]


def test_successful_swap_commits():
    grid = [
        [A, A, B],
        [A, B, B],
        [B, A, A],
    ]
    result = attempt_swap(grid, (1, 0), (1, 1))
    assert result.succeeded
    assert result.matches == {(0, 1), (1, 1), (2, 1)}
    assert grid[1][:2] == [B, A]


def test_gravity_keeps_order_and_reports_moves():
    grid = [[A], [None], [B], [None]]
    moves = apply_gravity(grid)
    assert grid == [[None], [None], [A], [B]]
    assert moves == [
        GravityMove(source=(2, 0), target=(3, 0), type_name=B),
        GravityMove(source=(0, 0), target=(2, 0), type_name=A),
    ]


def test_gravity_is_per_column():
    grid = [
        [A, B],
        [None, C],
        [D, None],
    ]
    apply_gravity(grid)
    assert grid == [
        [None, None],
        [A, B],
        [D, C],
    ]


def test_clear_and_refill_only_touch_empty_cells():
    grid = [[A, B], [C, D]]
    cleared = clear_positions(grid, [(0, 0), (1, 1), (5, 5)])
    assert cleared == [(0, 0, A), (1, 1, D)]
    assert grid == [[None, B], [C, None]]
    new_tiles = refill_empty(grid, [A], random.Random(0))
    assert sorted(new_tiles) == [(0, 0), (1, 1)]
    assert grid == [[A, B], [C, A]]


def test_area_clear_is_clipped_at_corner():
    grid = [[A] * 8 for _ in range(8)]
    assert area_positions(grid, (0, 0)) == {(0, 0), (0, 1), (1, 0), (1, 1)}
    assert len(area_positions(grid, (7, 7))) == 4
    assert len(area_positions(grid, (0, 4))) == 6
    assert len(area_positions(grid, (4, 4))) == 9


def test_color_clear_picks_exactly_matching_cells():
    grid = [
        [A, B, A],
        [C, A, B],
        [B, C, A],
    ]
    assert color_positions(grid, (0, 0)) == {(0, 0), (0, 2), (1, 1), (2, 2)}
    assert color_positions(grid, (9, 9)) == set()


def test_shuffle_preserves_multiset():
    rng = random.Random(11)
    grid = [[rng.choice([A, B, C, D]) for _ in range(8)] for _ in range(8)]
    before = Counter(cell for row in grid for cell in row)
    shuffle_cells(grid, rng)
    assert Counter(cell for row in grid for cell in row) == before
    assert len(grid) == 8 and all(len(row) == 8 for row in grid)


def test_score_grows_faster_than_linear():
    assert score_for_clear(0) == 0
    assert score_for_clear(3) == 30
    assert score_for_clear(4) == 80
    assert score_for_clear(5) == 150
    scores = [score_for_clear(n) for n in range(1, 20)]
    assert scores == sorted(scores)
    assert score_for_clear(6) > 2 * score_for_clear(3)
