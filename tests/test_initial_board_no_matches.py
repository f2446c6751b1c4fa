import random

import pytest

from tilematch.events.bus import EventBus
from tilematch.world import create_world
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import find_matches, generate_grid


def test_initial_board_has_no_matches():
    bus=EventBus(); world=create_world(bus); board=BoardSystem(world,bus,8,8)
    assert not find_matches(board.board.cells), 'Initial board should not contain any matches'


@pytest.mark.parametrize("seed", range(25))
def test_generated_grids_never_contain_matches(seed):
    grid = generate_grid(8, 8, ['a', 'b', 'c'], random.Random(seed))
    assert find_matches(grid) == set()


def test_generation_terminates_with_two_types():
    # Two types can leave a cell with no legal choice; the bounded retry must still finish.
    for seed in range(10):
        grid = generate_grid(8, 8, ['a', 'b'], random.Random(seed), max_attempts=5)
        assert len(grid) == 8 and all(len(row) == 8 for row in grid)
        assert all(cell in ('a', 'b') for row in grid for cell in row)


def test_generation_requires_types():
    with pytest.raises(ValueError):
        generate_grid(3, 3, [])


def test_regenerate_event_rebuilds_board():
    from tilematch.events.bus import EVENT_BOARD_REGENERATE, EVENT_BOARD_REGENERATED
    bus = EventBus(); world = create_world(bus, rng=random.Random(3))
    board = BoardSystem(world, bus, 8, 8)
    board.board.cells[0][0] = None
    seen = []
    bus.subscribe(EVENT_BOARD_REGENERATED, lambda s, **k: seen.append(k.get('reason')))
    bus.emit(EVENT_BOARD_REGENERATE, reason='restart')
    assert seen == ['restart']
    assert all(cell is not None for row in board.board.cells for cell in row)
    assert not find_matches(board.board.cells)
