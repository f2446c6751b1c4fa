import random

import pytest

from tests.helpers import load_grid
from tilematch.components.power_up import PowerUpKind
from tilematch.session import MatchThreeSession
from tilematch.systems.turn_state_utils import get_or_create_turn_state, is_cascade_active
from tilematch.utils.lookup import get_level_progress

GRID = [
    ['red', 'red', 'blue'],
    ['green', 'blue', 'red'],
    ['blue', 'green', 'green'],
]


@pytest.fixture
def locked_session():
    session = MatchThreeSession(3, 3, rng=random.Random(2), block_types=['red', 'green', 'blue'])
    load_grid(session.world, GRID)
    get_or_create_turn_state(session.world).cascade_active = True
    return session


def test_taps_ignored_while_cascading(locked_session):
    locked_session.tap_cell(0, 2)
    assert locked_session.snapshot().selected is None
    assert is_cascade_active(locked_session.world)


def test_power_up_requests_ignored_while_cascading(locked_session):
    locked_session.activate_power_up(PowerUpKind.BOMB)
    locked_session.activate_power_up(PowerUpKind.SHUFFLE)
    snap = locked_session.snapshot()
    assert snap.active_power_up is None
    assert snap.power_ups[PowerUpKind.SHUFFLE] == 1
    assert snap.grid == GRID


def test_input_resumes_after_cascade(locked_session):
    get_or_create_turn_state(locked_session.world).cascade_active = False
    locked_session.tap_cell(0, 2)
    locked_session.tap_cell(1, 2)
    assert locked_session.snapshot().moves_remaining == 29
    assert not is_cascade_active(locked_session.world)


def test_taps_ignored_without_moves():
    session = MatchThreeSession(3, 3, rng=random.Random(2), block_types=['red', 'green', 'blue'])
    load_grid(session.world, GRID)
    get_level_progress(session.world).moves_remaining = 0
    session.tap_cell(0, 2)
    assert session.snapshot().selected is None
