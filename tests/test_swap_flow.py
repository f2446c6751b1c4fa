import random

from tests.helpers import load_grid
from tilematch.events.bus import (
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from tilematch.session import MatchThreeSession
from tilematch.systems.board_ops import find_matches
from tilematch.utils.lookup import get_level_progress

R, G, B = 'red', 'green', 'blue'

LATIN = [
    [R, G, B],
    [G, B, R],
    [B, R, G],
]
ONE_SWAP_FROM_TRIPLE = [
    [R, R, B],
    [G, B, R],
    [B, G, G],
]


def make_session(grid):
    session = MatchThreeSession(3, 3, rng=random.Random(5), block_types=[R, G, B])
    load_grid(session.world, grid)
    return session


def test_no_match_swap_reverts_and_costs_nothing():
    session = make_session(LATIN)
    invalid = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, lambda s, **k: invalid.append(k))
    session.tap_cell(0, 0)
    session.tap_cell(0, 1)
    snap = session.snapshot()
    assert snap.grid == LATIN
    assert snap.moves_remaining == 30
    assert snap.score == 0
    assert invalid and invalid[0]['reason'] == 'no_match'


def test_valid_swap_costs_one_move_and_scores():
    session = make_session(ONE_SWAP_FROM_TRIPLE)
    valid = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_VALID, lambda s, **k: valid.append(k))
    session.tap_cell(0, 2)
    session.tap_cell(1, 2)
    snap = session.snapshot()
    assert valid == [{'src': (0, 2), 'dst': (1, 2)}]
    assert snap.moves_remaining == 29
    assert snap.score >= 30
    assert not find_matches(snap.grid), 'cascade must settle on a stable board'


def test_moves_accounting_over_mixed_swaps():
    session = make_session(ONE_SWAP_FROM_TRIPLE)
    bus = session.event_bus
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(1, 2))
    assert session.snapshot().moves_remaining == 29
    load_grid(session.world, LATIN)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(0, 1))
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(1, 1), dst=(2, 2))
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(2, 2), dst=(2, 3))
    assert session.snapshot().moves_remaining == 29
    assert session.snapshot().grid == LATIN


def test_finalize_carries_detected_positions():
    session = make_session(ONE_SWAP_FROM_TRIPLE)
    finalized = {}
    session.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, lambda s, **k: finalized.update(k))
    session.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(1, 2))
    assert finalized['positions'] == [(0, 0), (0, 1), (0, 2)]


def test_swap_ignored_when_out_of_moves():
    session = make_session(ONE_SWAP_FROM_TRIPLE)
    get_level_progress(session.world).moves_remaining = 0
    session.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(1, 2))
    assert session.snapshot().grid == ONE_SWAP_FROM_TRIPLE
