import logging
import random

from tests.helpers import load_grid
from tilematch.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_MATCH_CLEARED,
    EVENT_MOVES_CHANGED,
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_TILE_SWAP_VALID,
)
from tilematch.session import MatchThreeSession
from tilematch.utils.event_trace import EventTrace


def test_trace_records_swap_event_order(caplog):
    session = MatchThreeSession(
        3,
        3,
        rng=random.Random(6),
        block_types=['red', 'green', 'blue'],
        trace_events=[
            EVENT_MOVES_CHANGED,
            EVENT_TILE_SWAP_VALID,
            EVENT_TILE_SWAP_FINALIZE,
            EVENT_MATCH_CLEARED,
            EVENT_CASCADE_COMPLETE,
        ],
    )
    load_grid(session.world, [
        ['red', 'red', 'blue'],
        ['green', 'blue', 'red'],
        ['blue', 'green', 'green'],
    ])
    trace = session.trace
    with caplog.at_level(logging.DEBUG, logger='tilematch.utils.event_trace'):
        session.tap_cell(0, 2)
        session.tap_cell(1, 2)
    names = trace.names()
    assert names[:4] == [EVENT_MOVES_CHANGED, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_FINALIZE, EVENT_MATCH_CLEARED]
    assert names[-1] == EVENT_CASCADE_COMPLETE
    assert trace.records[2][1]['positions'] == [(0, 0), (0, 1), (0, 2)]
    assert any(EVENT_MATCH_CLEARED in message for message in caplog.messages)
    trace.clear()
    assert trace.records == []


def test_session_has_no_trace_by_default():
    assert MatchThreeSession(rng=random.Random(6)).trace is None


def test_standalone_trace_on_bare_bus():
    bus = EventBus()
    trace = EventTrace(bus, [EVENT_MOVES_CHANGED])
    bus.emit(EVENT_MOVES_CHANGED, moves_remaining=4)
    bus.emit(EVENT_CASCADE_COMPLETE, depth=1)
    assert trace.records == [(EVENT_MOVES_CHANGED, {'moves_remaining': 4})]
