from tilematch.events.bus import (
    EventBus,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_MOVES_CHANGED,
)
from tilematch.systems.board_ops import attempt_swap
from tilematch.systems.turn_state_utils import is_cascade_active
from tilematch.utils.game_state import is_playing
from tilematch.utils.lookup import get_board, get_level_progress
from esper import World

class MatchSystem:
    """Validates swap requests: a swap only sticks when it creates a match."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if not is_playing(self.world) or is_cascade_active(self.world):
            return
        progress = get_level_progress(self.world)
        if progress.moves_remaining <= 0:
            return
        result = attempt_swap(get_board(self.world).cells, tuple(src), tuple(dst))
        if not result.succeeded:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=result.reason)
            return
        progress.moves_remaining -= 1
        self.event_bus.emit(EVENT_MOVES_CHANGED, moves_remaining=progress.moves_remaining)
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst, positions=sorted(result.matches))
