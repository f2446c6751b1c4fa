from typing import Optional, Tuple
from esper import World
from tilematch.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_POWER_UP_TARGET_SELECTED,
    EVENT_BOARD_REGENERATE,
    EVENT_BOARD_REGENERATED,
)
from tilematch.components.board import Board
from tilematch.constants import GRID_COLS, GRID_ROWS
from tilematch.systems.board_ops import generate_grid, is_adjacent
from tilematch.systems.turn_state_utils import is_cascade_active
from tilematch.utils.game_state import is_playing
from tilematch.utils.lookup import get_level_progress, get_selection, get_targeting, get_tile_registry


class BoardSystem:
    """Owns the board entity and routes tile taps.

    A tap either targets an armed power-up or drives the two-tap swap selection.
    """

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_BOARD_REGENERATE, self.on_board_regenerate)
        self._init_board()

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return get_selection(self.world).position

    def _init_board(self):
        board = self.board
        registry = get_tile_registry(self.world)
        rng = getattr(self.world, "random", None)
        board.cells = generate_grid(board.rows, board.cols, registry.spawnable_types(), rng)

    def on_board_regenerate(self, sender, **kwargs):
        self._init_board()
        self.event_bus.emit(EVENT_BOARD_REGENERATED, reason=kwargs.get('reason'))

    def accepts_input(self) -> bool:
        if not is_playing(self.world) or is_cascade_active(self.world):
            return False
        return get_level_progress(self.world).moves_remaining > 0

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not self.accepts_input():
            return
        if not self.board.in_bounds(row, col):
            return
        # An armed power-up consumes the tap instead of the selection flow
        targeting = get_targeting(self.world)
        if targeting.power_up is not None:
            self.event_bus.emit(EVENT_POWER_UP_TARGET_SELECTED, kind=targeting.power_up, row=row, col=col)
            return
        selection = get_selection(self.world)
        if selection.position is None:
            self._select(row, col)
        elif selection.position == (row, col):
            self.clear_selection(reason='same_tile')
        elif is_adjacent(selection.position, (row, col)):
            src = selection.position
            dst = (row, col)
            selection.position = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
        else:
            # Change selection to new tile
            self._select(row, col)

    def _select(self, row: int, col: int):
        get_selection(self.world).position = (row, col)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def clear_selection(self, reason: str):
        selection = get_selection(self.world)
        prev = selection.position
        if prev is None:
            return
        selection.position = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
