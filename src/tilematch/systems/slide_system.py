from __future__ import annotations

import random

from esper import World

from tilematch.components.slide_board import SlideBoard
from tilematch.constants import SLIDE_GOAL, SLIDE_SIZE
from tilematch.events.bus import (
    EventBus,
    EVENT_SLIDE_APPLIED,
    EVENT_SLIDE_BLOCKED,
    EVENT_SLIDE_KEEP_PLAYING,
    EVENT_SLIDE_OVER,
    EVENT_SLIDE_REQUEST,
    EVENT_SLIDE_RESET,
    EVENT_SLIDE_WON,
)
from tilematch.systems.slide_ops import Direction, add_random_tile, has_any_moves, max_tile, slide_grid


class SlideSystem:
    """Runs a 2048 game on a SlideBoard entity.

    The best score lives only as long as the world; persisting it is left to
    the caller.
    """

    def __init__(self, world: World, event_bus: EventBus, size: int = SLIDE_SIZE, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.board_entity = self.world.create_entity(SlideBoard(size=size))
        event_bus.subscribe(EVENT_SLIDE_REQUEST, self.on_slide_request)
        event_bus.subscribe(EVENT_SLIDE_RESET, self.on_reset)
        event_bus.subscribe(EVENT_SLIDE_KEEP_PLAYING, self.on_keep_playing)
        self.reset()

    @property
    def board(self) -> SlideBoard:
        return self.world.component_for_entity(self.board_entity, SlideBoard)

    def reset(self) -> None:
        board = self.board
        board.cells = [[0] * board.size for _ in range(board.size)]
        board.score = 0
        board.won = False
        board.keep_playing = False
        board.over = False
        add_random_tile(board.cells, self._rng)
        add_random_tile(board.cells, self._rng)

    def on_reset(self, sender, **payload) -> None:
        self.reset()

    def on_keep_playing(self, sender, **payload) -> None:
        board = self.board
        if board.won:
            board.keep_playing = True

    def on_slide_request(self, sender, **payload) -> None:
        direction = payload.get("direction")
        if not isinstance(direction, Direction):
            try:
                direction = Direction(direction)
            except ValueError:
                return
        board = self.board
        if board.over or (board.won and not board.keep_playing):
            return
        result = slide_grid(board.cells, direction)
        if not result.moved:
            self.event_bus.emit(EVENT_SLIDE_BLOCKED, direction=direction)
            return
        board.cells = result.grid
        board.score += result.score_gained
        board.best = max(board.best, board.score)
        spawned = add_random_tile(board.cells, self._rng)
        self.event_bus.emit(
            EVENT_SLIDE_APPLIED,
            direction=direction,
            score_gained=result.score_gained,
            merged=sorted(result.merged_positions),
            spawned=spawned,
        )
        if not board.won and max_tile(board.cells) >= SLIDE_GOAL:
            board.won = True
            self.event_bus.emit(EVENT_SLIDE_WON, score=board.score)
        if not has_any_moves(board.cells):
            board.over = True
            self.event_bus.emit(EVENT_SLIDE_OVER, score=board.score, best=board.best)
