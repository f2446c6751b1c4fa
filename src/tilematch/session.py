"""Headless entry points for the match-three and 2048 engines.

Sets up the event bus, the ECS world and the systems, and exposes the
player inputs as plain method calls. Front-ends read ``snapshot()`` after
each call or subscribe to ``event_bus`` for per-round detail.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from esper import World

from tilematch.components.board import Grid
from tilematch.components.game_state import GameMode
from tilematch.components.power_up import PowerUpKind
from tilematch.constants import GRID_COLS, GRID_ROWS, SLIDE_SIZE
from tilematch.events.bus import (
    EventBus,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_PAUSE_TOGGLE,
    EVENT_POWER_UP_ACTIVATE_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_SLIDE_KEEP_PLAYING,
    EVENT_SLIDE_REQUEST,
    EVENT_SLIDE_RESET,
    EVENT_SOUND_TOGGLE,
    EVENT_TILE_CLICK,
)
from tilematch.systems.board import BoardSystem
from tilematch.systems.game_flow_system import GameFlowSystem
from tilematch.systems.hint_system import HintSystem
from tilematch.systems.match import MatchSystem
from tilematch.systems.match_resolution import MatchResolutionSystem
from tilematch.systems.power_up_system import PowerUpSystem
from tilematch.systems.slide_ops import Direction
from tilematch.systems.slide_system import SlideSystem
from tilematch.systems.sound_cue_system import SoundCueSystem, SoundPlayer
from tilematch.utils.event_trace import EventTrace
from tilematch.utils.lookup import (
    get_board,
    get_game_state,
    get_hint,
    get_inventory,
    get_level_progress,
    get_selection,
    get_targeting,
)
from tilematch.world import create_world


@dataclass(frozen=True)
class SessionSnapshot:
    grid: Grid
    score: int
    total_score: int
    level: int
    moves_remaining: int
    target: int
    power_ups: Dict[PowerUpKind, int]
    active_power_up: Optional[PowerUpKind]
    selected: Optional[Tuple[int, int]]
    mode: GameMode
    hint: str
    sound_enabled: bool


class MatchThreeSession:
    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        *,
        rng: random.Random | None = None,
        block_types: Iterable[str] | None = None,
        sound_player: SoundPlayer | None = None,
        trace_events: Iterable[str] | None = None,
    ):
        self.event_bus = EventBus()
        self.trace: EventTrace | None = EventTrace(self.event_bus, trace_events) if trace_events else None
        self.world: World = create_world(self.event_bus, block_types=block_types, rng=rng)
        self.hint_system = HintSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus, rows=rows, cols=cols)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.power_up_system = PowerUpSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)
        self.sound_cue_system = SoundCueSystem(self.event_bus, sound_player)

    # -- inputs ---------------------------------------------------------------

    def tap_cell(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def activate_power_up(self, kind: PowerUpKind | str) -> None:
        self.event_bus.emit(EVENT_POWER_UP_ACTIVATE_REQUEST, kind=kind)

    def pause(self) -> None:
        self.event_bus.emit(EVENT_PAUSE_TOGGLE)

    def restart(self) -> None:
        self.event_bus.emit(EVENT_RESTART_REQUEST)

    def next_level(self) -> None:
        self.event_bus.emit(EVENT_NEXT_LEVEL_REQUEST)

    def toggle_sound(self) -> None:
        self.event_bus.emit(EVENT_SOUND_TOGGLE)

    # -- observable state -----------------------------------------------------

    @property
    def grid(self) -> Grid:
        return get_board(self.world).snapshot()

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    def snapshot(self) -> SessionSnapshot:
        progress = get_level_progress(self.world)
        return SessionSnapshot(
            grid=self.grid,
            score=progress.score,
            total_score=progress.total_score,
            level=progress.level,
            moves_remaining=progress.moves_remaining,
            target=progress.target,
            power_ups=dict(get_inventory(self.world).counts),
            active_power_up=get_targeting(self.world).power_up,
            selected=get_selection(self.world).position,
            mode=self.mode,
            hint=get_hint(self.world).text,
            sound_enabled=self.sound_cue_system.enabled,
        )


@dataclass(frozen=True)
class SlideSnapshot:
    grid: List[List[int]]
    score: int
    best: int
    won: bool
    over: bool


class SlideSession:
    def __init__(self, size: int = SLIDE_SIZE, *, rng: random.Random | None = None):
        self.event_bus = EventBus()
        self.world = World()
        self.slide_system = SlideSystem(self.world, self.event_bus, size, rng=rng)

    def move(self, direction: Direction | str) -> None:
        self.event_bus.emit(EVENT_SLIDE_REQUEST, direction=direction)

    def reset(self) -> None:
        self.event_bus.emit(EVENT_SLIDE_RESET)

    def keep_playing(self) -> None:
        self.event_bus.emit(EVENT_SLIDE_KEEP_PLAYING)

    def snapshot(self) -> SlideSnapshot:
        board = self.slide_system.board
        return SlideSnapshot(
            grid=board.snapshot(),
            score=board.score,
            best=board.best,
            won=board.won,
            over=board.over,
        )
