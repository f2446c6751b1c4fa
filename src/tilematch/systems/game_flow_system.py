"""High-level coordinator for level and game mode transitions."""
from __future__ import annotations

import logging

from esper import World

from tilematch.components.game_state import GameMode
from tilematch.components.power_up import starting_counts
from tilematch.events.bus import (
    EVENT_BOARD_REGENERATE,
    EVENT_CASCADE_COMPLETE,
    EVENT_GAME_OVER,
    EVENT_GAME_RESTARTED,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_STARTED,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_PAUSE_TOGGLE,
    EVENT_POWER_UP_INVENTORY_CHANGED,
    EVENT_RESTART_REQUEST,
    EventBus,
)
from tilematch.utils.game_state import set_game_mode
from tilematch.utils.lookup import (
    get_game_state,
    get_inventory,
    get_level_progress,
    get_selection,
    get_targeting,
)
from tilematch.utils.progression import bonus_power_ups, moves_for_level, target_for_level

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Drives PLAYING / PAUSED / LEVEL_COMPLETE / GAME_OVER transitions.

    The end-of-level check runs once per settled cascade, never mid-cascade.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLE, self._on_pause_toggle)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self._on_next_level)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self._on_restart)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_cascade_complete(self, sender, **payload) -> None:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        self.check_level_end()

    def _on_pause_toggle(self, sender, **payload) -> None:
        mode = get_game_state(self.world).mode
        if mode == GameMode.PLAYING:
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        elif mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def _on_next_level(self, sender, **payload) -> None:
        if get_game_state(self.world).mode != GameMode.LEVEL_COMPLETE:
            return
        progress = get_level_progress(self.world)
        progress.level += 1
        progress.target = target_for_level(progress.level)
        progress.moves_remaining = moves_for_level(progress.level)
        progress.score = 0
        inventory = get_inventory(self.world)
        for kind, amount in bonus_power_ups(progress.level).items():
            inventory.grant(kind, amount)
        self._reset_round_input()
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, counts=dict(inventory.counts))
        self.event_bus.emit(EVENT_BOARD_REGENERATE, reason="next_level")
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(
            EVENT_LEVEL_STARTED,
            level=progress.level,
            target=progress.target,
            moves=progress.moves_remaining,
        )

    def _on_restart(self, sender, **payload) -> None:
        progress = get_level_progress(self.world)
        progress.score = 0
        progress.total_score = 0
        progress.level = 1
        progress.target = target_for_level(1)
        progress.moves_remaining = moves_for_level(1)
        inventory = get_inventory(self.world)
        inventory.counts = starting_counts()
        self._reset_round_input()
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, counts=dict(inventory.counts))
        self.event_bus.emit(EVENT_BOARD_REGENERATE, reason="restart")
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(EVENT_GAME_RESTARTED)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def check_level_end(self) -> GameMode:
        progress = get_level_progress(self.world)
        if progress.score >= progress.target:
            set_game_mode(self.world, self.event_bus, GameMode.LEVEL_COMPLETE)
            self.event_bus.emit(
                EVENT_LEVEL_COMPLETE,
                level=progress.level,
                score=progress.score,
                target=progress.target,
            )
        elif progress.moves_remaining <= 0:
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            self.event_bus.emit(
                EVENT_GAME_OVER,
                level=progress.level,
                score=progress.score,
                total_score=progress.total_score,
            )
        return get_game_state(self.world).mode

    def _reset_round_input(self) -> None:
        get_selection(self.world).position = None
        get_targeting(self.world).power_up = None
