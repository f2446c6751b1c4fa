from __future__ import annotations

import logging

from esper import World

from tilematch.components.power_up import PowerUpKind
from tilematch.events.bus import (
    EventBus,
    EVENT_BOARD_CLEAR_REQUEST,
    EVENT_BOARD_SHUFFLED,
    EVENT_POWER_UP_ACTIVATE_REQUEST,
    EVENT_POWER_UP_ARMED,
    EVENT_POWER_UP_DISARMED,
    EVENT_POWER_UP_INVENTORY_CHANGED,
    EVENT_POWER_UP_TARGET_SELECTED,
    EVENT_POWER_UP_USED,
    EVENT_TILE_DESELECTED,
)
from tilematch.systems.board_ops import area_positions, color_positions, shuffle_cells
from tilematch.systems.turn_state_utils import is_cascade_active
from tilematch.utils.game_state import is_playing
from tilematch.utils.lookup import get_board, get_inventory, get_selection, get_targeting

logger = logging.getLogger(__name__)


def coerce_kind(value) -> PowerUpKind | None:
    if isinstance(value, PowerUpKind):
        return value
    try:
        return PowerUpKind(value)
    except ValueError:
        return None


class PowerUpSystem:
    """Arms, cancels and fires power-ups.

    Inventory is charged when a power-up actually fires: on the target tap
    for bomb and rainbow, immediately for shuffle. Arming and cancelling are
    free. Targeted power-ups turn into a forced clear request that bypasses
    run detection; shuffle only permutes the board.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_POWER_UP_ACTIVATE_REQUEST, self.on_activate_request)
        event_bus.subscribe(EVENT_POWER_UP_TARGET_SELECTED, self.on_target_selected)

    def on_activate_request(self, sender, **payload) -> None:
        if not is_playing(self.world) or is_cascade_active(self.world):
            return
        kind = coerce_kind(payload.get("kind"))
        if kind is None:
            return
        inventory = get_inventory(self.world)
        if not inventory.has(kind):
            return
        targeting = get_targeting(self.world)
        if not kind.needs_target:
            self._disarm(reason="replaced")
            self._fire_shuffle()
            return
        if targeting.power_up is kind:
            self._disarm(reason="cancelled")
            return
        if targeting.power_up is not None:
            self._disarm(reason="replaced")
        self._clear_selection()
        targeting.power_up = kind
        self.event_bus.emit(EVENT_POWER_UP_ARMED, kind=kind)

    def on_target_selected(self, sender, **payload) -> None:
        if not is_playing(self.world) or is_cascade_active(self.world):
            return
        targeting = get_targeting(self.world)
        kind = coerce_kind(payload.get("kind"))
        if kind is None or not kind.needs_target or targeting.power_up is not kind:
            return
        row = payload.get("row")
        col = payload.get("col")
        if row is None or col is None:
            return
        grid = get_board(self.world).cells
        target = (row, col)
        type_name = None
        if kind is PowerUpKind.BOMB:
            affected = area_positions(grid, target)
        else:
            affected = color_positions(grid, target)
            if affected:
                type_name = grid[row][col]
        if not affected:
            # Nothing to hit; keep the power-up armed and uncharged.
            return
        inventory = get_inventory(self.world)
        if not inventory.consume(kind):
            self._disarm(reason="empty")
            return
        targeting.power_up = None
        positions = sorted(affected)
        logger.debug("%s fired at %s affecting %d tiles", kind.value, target, len(positions))
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, counts=dict(inventory.counts))
        self.event_bus.emit(EVENT_POWER_UP_USED, kind=kind, target=target, positions=positions, type_name=type_name)
        self.event_bus.emit(EVENT_BOARD_CLEAR_REQUEST, positions=positions, reason=kind.value)

    def _fire_shuffle(self) -> None:
        inventory = get_inventory(self.world)
        if not inventory.consume(PowerUpKind.SHUFFLE):
            return
        self._clear_selection()
        shuffle_cells(get_board(self.world).cells, getattr(self.world, "random", None))
        self.event_bus.emit(EVENT_POWER_UP_INVENTORY_CHANGED, counts=dict(inventory.counts))
        self.event_bus.emit(EVENT_POWER_UP_USED, kind=PowerUpKind.SHUFFLE, target=None, positions=[], type_name=None)
        self.event_bus.emit(EVENT_BOARD_SHUFFLED)

    def _disarm(self, reason: str) -> None:
        targeting = get_targeting(self.world)
        kind = targeting.power_up
        if kind is None:
            return
        targeting.power_up = None
        self.event_bus.emit(EVENT_POWER_UP_DISARMED, kind=kind, reason=reason)

    def _clear_selection(self) -> None:
        selection = get_selection(self.world)
        prev = selection.position
        if prev is None:
            return
        selection.position = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason="power_up", prev_row=prev[0], prev_col=prev[1])
