from __future__ import annotations

from typing import Protocol

from tilematch.components.power_up import PowerUpKind
from tilematch.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEVEL_COMPLETE,
    EVENT_MATCH_CLEARED,
    EVENT_POWER_UP_USED,
    EVENT_SOUND_TOGGLE,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_VALID,
)

CUE_SELECT = "select"
CUE_SWAP = "swap"
CUE_MATCH = "match"
CUE_LEVEL_COMPLETE = "level_complete"
CUE_GAME_OVER = "game_over"


class SoundPlayer(Protocol):
    def play(self, cue: str) -> None: ...


class SoundCueSystem:
    """Translates game events into sound cues for an injected player.

    The engine never produces audio itself; without a player this system
    only tracks the enabled flag.
    """

    def __init__(self, event_bus: EventBus, player: SoundPlayer | None = None, *, enabled: bool = True):
        self.event_bus = event_bus
        self.player = player
        self.enabled = enabled
        event_bus.subscribe(EVENT_SOUND_TOGGLE, self.on_toggle)
        event_bus.subscribe(EVENT_TILE_SELECTED, lambda sender, **_: self.play(CUE_SELECT))
        event_bus.subscribe(EVENT_TILE_SWAP_VALID, lambda sender, **_: self.play(CUE_SWAP))
        event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        event_bus.subscribe(EVENT_POWER_UP_USED, self.on_power_up_used)
        event_bus.subscribe(EVENT_LEVEL_COMPLETE, lambda sender, **_: self.play(CUE_LEVEL_COMPLETE))
        event_bus.subscribe(EVENT_GAME_OVER, lambda sender, **_: self.play(CUE_GAME_OVER))

    def on_toggle(self, sender, **payload):
        self.enabled = not self.enabled

    def on_match_cleared(self, sender, **payload):
        if payload.get('positions'):
            self.play(CUE_MATCH)

    def on_power_up_used(self, sender, **payload):
        kind = payload.get('kind')
        if isinstance(kind, PowerUpKind):
            self.play(kind.value)

    def play(self, cue: str) -> None:
        if not self.enabled or self.player is None:
            return
        self.player.play(cue)
