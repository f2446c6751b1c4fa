from esper import World

from tilematch.components.game_state import GameMode
from tilematch.components.power_up import PowerUpKind
from tilematch.events.bus import (
    EventBus,
    EVENT_GAME_MODE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_GAME_RESTARTED,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_STARTED,
    EVENT_MATCH_CLEARED,
    EVENT_POWER_UP_ARMED,
    EVENT_POWER_UP_DISARMED,
    EVENT_POWER_UP_USED,
    EVENT_TILE_SWAP_INVALID,
)
from tilematch.utils.lookup import get_hint

WELCOME_HINT = "Line up 3 or more matching blocks to clear them!"

ARMED_HINTS = {
    PowerUpKind.BOMB: "Pick a spot to drop the bomb.",
    PowerUpKind.RAINBOW: "Pick a block to clear every block of its colour.",
}


class HintSystem:
    """Keeps the single-line player hint in sync with what just happened."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.set_hint(WELCOME_HINT)
        event_bus.subscribe(EVENT_TILE_SWAP_INVALID, self.on_swap_invalid)
        event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        event_bus.subscribe(EVENT_POWER_UP_ARMED, self.on_power_up_armed)
        event_bus.subscribe(EVENT_POWER_UP_DISARMED, self.on_power_up_disarmed)
        event_bus.subscribe(EVENT_POWER_UP_USED, self.on_power_up_used)
        event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_mode_changed)
        event_bus.subscribe(EVENT_LEVEL_COMPLETE, self.on_level_complete)
        event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)
        event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        event_bus.subscribe(EVENT_GAME_RESTARTED, self.on_restarted)

    @property
    def text(self) -> str:
        return get_hint(self.world).text

    def set_hint(self, text: str) -> None:
        get_hint(self.world).text = text

    def on_swap_invalid(self, sender, **payload):
        if payload.get('reason') == 'no_match':
            self.set_hint("No match there, try another swap!")
        else:
            self.set_hint("Invalid move!")

    def on_match_cleared(self, sender, **payload):
        count = len(payload.get('positions', []))
        score = payload.get('score', 0)
        depth = payload.get('depth', 1)
        reason = payload.get('reason')
        if reason == PowerUpKind.BOMB.value:
            self.set_hint(f"Boom! The bomb cleared {count} blocks, +{score} points!")
        elif reason == PowerUpKind.RAINBOW.value:
            types = payload.get('types') or ['']
            self.set_hint(f"Rainbow! Cleared all {count} {types[0]} blocks, +{score} points!")
        elif depth > 1:
            self.set_hint(f"Combo x{depth}! Cleared {count} blocks, +{score} points!")
        else:
            self.set_hint(f"Great! Cleared {count} blocks, +{score} points!")

    def on_power_up_armed(self, sender, **payload):
        hint = ARMED_HINTS.get(payload.get('kind'))
        if hint:
            self.set_hint(hint)

    def on_power_up_disarmed(self, sender, **payload):
        if payload.get('reason') == 'cancelled':
            self.set_hint("Power-up cancelled.")

    def on_power_up_used(self, sender, **payload):
        if payload.get('kind') is PowerUpKind.SHUFFLE:
            self.set_hint("Board shuffled! Look for new matches.")

    def on_mode_changed(self, sender, **payload):
        new_mode = payload.get('new_mode')
        if new_mode == GameMode.PAUSED:
            self.set_hint("Paused.")
        elif new_mode == GameMode.PLAYING and payload.get('previous_mode') == GameMode.PAUSED:
            self.set_hint("Back to it!")

    def on_level_complete(self, sender, **payload):
        self.set_hint(f"Level {payload.get('level')} complete with {payload.get('score')} points!")

    def on_level_started(self, sender, **payload):
        self.set_hint(f"Level {payload.get('level')} begins! Target: {payload.get('target')} points.")

    def on_game_over(self, sender, **payload):
        self.set_hint(f"Game over! Final score: {payload.get('total_score')}. Try again!")

    def on_restarted(self, sender, **payload):
        self.set_hint("New game! " + WELCOME_HINT)
