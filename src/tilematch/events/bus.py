from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                            # payload: row, col
EVENT_POWER_UP_ACTIVATE_REQUEST = "power_up_activate_request"  # payload: kind=PowerUpKind
EVENT_PAUSE_TOGGLE = "pause_toggle"                        # payload: None
EVENT_RESTART_REQUEST = "restart_request"                  # payload: None
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"            # payload: None
EVENT_SOUND_TOGGLE = "sound_toggle"                        # payload: None


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=(r,c), dst=(r,c), positions=[(r,c),...]
EVENT_BOARD_CLEAR_REQUEST = "board_clear_request"  # payload: positions=[(r,c),...], reason=str
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int, reason=str
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions, types, score=int, depth=int, reason=str
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...], depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], grid=Grid
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, total_score=int, cleared=int, reason=str
EVENT_BOARD_REGENERATE = "board_regenerate"        # payload: reason=str
EVENT_BOARD_REGENERATED = "board_regenerated"      # payload: reason=str
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: None


# ============================================================================
# POWER-UPS
# ============================================================================
EVENT_POWER_UP_ARMED = "power_up_armed"                      # payload: kind=PowerUpKind
EVENT_POWER_UP_DISARMED = "power_up_disarmed"                # payload: kind=PowerUpKind, reason=str
EVENT_POWER_UP_TARGET_SELECTED = "power_up_target_selected"  # payload: kind=PowerUpKind, row, col
EVENT_POWER_UP_USED = "power_up_used"                        # payload: kind=PowerUpKind, target=(r,c)|None, positions, type_name=str|None
EVENT_POWER_UP_INVENTORY_CHANGED = "power_up_inventory_changed"  # payload: counts=dict


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, target=int
EVENT_MOVES_CHANGED = "moves_changed"              # payload: moves_remaining=int
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: level=int, score=int, target=int
EVENT_LEVEL_STARTED = "level_started"              # payload: level=int, target=int, moves=int
EVENT_GAME_OVER = "game_over"                      # payload: level=int, score=int, total_score=int
EVENT_GAME_RESTARTED = "game_restarted"            # payload: None


# ============================================================================
# SLIDE (2048)
# ============================================================================
EVENT_SLIDE_REQUEST = "slide_request"              # payload: direction=Direction
EVENT_SLIDE_APPLIED = "slide_applied"              # payload: direction, score_gained=int, merged=[(r,c),...], spawned=(r,c)|None
EVENT_SLIDE_BLOCKED = "slide_blocked"              # payload: direction
EVENT_SLIDE_RESET = "slide_reset"                  # payload: None
EVENT_SLIDE_KEEP_PLAYING = "slide_keep_playing"    # payload: None
EVENT_SLIDE_WON = "slide_won"                      # payload: score=int
EVENT_SLIDE_OVER = "slide_over"                    # payload: score=int, best=int
