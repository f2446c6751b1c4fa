"""Level pacing policy: targets, move budget and power-up rewards."""
from __future__ import annotations

from typing import Dict

from tilematch.components.power_up import PowerUpKind
from tilematch.constants import (
    BASE_MOVES,
    BASE_TARGET,
    RAINBOW_BONUS_EVERY,
    SHUFFLE_BONUS_EVERY,
    TARGET_STEP,
)


def target_for_level(level: int) -> int:
    return BASE_TARGET + (max(1, level) - 1) * TARGET_STEP


def moves_for_level(level: int) -> int:
    return BASE_MOVES


def bonus_power_ups(level: int) -> Dict[PowerUpKind, int]:
    """Inventory granted on reaching ``level``.

    One bomb every level; a rainbow on multiples of RAINBOW_BONUS_EVERY and a
    shuffle on multiples of SHUFFLE_BONUS_EVERY.
    """
    bonus = {PowerUpKind.BOMB: 1}
    if level % RAINBOW_BONUS_EVERY == 0:
        bonus[PowerUpKind.RAINBOW] = 1
    if level % SHUFFLE_BONUS_EVERY == 0:
        bonus[PowerUpKind.SHUFFLE] = 1
    return bonus
