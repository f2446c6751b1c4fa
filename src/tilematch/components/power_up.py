from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from tilematch.constants import STARTING_POWER_UPS


class PowerUpKind(Enum):
    BOMB = 'bomb'
    RAINBOW = 'rainbow'
    SHUFFLE = 'shuffle'

    @property
    def needs_target(self) -> bool:
        return self is not PowerUpKind.SHUFFLE


def starting_counts() -> Dict[PowerUpKind, int]:
    return {kind: STARTING_POWER_UPS.get(kind.value, 0) for kind in PowerUpKind}


@dataclass(slots=True)
class PowerUpInventory:
    """Remaining uses per power-up kind; counts never go negative."""
    counts: Dict[PowerUpKind, int] = field(default_factory=starting_counts)

    def count(self, kind: PowerUpKind) -> int:
        return self.counts.get(kind, 0)

    def has(self, kind: PowerUpKind) -> bool:
        return self.count(kind) > 0

    def consume(self, kind: PowerUpKind) -> bool:
        if not self.has(kind):
            return False
        self.counts[kind] -= 1
        return True

    def grant(self, kind: PowerUpKind, amount: int = 1) -> None:
        self.counts[kind] = self.count(kind) + max(0, amount)
