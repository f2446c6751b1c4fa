from dataclasses import dataclass
from typing import Optional

from tilematch.components.power_up import PowerUpKind

@dataclass(slots=True)
class TargetingState:
    """Power-up armed and waiting for a target tile.

    Fields:
      power_up: the armed kind, or None when no power-up awaits a target.
    """
    power_up: Optional[PowerUpKind] = None
