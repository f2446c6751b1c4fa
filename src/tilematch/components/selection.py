from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(slots=True)
class Selection:
    """First tile of a pending swap, if any."""
    position: Optional[Tuple[int, int]] = None
