from dataclasses import dataclass, field
from typing import List

from tilematch.constants import SLIDE_SIZE


@dataclass(slots=True)
class SlideBoard:
    """State of a 2048 game. Zero marks an empty cell."""
    size: int = SLIDE_SIZE
    cells: List[List[int]] = field(default_factory=list)
    score: int = 0
    best: int = 0
    won: bool = False
    keep_playing: bool = False
    over: bool = False

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[0] * self.size for _ in range(self.size)]

    def snapshot(self) -> List[List[int]]:
        return [list(row) for row in self.cells]
