from dataclasses import dataclass, field
from typing import List, Optional

Grid = List[List[Optional[str]]]


@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    # Row-major cell contents; None marks an empty cell.
    cells: Grid = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def snapshot(self) -> Grid:
        return [list(row) for row in self.cells]
