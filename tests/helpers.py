from __future__ import annotations

from typing import Sequence

from esper import World

from tilematch.utils.lookup import get_board


def load_grid(world: World, rows: Sequence[Sequence[str | None]]) -> None:
    """Replace the board contents with a hand-built grid."""

    board = get_board(world)
    board.rows = len(rows)
    board.cols = len(rows[0]) if rows else 0
    board.cells = [list(row) for row in rows]


class RecordingPlayer:
    """Sound player double that remembers every cue it was asked to play."""

    def __init__(self) -> None:
        self.cues: list[str] = []

    def play(self, cue: str) -> None:
        self.cues.append(cue)
