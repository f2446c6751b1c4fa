from dataclasses import dataclass

from tilematch.constants import BASE_MOVES, BASE_TARGET


@dataclass(slots=True)
class LevelProgress:
    """Score and pacing for the current level window.

    ``score`` restarts at zero on every new level; ``total_score`` runs across
    the whole game and only resets on restart.
    """
    score: int = 0
    total_score: int = 0
    level: int = 1
    moves_remaining: int = BASE_MOVES
    target: int = BASE_TARGET

    def add_score(self, amount: int) -> None:
        if amount <= 0:
            return
        self.score += amount
        self.total_score += amount

    @property
    def progress(self) -> float:
        if self.target <= 0:
            return 1.0
        return min(1.0, self.score / self.target)
