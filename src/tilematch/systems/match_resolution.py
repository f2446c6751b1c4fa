from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from esper import World
from tilematch.components.board import Grid
from tilematch.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_BOARD_CLEAR_REQUEST, EVENT_MATCH_FOUND,
                                  EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                                  EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED)
from tilematch.systems.board_ops import (GravityMove, Position, TypeEntry, apply_gravity, clear_positions,
                                         find_matches, refill_empty, score_for_clear)
from tilematch.systems.turn_state_utils import get_or_create_turn_state
from tilematch.utils.lookup import get_board, get_level_progress, get_tile_registry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CascadeRound:
    """One clear -> gravity -> refill step of a cascade."""
    depth: int
    positions: List[Position]
    cleared: List[TypeEntry]
    score: int
    moves: List[GravityMove]
    new_tiles: List[Position]


@dataclass(slots=True)
class CascadeResult:
    rounds: List[CascadeRound] = field(default_factory=list)

    @property
    def total_score(self) -> int:
        return sum(r.score for r in self.rounds)

    @property
    def cleared(self) -> int:
        return sum(len(r.cleared) for r in self.rounds)

    @property
    def depth(self) -> int:
        return len(self.rounds)


def resolve_cascade(
    grid: Grid,
    initial: Iterable[Position],
    types: Sequence[str],
    rng: random.Random | None = None,
    *,
    on_round: Optional[Callable[[CascadeRound], None]] = None,
) -> CascadeResult:
    """Clear ``initial`` and keep resolving the board until no match remains.

    Each round scores the cells it actually clears, lets the survivors fall,
    refills the gaps at the top of each column and re-detects. There is no
    depth limit; ``on_round`` sees every round as soon as the refill is done.
    The grid is mutated in place.
    """
    rng = rng or random.Random()
    result = CascadeResult()
    positions = set(initial)
    while positions:
        cleared = clear_positions(grid, positions)
        moves = apply_gravity(grid)
        new_tiles = refill_empty(grid, types, rng)
        step = CascadeRound(
            depth=result.depth + 1,
            positions=sorted(positions),
            cleared=cleared,
            score=score_for_clear(len(cleared)),
            moves=moves,
            new_tiles=new_tiles,
        )
        result.rounds.append(step)
        logger.debug("Cascade round %d cleared %d tiles for %d points", step.depth, len(cleared), step.score)
        if on_round is not None:
            on_round(step)
        positions = find_matches(grid)
    return result


class MatchResolutionSystem:
    """Runs cascades for committed swaps and forced (power-up) clears.

    The whole cascade runs synchronously inside the triggering event. Every
    round is announced on the bus so a presentation layer can replay it frame
    by frame; TurnState.cascade_active stays set until the board is stable.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)
        self.event_bus.subscribe(EVENT_BOARD_CLEAR_REQUEST, self.on_board_clear_request)

    def on_swap_finalize(self, sender, **kwargs):
        positions = kwargs.get('positions')
        if not positions:
            positions = find_matches(get_board(self.world).cells)
        self.resolve(positions, reason="swap")

    def on_board_clear_request(self, sender, **kwargs):
        positions = kwargs.get('positions') or []
        self.resolve(positions, reason=kwargs.get('reason', 'board_clear'))

    def resolve(self, positions: Iterable[Position], reason: str) -> CascadeResult | None:
        positions = [tuple(p) for p in positions]
        if not positions:
            return None
        state = get_or_create_turn_state(self.world)
        if state.cascade_active:
            # Another cascade owns the board until it settles.
            return None
        board = get_board(self.world)
        registry = get_tile_registry(self.world)
        state.cascade_active = True
        state.cascade_depth = 0
        state.action_source = reason
        try:
            result = resolve_cascade(
                board.cells,
                positions,
                registry.spawnable_types(),
                getattr(self.world, "random", None),
                on_round=lambda step: self._announce_round(step, reason),
            )
        finally:
            state.cascade_active = False
        logger.debug("Cascade (%s) settled after %d rounds, +%d points", reason, result.depth, result.total_score)
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            depth=result.depth,
            total_score=result.total_score,
            cleared=result.cleared,
            reason=reason,
        )
        return result

    def _announce_round(self, step: CascadeRound, reason: str) -> None:
        state = get_or_create_turn_state(self.world)
        state.cascade_depth = step.depth
        round_reason = reason if step.depth == 1 else "cascade"
        progress = get_level_progress(self.world)
        progress.add_score(step.score)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=step.positions, size=len(step.positions),
                            depth=step.depth, reason=round_reason)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=[(r, c) for r, c, _ in step.cleared],
                            types=sorted(t for _, _, t in step.cleared), score=step.score,
                            depth=step.depth, reason=round_reason)
        if step.score:
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=progress.score, delta=step.score, target=progress.target)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=step.moves, depth=step.depth)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=step.new_tiles, depth=step.depth)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth, positions=step.positions,
                            grid=get_board(self.world).snapshot())
