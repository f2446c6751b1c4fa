import random
from typing import Iterable

from esper import World
from tilematch.events.bus import EventBus
from tilematch.components.game_state import GameState, GameMode
from tilematch.components.hint_text import HintText
from tilematch.components.level_progress import LevelProgress
from tilematch.components.power_up import PowerUpInventory, PowerUpKind, starting_counts
from tilematch.components.selection import Selection
from tilematch.components.targeting_state import TargetingState
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes
from tilematch.components.turn_state import TurnState
from tilematch.constants import MIN_SPAWNABLE_TYPES
from tilematch.utils.progression import moves_for_level, target_for_level

DEFAULT_TILE_COLORS = {
    'red':    (220, 60, 60),
    'blue':   (70, 110, 220),
    'yellow': (230, 200, 60),
    'green':  (70, 180, 90),
    'purple': (150, 80, 190),
    'orange': (235, 140, 50),
}
DEFAULT_TILE_SYMBOLS = {
    'red': '\U0001F534',
    'blue': '\U0001F535',
    'yellow': '\U0001F7E1',
    'green': '\U0001F7E2',
    'purple': '\U0001F7E3',
    'orange': '\U0001F7E0',
}


def create_world(
    event_bus: EventBus,
    *,
    block_types: Iterable[str] | None = None,
    power_ups: dict[PowerUpKind, int] | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding the session singletons and the tile registry.

    The board itself is created by BoardSystem. ``block_types`` narrows the
    spawnable subset of the default palette (or defines plain new types when
    names are unknown to it). Fewer than two distinct names raise ValueError:
    a single colour can never settle a cascade.
    """
    names: list[str] = []
    if block_types is not None:
        names = list(dict.fromkeys(block_types))
        if len(names) < MIN_SPAWNABLE_TYPES:
            raise ValueError(f"block_types needs at least {MIN_SPAWNABLE_TYPES} distinct names, got {names!r}")

    world = World()
    setattr(world, "random", rng or random.Random())

    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=GameMode.PLAYING))
    world.add_component(state_entity, LevelProgress(moves_remaining=moves_for_level(1), target=target_for_level(1)))
    world.add_component(state_entity, PowerUpInventory(counts=dict(power_ups) if power_ups is not None else starting_counts()))
    world.add_component(state_entity, TargetingState())
    world.add_component(state_entity, Selection())
    world.add_component(state_entity, TurnState())
    world.add_component(state_entity, HintText())

    colors = dict(DEFAULT_TILE_COLORS)
    spawnable: list[str] = []
    for name in names:
        # Unknown names still need a colour entry; grey keeps them renderable.
        colors.setdefault(name, (128, 128, 128))
        spawnable.append(name)

    # Create single registry entity with canonical types
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(types=colors, spawnable=spawnable, symbols=dict(DEFAULT_TILE_SYMBOLS)),
    )
    return world
