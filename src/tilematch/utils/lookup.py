"""Accessors for the singleton components a session world carries."""
from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from tilematch.components.board import Board
from tilematch.components.game_state import GameState
from tilematch.components.hint_text import HintText
from tilematch.components.level_progress import LevelProgress
from tilematch.components.power_up import PowerUpInventory
from tilematch.components.selection import Selection
from tilematch.components.targeting_state import TargetingState
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes

C = TypeVar("C")


def get_singleton(world: World, component_type: Type[C]) -> C:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found")


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_board(world: World) -> Board:
    return get_singleton(world, Board)


def get_game_state(world: World) -> GameState:
    return get_singleton(world, GameState)


def get_level_progress(world: World) -> LevelProgress:
    return get_singleton(world, LevelProgress)


def get_inventory(world: World) -> PowerUpInventory:
    return get_singleton(world, PowerUpInventory)


def get_targeting(world: World) -> TargetingState:
    return get_singleton(world, TargetingState)


def get_selection(world: World) -> Selection:
    return get_singleton(world, Selection)


def get_hint(world: World) -> HintText:
    return get_singleton(world, HintText)
