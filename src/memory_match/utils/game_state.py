"""Game State operations: pure reads, guarded mutators and a read-only view.

The mutators are meant to be called by the MatchController only. A failed
precondition is a programming error: it raises IllegalTransition in normal
runs and is logged and skipped when Python runs with ``-O``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from esper import World

from memory_match.components.board import Board
from memory_match.components.game_state import GameState
from memory_match.components.image_catalog import ImageCatalog
from memory_match.components.tile import Tile
from memory_match.errors import IllegalTransition

logger = logging.getLogger(__name__)


class TileView(NamedTuple):
    image: str
    revealed: bool


@dataclass(frozen=True)
class GameStateView:
    """Immutable snapshot of one game handed to observers and the save encoder."""

    columns: int
    tries_left: int
    started: bool
    generation: int
    tiles: Tuple[TileView, ...]
    pending: Optional[int] = None
    hiding: Tuple[int, ...] = ()

    @property
    def size(self) -> int:
        return len(self.tiles)

    @property
    def images(self) -> Tuple[str, ...]:
        return tuple(tile.image for tile in self.tiles)

    @property
    def revealed(self) -> Tuple[bool, ...]:
        return tuple(tile.revealed for tile in self.tiles)

    def tile_at(self, index: int) -> TileView:
        return self.tiles[index]

    def all_revealed(self) -> bool:
        return all(tile.revealed for tile in self.tiles)


def _illegal(message: str) -> None:
    logger.error("Illegal transition: %s", message)
    if __debug__:
        raise IllegalTransition(message)


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found; spawn a game first")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found; spawn a game first")


def get_catalog(world: World) -> ImageCatalog:
    for _, catalog in world.get_component(ImageCatalog):
        return catalog
    raise RuntimeError("ImageCatalog registry not found")


def ordered_tiles(world: World) -> List[Tile]:
    return sorted((tile for _, tile in world.get_component(Tile)), key=lambda tile: tile.index)


def _tile(world: World, index: int) -> Tile:
    for _, tile in world.get_component(Tile):
        if tile.index == index:
            return tile
    raise IndexError(f"no tile at index {index}")


def tries(world: World) -> int:
    return get_game_state(world).tries_left


def columns(world: World) -> int:
    return get_board(world).columns


def tile_at(world: World, index: int) -> TileView:
    tile = _tile(world, index)
    return TileView(tile.image, tile.revealed)


def mark_revealed(world: World, index: int) -> None:
    tile = _tile(world, index)
    if tile.revealed:
        _illegal(f"tile {index} is already revealed")
        return
    tile.revealed = True


def mark_hidden(world: World, index: int) -> None:
    tile = _tile(world, index)
    if not tile.revealed:
        _illegal(f"tile {index} is already hidden")
        return
    tile.revealed = False


def decrement_tries(world: World) -> None:
    state = get_game_state(world)
    if state.tries_left <= 0:
        _illegal("no tries left to spend")
        return
    state.tries_left -= 1


def all_revealed(world: World) -> bool:
    return all(tile.revealed for tile in ordered_tiles(world))


def snapshot(world: World) -> GameStateView:
    state = get_game_state(world)
    return GameStateView(
        columns=columns(world),
        tries_left=state.tries_left,
        started=state.started,
        generation=state.generation,
        tiles=tuple(TileView(tile.image, tile.revealed) for tile in ordered_tiles(world)),
        pending=state.pending,
        hiding=tuple(state.hiding),
    )
