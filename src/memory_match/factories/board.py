"""Board generation and (re)spawning of a game onto the world."""
from __future__ import annotations

import logging
import random
from typing import List, Sequence

from esper import World

from memory_match.components.board import Board
from memory_match.components.game_state import GameState
from memory_match.components.image_catalog import ImageCatalog
from memory_match.components.tile import Tile
from memory_match.constants import MIN_COLUMNS, STARTING_TRIES
from memory_match.errors import ConfigError

logger = logging.getLogger(__name__)


def build_pair_images(
    columns: int,
    catalog: ImageCatalog,
    rng: random.Random | None = None,
) -> List[str]:
    """Return a shuffled row-major image order for a ``columns`` x ``columns`` board.

    The first ``K = N // 2`` pairable catalog entries each appear twice. An odd
    board gets the catalog's reserved singleton on exactly one tile.
    """
    if columns < MIN_COLUMNS:
        raise ConfigError(f"board needs at least {MIN_COLUMNS} columns, got {columns}")
    size = columns * columns
    pairs_needed = (size - size % 2) // 2
    available = catalog.count - 1
    if pairs_needed > available:
        raise ConfigError(
            f"{columns}x{columns} board needs {pairs_needed} distinct images, "
            f"catalog offers {available}"
        )
    images: List[str] = []
    for image in catalog.images[:pairs_needed]:
        images.extend((image, image))
    if size % 2:
        images.append(catalog.singleton)
    (rng or random).shuffle(images)
    return images


def _clear_board(world: World) -> None:
    stale = [entity for entity, _ in world.get_component(Tile)]
    stale.extend(entity for entity, _ in world.get_component(Board))
    for entity in stale:
        world.delete_entity(entity, immediate=True)


def spawn_game(
    world: World,
    columns: int,
    *,
    rng: random.Random | None = None,
    images: Sequence[str] | None = None,
    revealed: Sequence[bool] | None = None,
    tries_left: int = STARTING_TRIES,
    started: bool | None = None,
) -> GameState:
    """Replace the board on ``world`` with a new generation and return its GameState.

    ``images`` and ``revealed`` restore a known layout (tests, loaded saves);
    otherwise a fresh paired board is generated from the world's catalog.
    """
    if columns < MIN_COLUMNS:
        raise ConfigError(f"board needs at least {MIN_COLUMNS} columns, got {columns}")
    size = columns * columns
    if images is None:
        catalog = next((c for _, c in world.get_component(ImageCatalog)), None)
        if catalog is None:
            raise ConfigError("world has no ImageCatalog to draw images from")
        images = build_pair_images(columns, catalog, rng or getattr(world, "random", None))
    if len(images) != size:
        raise ConfigError(f"{columns}x{columns} board needs {size} images, got {len(images)}")
    if revealed is None:
        revealed = [False] * size
    if len(revealed) != size:
        raise ConfigError(f"{columns}x{columns} board needs {size} reveal flags, got {len(revealed)}")
    if tries_left < 0:
        raise ConfigError(f"tries cannot be negative, got {tries_left}")

    _clear_board(world)
    world.create_entity(Board(columns=columns))
    for index, (image, face_up) in enumerate(zip(images, revealed)):
        world.create_entity(Tile(index=index, image=str(image), revealed=bool(face_up)))

    state = next((s for _, s in world.get_component(GameState)), None)
    if state is None:
        state = GameState(generation=0)
        world.create_entity(state)
    state.generation += 1
    state.tries_left = tries_left
    state.pending = None
    state.hiding = ()
    if started is None:
        started = any(revealed) or tries_left < STARTING_TRIES
    state.started = started
    logger.debug("Spawned %dx%d board, generation %d", columns, columns, state.generation)
    return state
