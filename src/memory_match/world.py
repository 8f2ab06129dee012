import random
from typing import Sequence

from esper import World

from memory_match.components.image_catalog import ImageCatalog
from memory_match.constants import DEFAULT_COLUMNS, DEFAULT_IMAGES, STARTING_TRIES
from memory_match.factories.board import spawn_game


def create_world(
    *,
    columns: int = DEFAULT_COLUMNS,
    catalog: Sequence[str] = DEFAULT_IMAGES,
    images: Sequence[str] | None = None,
    tries_left: int = STARTING_TRIES,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding the image catalog and a first game of ``columns`` x ``columns``."""
    world = World()
    setattr(world, "random", rng or random.Random())

    # Single registry entity for the asset catalog.
    world.create_entity(ImageCatalog(images=tuple(catalog)))

    spawn_game(world, columns, images=images, tries_left=tries_left, started=False)
    return world
