import random
from collections import Counter

import pytest

from memory_match.components.board import Board
from memory_match.components.image_catalog import ImageCatalog
from memory_match.components.tile import Tile
from memory_match.errors import ConfigError
from memory_match.factories.board import build_pair_images, spawn_game
from memory_match.utils.game_state import get_game_state, ordered_tiles
from memory_match.world import create_world


@pytest.mark.parametrize("columns", [2, 4])
def test_even_board_uses_every_image_exactly_twice(columns):
    catalog = ImageCatalog()
    for seed in range(20):
        images = build_pair_images(columns, catalog, random.Random(seed))
        assert len(images) == columns * columns
        counts = Counter(images)
        assert set(counts.values()) == {2}
        assert catalog.singleton not in counts


def test_even_board_draws_first_k_catalog_entries():
    catalog = ImageCatalog()
    images = build_pair_images(4, catalog, random.Random(3))
    assert set(images) == set(catalog.images[:8])


def test_odd_board_has_single_singleton():
    catalog = ImageCatalog()
    for seed in range(20):
        images = build_pair_images(3, catalog, random.Random(seed))
        counts = Counter(images)
        assert len(images) == 9
        assert counts.pop(catalog.singleton) == 1
        assert len(counts) == 4
        assert set(counts.values()) == {2}


def test_generation_is_shuffled_with_given_rng():
    catalog = ImageCatalog()
    first = build_pair_images(4, catalog, random.Random(11))
    second = build_pair_images(4, catalog, random.Random(11))
    assert first == second
    orders = {tuple(build_pair_images(4, catalog, random.Random(seed))) for seed in range(10)}
    assert len(orders) > 1


def test_too_small_board_is_rejected():
    with pytest.raises(ConfigError):
        build_pair_images(1, ImageCatalog())


def test_board_needing_reserved_image_is_rejected():
    # 6x6 needs 18 pairs but the default catalog only offers 8 pairable images.
    with pytest.raises(ConfigError):
        build_pair_images(6, ImageCatalog())
    # 4x4 needs 8 pairs; a nine-entry catalog minus the singleton is exactly enough.
    build_pair_images(4, ImageCatalog(images=tuple(f"{i}.png" for i in range(9))))
    with pytest.raises(ConfigError):
        build_pair_images(4, ImageCatalog(images=tuple(f"{i}.png" for i in range(8))))


def test_spawn_game_creates_face_down_tiles():
    world = create_world(columns=4, rng=random.Random(5))
    board = next(comp for _, comp in world.get_component(Board))
    tiles = ordered_tiles(world)
    assert board.columns == 4 and board.size == 16
    assert [tile.index for tile in tiles] == list(range(16))
    assert not any(tile.revealed for tile in tiles)
    state = get_game_state(world)
    assert state.tries_left == 10
    assert state.started is False
    assert state.pending is None


def test_spawn_game_replaces_previous_generation():
    world = create_world(columns=2, images=["A", "A", "B", "B"])
    first_generation = get_game_state(world).generation

    spawn_game(world, 2, rng=random.Random(1))

    assert len(world.get_component(Tile)) == 4
    assert len(world.get_component(Board)) == 1
    assert get_game_state(world).generation == first_generation + 1


def test_spawn_game_rejects_wrong_image_count():
    world = create_world(columns=2, images=["A", "A", "B", "B"])
    with pytest.raises(ConfigError):
        spawn_game(world, 2, images=["A", "A", "B"])
