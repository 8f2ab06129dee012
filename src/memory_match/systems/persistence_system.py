from __future__ import annotations

import logging
from pathlib import Path

from esper import World

from memory_match.constants import DEFAULT_SAVE_FILE
from memory_match.errors import ParseError, StorageError
from memory_match.events.bus import (
    EVENT_GAME_LOADED,
    EVENT_GAME_RESET,
    EVENT_GAME_SAVED,
    EVENT_LOAD_REQUEST,
    EVENT_PERSISTENCE_FAILED,
    EVENT_SAVE_REQUEST,
    EventBus,
)
from memory_match.factories.board import spawn_game
from memory_match.persistence.save_format import encode_game, read_save, write_save
from memory_match.utils.game_state import GameStateView, snapshot

logger = logging.getLogger(__name__)


class PersistenceSystem:
    """Saves the current game to, and restores it from, a text save file.

    ``save``/``load`` raise StorageError or ParseError to direct callers. The
    request events used by the presentation layer report failures through
    ``EVENT_PERSISTENCE_FAILED`` instead, so the game keeps running.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | str | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else Path(DEFAULT_SAVE_FILE)

        self.event_bus.subscribe(EVENT_SAVE_REQUEST, self._on_save_request)
        self.event_bus.subscribe(EVENT_LOAD_REQUEST, self._on_load_request)

    @property
    def save_path(self) -> Path:
        return self._save_path

    def save(self, path: Path | str | None = None) -> Path:
        target = Path(path) if path is not None else self._save_path
        written = write_save(target, encode_game(snapshot(self.world)))
        logger.info("Saved game to %s", written)
        self.event_bus.emit(EVENT_GAME_SAVED, path=written)
        return written

    def load(self, path: Path | str | None = None) -> GameStateView:
        """Replace the current game with the one stored at ``path``.

        The file is parsed completely before the world is touched, so a
        malformed save leaves the running game as it was.
        """
        target = Path(path) if path is not None else self._save_path
        saved = read_save(target)
        spawn_game(
            self.world,
            saved.columns,
            images=saved.images,
            revealed=saved.revealed,
            tries_left=saved.tries_left,
            started=saved.started,
        )
        view = snapshot(self.world)
        logger.info("Loaded %dx%d game from %s", view.columns, view.columns, target)
        self.event_bus.emit(EVENT_GAME_RESET, view=view, reason="loaded")
        self.event_bus.emit(EVENT_GAME_LOADED, path=target, view=view)
        return view

    # Event handlers -----------------------------------------------------

    def _on_save_request(self, sender, **payload) -> None:
        path = payload.get("path")
        try:
            self.save(path)
        except StorageError as exc:
            self._report_failure("save", path, exc)

    def _on_load_request(self, sender, **payload) -> None:
        path = payload.get("path")
        try:
            self.load(path)
        except (StorageError, ParseError) as exc:
            self._report_failure("load", path, exc)

    def _report_failure(self, operation: str, path, error: Exception) -> None:
        target = Path(path) if path is not None else self._save_path
        logger.warning("Could not %s game at %s: %s", operation, target, error)
        self.event_bus.emit(EVENT_PERSISTENCE_FAILED, operation=operation, path=target, error=error)
