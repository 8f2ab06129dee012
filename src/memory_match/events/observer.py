"""Observer contract the presentation layer implements to follow the game."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from memory_match.events.bus import (
    EVENT_GAME_LOADED,
    EVENT_GAME_LOST,
    EVENT_GAME_RESET,
    EVENT_GAME_SAVED,
    EVENT_GAME_WON,
    EVENT_MATCH_CONFIRMED,
    EVENT_PERSISTENCE_FAILED,
    EVENT_TILES_HIDDEN,
    EVENT_TILE_SHOWN,
    EVENT_TRIES_CHANGED,
    EventBus,
)

if TYPE_CHECKING:
    from memory_match.utils.game_state import GameStateView


class GameObserver:
    """No-op base; override only the callbacks a view cares about."""

    def on_reset(self, view: GameStateView) -> None:
        pass

    def on_tile_shown(self, index: int) -> None:
        pass

    def on_match_confirmed(self, first: int, second: int) -> None:
        pass

    def on_tiles_hidden(self, indices: Sequence[int]) -> None:
        pass

    def on_tries_changed(self, tries_left: int) -> None:
        pass

    def on_won(self) -> None:
        pass

    def on_lost(self) -> None:
        pass

    def on_game_saved(self, path: Path) -> None:
        pass

    def on_game_loaded(self, path: Path, view: GameStateView) -> None:
        pass

    def on_persistence_failed(self, operation: str, path: Path, error: Exception) -> None:
        pass


def attach_observer(event_bus: EventBus, observer: GameObserver) -> None:
    """Route every observer event on the bus to the matching method of ``observer``."""

    def _reset(sender: Any, **payload: Any) -> None:
        observer.on_reset(payload["view"])

    def _shown(sender: Any, **payload: Any) -> None:
        observer.on_tile_shown(payload["index"])

    def _matched(sender: Any, **payload: Any) -> None:
        observer.on_match_confirmed(payload["first"], payload["second"])

    def _hidden(sender: Any, **payload: Any) -> None:
        observer.on_tiles_hidden(list(payload["indices"]))

    def _tries(sender: Any, **payload: Any) -> None:
        observer.on_tries_changed(payload["tries_left"])

    def _won(sender: Any, **payload: Any) -> None:
        observer.on_won()

    def _lost(sender: Any, **payload: Any) -> None:
        observer.on_lost()

    def _saved(sender: Any, **payload: Any) -> None:
        observer.on_game_saved(payload["path"])

    def _loaded(sender: Any, **payload: Any) -> None:
        observer.on_game_loaded(payload["path"], payload["view"])

    def _failed(sender: Any, **payload: Any) -> None:
        observer.on_persistence_failed(payload["operation"], payload["path"], payload["error"])

    event_bus.subscribe(EVENT_GAME_RESET, _reset)
    event_bus.subscribe(EVENT_TILE_SHOWN, _shown)
    event_bus.subscribe(EVENT_MATCH_CONFIRMED, _matched)
    event_bus.subscribe(EVENT_TILES_HIDDEN, _hidden)
    event_bus.subscribe(EVENT_TRIES_CHANGED, _tries)
    event_bus.subscribe(EVENT_GAME_WON, _won)
    event_bus.subscribe(EVENT_GAME_LOST, _lost)
    event_bus.subscribe(EVENT_GAME_SAVED, _saved)
    event_bus.subscribe(EVENT_GAME_LOADED, _loaded)
    event_bus.subscribe(EVENT_PERSISTENCE_FAILED, _failed)
