from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from esper import World

from memory_match.components.presentation_state import PresentationState
from memory_match.constants import LOSS_LOCKOUT_MS, NOTICE_DURATION_MS
from memory_match.events.bus import EVENT_TICK, EventBus
from memory_match.events.observer import GameObserver, attach_observer
from memory_match.utils.game_state import GameStateView

logger = logging.getLogger(__name__)

WON_MESSAGE = "Congrats, you won!"
LOST_MESSAGE = "You lost, try again!"
SAVED_MESSAGE = "Game saved successfully!"
LOADED_MESSAGE = "Game loaded successfully!"
SAVE_FAILED_MESSAGE = "Failed to save game."
LOAD_FAILED_MESSAGE = "Failed to load game."


class PresentationSystem(GameObserver):
    """Mirrors the game into PresentationState using observer callbacks only."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        view: GameStateView | None = None,
        *,
        loss_lockout_ms: float = LOSS_LOCKOUT_MS,
        notice_duration_ms: float = NOTICE_DURATION_MS,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._loss_lockout = loss_lockout_ms / 1000.0
        self._notice_duration = notice_duration_ms / 1000.0
        self._lost_pending = False
        self._state_entity = self._ensure_state_entity()
        if view is not None:
            self.on_reset(view)
        attach_observer(event_bus, self)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _ensure_state_entity(self) -> int:
        existing = list(self.world.get_component(PresentationState))
        if existing:
            return existing[0][0]
        return self.world.create_entity(PresentationState())

    @property
    def state(self) -> PresentationState:
        return self.world.component_for_entity(self._state_entity, PresentationState)

    def notify(self, message: str) -> None:
        state = self.state
        state.notice = message
        state.notice_remaining = self._notice_duration

    # Observer callbacks ---------------------------------------------------

    def on_reset(self, view: GameStateView) -> None:
        state = self.state
        state.columns = view.columns
        state.images = view.images
        state.face_up = {index for index, tile in enumerate(view.tiles) if tile.revealed}
        state.tries_left = view.tries_left
        state.highlight = ()
        if self._lost_pending:
            self._lost_pending = False
            state.lockout_remaining = self._loss_lockout
        else:
            state.lockout_remaining = 0.0

    def on_tile_shown(self, index: int) -> None:
        self.state.face_up.add(index)

    def on_match_confirmed(self, first: int, second: int) -> None:
        self.state.highlight = (first, second) if first != second else (first,)

    def on_tiles_hidden(self, indices: Sequence[int]) -> None:
        self.state.face_up.difference_update(indices)

    def on_tries_changed(self, tries_left: int) -> None:
        self.state.tries_left = tries_left

    def on_won(self) -> None:
        self.notify(WON_MESSAGE)

    def on_lost(self) -> None:
        self._lost_pending = True
        self.notify(LOST_MESSAGE)

    def on_game_saved(self, path: Path) -> None:
        self.notify(SAVED_MESSAGE)

    def on_game_loaded(self, path: Path, view: GameStateView) -> None:
        self.notify(LOADED_MESSAGE)

    def on_persistence_failed(self, operation: str, path: Path, error: Exception) -> None:
        self.notify(SAVE_FAILED_MESSAGE if operation == "save" else LOAD_FAILED_MESSAGE)

    # Timers ---------------------------------------------------------------

    def on_tick(self, sender: Any, **payload: Any) -> None:
        dt = payload.get("dt", 1 / 60)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        state = self.state
        if state.notice_remaining > 0.0:
            state.notice_remaining = max(0.0, state.notice_remaining - dt)
            if state.notice_remaining == 0.0:
                state.notice = None
        if state.lockout_remaining > 0.0:
            state.lockout_remaining = max(0.0, state.lockout_remaining - dt)
