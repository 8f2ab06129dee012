"""Reveal/match state machine driven by tile taps."""
from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Any, Callable

from esper import World

from memory_match.constants import FLIP_BACK_DELAY_MS
from memory_match.events.bus import (
    EVENT_GAME_LOADED,
    EVENT_GAME_LOST,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
    EVENT_MATCH_CONFIRMED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TILES_HIDDEN,
    EVENT_TILE_SHOWN,
    EVENT_TILE_TAP,
    EVENT_TRIES_CHANGED,
    EventBus,
)
from memory_match.factories.board import spawn_game
from memory_match.utils.game_state import (
    all_revealed,
    columns,
    decrement_tries,
    get_catalog,
    get_game_state,
    mark_hidden,
    mark_revealed,
    snapshot,
    tile_at,
)

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], Any]
Canceller = Callable[[Any], Any]


class ControllerPhase(Enum):
    IDLE = auto()
    ONE_PENDING = auto()
    COOLING_DOWN = auto()


class MatchController:
    """Applies the two-pick reveal protocol to the GameState on ``world``.

    Every observer event of a single tap is emitted before ``tap`` returns.
    Flip-back of a mismatched pair is delegated to ``scheduler`` and tagged
    with the game generation, so a flip-back left over from a finished game is
    dropped instead of touching its successor.
    When ``cancel`` is given, an outstanding flip-back is also withdrawn from
    the scheduler as soon as its game is replaced.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        scheduler: Scheduler,
        cancel: Canceller | None = None,
        flip_back_delay_ms: float = FLIP_BACK_DELAY_MS,
        auto_match_singleton: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._schedule = scheduler
        self._cancel = cancel
        self._flip_back_handle: Any = None
        self._flip_back_delay_ms = flip_back_delay_ms
        self._auto_match_singleton = auto_match_singleton
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._phase = ControllerPhase.IDLE

        self.event_bus.subscribe(EVENT_TILE_TAP, self._on_tile_tap)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_GAME_LOADED, self._on_game_loaded)

    @property
    def phase(self) -> ControllerPhase:
        return self._phase

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_tile_tap(self, sender, **payload) -> None:
        index = payload.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            logger.debug("Ignoring tap with invalid index %r", index)
            return
        self.tap(index)

    def _on_new_game_request(self, sender, **payload) -> None:
        self.new_game(payload.get("columns"), reason="new_game")

    def _on_game_loaded(self, sender, **payload) -> None:
        # Any mid-pair state was collapsed by the load.
        self._cancel_flip_back()
        self._phase = ControllerPhase.IDLE
        self._check_terminal()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tap(self, index: int) -> None:
        """Handle a tap on tile ``index``; taps that do not apply are silently ignored."""
        size = columns(self.world) ** 2
        if not 0 <= index < size:
            logger.debug("Ignoring tap outside the board: %d", index)
            return
        if self._phase is ControllerPhase.COOLING_DOWN:
            logger.debug("Ignoring tap on %d while a mismatch flips back", index)
            return
        if tile_at(self.world, index).revealed:
            return
        if self._phase is ControllerPhase.IDLE:
            self._first_pick(index)
        else:
            self._second_pick(index)

    def new_game(self, columns_override: int | None = None, *, reason: str = "new_game") -> None:
        """Replace the current game with a fresh board and emit ``game_reset``."""
        size = columns_override if columns_override is not None else columns(self.world)
        self._cancel_flip_back()
        spawn_game(self.world, size, rng=self._rng)
        self._phase = ControllerPhase.IDLE
        view = snapshot(self.world)
        logger.info("Started game generation %d (%s)", view.generation, reason)
        self.event_bus.emit(EVENT_GAME_RESET, view=view, reason=reason)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _first_pick(self, index: int) -> None:
        state = get_game_state(self.world)
        state.started = True
        mark_revealed(self.world, index)
        self.event_bus.emit(EVENT_TILE_SHOWN, index=index)
        if self._is_auto_matched_singleton(index):
            self.event_bus.emit(EVENT_MATCH_CONFIRMED, first=index, second=index)
            self._check_terminal()
            return
        state.pending = index
        self._phase = ControllerPhase.ONE_PENDING
        # A save with an odd number of face-up tiles, or an unmatched singleton,
        # can leave this pick as the last hidden tile.
        self._check_terminal()

    def _second_pick(self, index: int) -> None:
        state = get_game_state(self.world)
        previous = state.pending
        if previous is None or index == previous:
            return
        mark_revealed(self.world, index)
        self.event_bus.emit(EVENT_TILE_SHOWN, index=index)
        if self._is_auto_matched_singleton(index):
            # The singleton locks on its own; the earlier pick keeps waiting.
            self.event_bus.emit(EVENT_MATCH_CONFIRMED, first=index, second=index)
            self._check_terminal()
            return
        state.pending = None
        if tile_at(self.world, previous).image == tile_at(self.world, index).image:
            self._phase = ControllerPhase.IDLE
            self.event_bus.emit(EVENT_MATCH_CONFIRMED, first=previous, second=index)
        else:
            decrement_tries(self.world)
            self.event_bus.emit(EVENT_TRIES_CHANGED, tries_left=state.tries_left)
            state.hiding = (previous, index)
            self._phase = ControllerPhase.COOLING_DOWN
            generation = state.generation
            self._flip_back_handle = self._schedule(
                self._flip_back_delay_ms,
                lambda: self._flip_back(generation, previous, index),
            )
        self._check_terminal()

    def _flip_back(self, generation: int, first: int, second: int) -> None:
        state = get_game_state(self.world)
        if state.generation != generation:
            logger.debug("Dropping flip-back of %d/%d from generation %d", first, second, generation)
            return
        self._flip_back_handle = None
        mark_hidden(self.world, first)
        mark_hidden(self.world, second)
        state.hiding = ()
        self._phase = ControllerPhase.IDLE
        self.event_bus.emit(EVENT_TILES_HIDDEN, indices=[first, second])

    def _cancel_flip_back(self) -> None:
        handle, self._flip_back_handle = self._flip_back_handle, None
        if handle is not None and self._cancel is not None:
            self._cancel(handle)

    def _check_terminal(self) -> None:
        if all_revealed(self.world):
            logger.info("Board cleared with %d tries left", get_game_state(self.world).tries_left)
            self.event_bus.emit(EVENT_GAME_WON)
            self.new_game(reason="won")
        elif get_game_state(self.world).tries_left == 0:
            logger.info("Out of tries")
            self.event_bus.emit(EVENT_GAME_LOST)
            self.new_game(reason="lost")

    def _is_auto_matched_singleton(self, index: int) -> bool:
        if not self._auto_match_singleton:
            return False
        if columns(self.world) % 2 == 0:
            return False
        return tile_at(self.world, index).image == get_catalog(self.world).singleton
