from blinker import Signal
from typing import Dict

class EventBus:
    """Event bus leveraging blinker Signal objects; handlers receive (sender, **payload)."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (seconds)


# ============================================================================
# INPUT & COMMANDS
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_TAP = "tile_tap"                # payload: index=int
EVENT_NEW_GAME_REQUEST = "new_game_request"  # payload: columns=int|None
EVENT_SAVE_REQUEST = "save_request"        # payload: path=str|Path|None
EVENT_LOAD_REQUEST = "load_request"        # payload: path=str|Path|None


# ============================================================================
# TILE REVEAL PROTOCOL
# ============================================================================
EVENT_TILE_SHOWN = "tile_shown"            # payload: index=int
EVENT_MATCH_CONFIRMED = "match_confirmed"  # payload: first=int, second=int
EVENT_TILES_HIDDEN = "tiles_hidden"        # payload: indices=list[int]
EVENT_TRIES_CHANGED = "tries_changed"      # payload: tries_left=int


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_WON = "game_won"                # payload: None
EVENT_GAME_LOST = "game_lost"              # payload: None
EVENT_GAME_RESET = "game_reset"            # payload: view=GameStateView, reason=str


# ============================================================================
# PERSISTENCE
# ============================================================================
EVENT_GAME_SAVED = "game_saved"                  # payload: path=Path
EVENT_GAME_LOADED = "game_loaded"                # payload: path=Path, view=GameStateView
EVENT_PERSISTENCE_FAILED = "persistence_failed"  # payload: operation=str, path=Path, error=Exception
