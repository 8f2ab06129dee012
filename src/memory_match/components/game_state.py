"""Singleton component holding the per-game bookkeeping."""
from dataclasses import dataclass
from typing import Optional, Tuple

from memory_match.constants import STARTING_TRIES


@dataclass
class GameState:
    """Tries, start flag and the pick awaiting its partner.

    ``generation`` increases every time a successor game replaces the current
    one (win, loss, explicit reset or load); delayed callbacks compare against
    it to detect that their game is gone. ``hiding`` lists a mismatched pair
    whose flip-back has been scheduled but has not fired yet.
    """
    tries_left: int = STARTING_TRIES
    started: bool = False
    pending: Optional[int] = None
    generation: int = 0
    hiding: Tuple[int, ...] = ()
