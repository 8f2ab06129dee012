from dataclasses import dataclass, field
from typing import Optional, Set, Tuple

from memory_match.constants import DEFAULT_COLUMNS, STARTING_TRIES


@dataclass
class PresentationState:
    """View-side mirror of the game, rebuilt only from observer callbacks.

    Nothing in the game core reads this component. ``lockout_remaining`` is the
    cosmetic disable of a fresh board after a loss; ``highlight`` holds the most
    recently confirmed pair.
    """
    columns: int = DEFAULT_COLUMNS
    images: Tuple[str, ...] = ()
    face_up: Set[int] = field(default_factory=set)
    tries_left: int = STARTING_TRIES
    notice: Optional[str] = None
    notice_remaining: float = 0.0
    lockout_remaining: float = 0.0
    highlight: Tuple[int, ...] = ()

    @property
    def locked(self) -> bool:
        return self.lockout_remaining > 0.0

    @property
    def tries_label(self) -> str:
        return f"Tries left : {self.tries_left}"
