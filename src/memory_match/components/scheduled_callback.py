from dataclasses import dataclass, field
from typing import Callable

@dataclass(slots=True)
class ScheduledCallback:
    """One-shot callback fired by the SchedulerSystem once ``remaining`` seconds have elapsed."""
    remaining: float
    callback: Callable[[], None] = field(repr=False)
    label: str = ""
