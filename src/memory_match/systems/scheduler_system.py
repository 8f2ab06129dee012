from __future__ import annotations

import logging
from typing import Any, Callable

from esper import World

from memory_match.components.scheduled_callback import ScheduledCallback
from memory_match.events.bus import EVENT_TICK, EventBus

logger = logging.getLogger(__name__)


class SchedulerSystem:
    """Fires one-shot callbacks after a delay measured in tick time.

    Callbacks run on the same thread that emits ``EVENT_TICK``, so they are
    serialized with tap handling.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def schedule(self, delay_ms: float, callback: Callable[[], None], *, label: str = "") -> int:
        """Run ``callback`` once ``delay_ms`` milliseconds of ticks have elapsed; returns a handle."""
        remaining = max(0.0, float(delay_ms) / 1000.0)
        return self.world.create_entity(ScheduledCallback(remaining=remaining, callback=callback, label=label))

    def cancel(self, handle: int) -> bool:
        if not self.world.entity_exists(handle):
            return False
        if not self.world.has_component(handle, ScheduledCallback):
            return False
        self.world.delete_entity(handle, immediate=True)
        return True

    def on_tick(self, sender: Any, **payload: Any) -> None:
        dt = payload.get("dt", 1 / 60)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        due: list[tuple[int, ScheduledCallback]] = []
        for entity, job in sorted(self.world.get_component(ScheduledCallback), key=lambda item: item[0]):
            job.remaining -= dt
            if job.remaining <= 0.0:
                due.append((entity, job))
        for entity, job in due:
            # A callback fired earlier in this tick may have cancelled this one.
            if not self.world.entity_exists(entity):
                continue
            self.world.delete_entity(entity, immediate=True)
            logger.debug("Firing scheduled callback %s", job.label or entity)
            job.callback()
