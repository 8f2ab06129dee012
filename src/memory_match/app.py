"""Application entry point for the memory match game."""
import logging
from pathlib import Path

import arcade

from memory_match.constants import DEFAULT_COLUMNS, WINDOW_TITLE
from memory_match.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TICK
from memory_match.systems.input import InputSystem
from memory_match.systems.match_controller import MatchController
from memory_match.systems.persistence_system import PersistenceSystem
from memory_match.systems.presentation_system import PresentationSystem
from memory_match.systems.render import RenderSystem
from memory_match.systems.scheduler_system import SchedulerSystem
from memory_match.ui.layout import window_size_for
from memory_match.utils.game_state import snapshot
from memory_match.world import create_world


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class MemoryMatchWindow(arcade.Window):
    def __init__(self, columns: int = DEFAULT_COLUMNS, save_path: Path | None = None):
        width, height = window_size_for(columns)
        super().__init__(width, height, WINDOW_TITLE, resizable=False)
        self.event_bus = EventBus()
        self.world = create_world(columns=columns)

        # Core systems
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)
        self.match_controller = MatchController(
            self.world,
            self.event_bus,
            scheduler=self.scheduler_system.schedule,
            cancel=self.scheduler_system.cancel,
        )
        self.persistence_system = PersistenceSystem(self.world, self.event_bus, save_path=save_path)

        # Presentation systems
        self.presentation_system = PresentationSystem(self.world, self.event_bus, snapshot(self.world))
        self.input_system = InputSystem(self.world, self.event_bus, self)
        self.render_system = RenderSystem(self.world, self)

        arcade.set_background_color(arcade.color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.input_system.handle_key_press(symbol, modifiers)


def main():
    configure_logging()
    MemoryMatchWindow()
    arcade.run()


if __name__ == "__main__":
    main()
