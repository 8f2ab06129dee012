from esper import World

from memory_match.components.presentation_state import PresentationState
from memory_match.events.bus import (
    EventBus,
    EVENT_LOAD_REQUEST,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_SAVE_REQUEST,
    EVENT_TILE_TAP,
)
from memory_match.ui.layout import tile_index_at

# arcade.key values, kept numeric so the input path never imports arcade.
KEY_SAVE = ord("s")
KEY_LOAD = ord("l")
KEY_NEW_GAME = ord("n")
MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Translates window input into game commands on the event bus."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button', MOUSE_BUTTON_LEFT)
        if x is None or y is None or button != MOUSE_BUTTON_LEFT:
            return
        view_state = self._presentation()
        if view_state is None or view_state.locked:
            return
        index = tile_index_at(x, y, self.window.width, self.window.height, view_state.columns)
        if index is not None:
            self.event_bus.emit(EVENT_TILE_TAP, index=index)

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        if symbol == KEY_SAVE:
            self.event_bus.emit(EVENT_SAVE_REQUEST, path=None)
        elif symbol == KEY_LOAD:
            self.event_bus.emit(EVENT_LOAD_REQUEST, path=None)
        elif symbol == KEY_NEW_GAME:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST, columns=None)

    def _presentation(self) -> PresentationState | None:
        for _, state in self.world.get_component(PresentationState):
            return state
        return None
