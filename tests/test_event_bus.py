from memory_match.events.bus import EventBus, EVENT_TILE_SHOWN
from memory_match.events.observer import GameObserver, attach_observer
from memory_match.utils.game_state import GameStateView, TileView


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_noop():
    bus = EventBus()
    bus.emit(EVENT_TILE_SHOWN, index=3)


class _Recorder(GameObserver):
    def __init__(self):
        self.calls = []

    def on_reset(self, view):
        self.calls.append(("reset", view.generation))

    def on_tile_shown(self, index):
        self.calls.append(("shown", index))

    def on_tiles_hidden(self, indices):
        self.calls.append(("hidden", tuple(indices)))

    def on_won(self):
        self.calls.append(("won",))


def test_attach_observer_routes_events_to_methods():
    bus = EventBus()
    recorder = _Recorder()
    attach_observer(bus, recorder)
    view = GameStateView(
        columns=2,
        tries_left=10,
        started=False,
        generation=7,
        tiles=tuple(TileView(image, False) for image in "AABB"),
    )

    bus.emit("tile_shown", index=1)
    bus.emit("tiles_hidden", indices=[0, 1])
    bus.emit("game_won")
    bus.emit("game_reset", view=view, reason="won")
    # Callbacks the observer does not override fall back to the no-op base.
    bus.emit("tries_changed", tries_left=4)

    assert recorder.calls == [("shown", 1), ("hidden", (0, 1)), ("won",), ("reset", 7)]
