import random

from memory_match.components.presentation_state import PresentationState
from memory_match.events.bus import (
    EventBus,
    EVENT_LOAD_REQUEST,
    EVENT_SAVE_REQUEST,
    EVENT_TICK,
)
from memory_match.systems.match_controller import MatchController
from memory_match.systems.persistence_system import PersistenceSystem
from memory_match.systems.presentation_system import (
    LOAD_FAILED_MESSAGE,
    LOST_MESSAGE,
    SAVED_MESSAGE,
    WON_MESSAGE,
    PresentationSystem,
)
from memory_match.utils.game_state import snapshot
from memory_match.world import create_world


def _setup(images, tries_left=10, tmp_path=None):
    bus = EventBus()
    world = create_world(columns=2, images=images, tries_left=tries_left, rng=random.Random(2))
    jobs = []
    controller = MatchController(world, bus, scheduler=lambda delay, cb: jobs.append(cb))
    presentation = PresentationSystem(world, bus, snapshot(world))
    if tmp_path is not None:
        PersistenceSystem(world, bus, save_path=tmp_path / "game_save.txt")
    return bus, world, controller, presentation, jobs


def test_initial_view_is_mirrored():
    bus, world, controller, presentation, jobs = _setup(["A", "B", "A", "B"])
    state = presentation.state
    assert state.columns == 2
    assert state.images == ("A", "B", "A", "B")
    assert state.face_up == set()
    assert state.tries_label == "Tries left : 10"
    assert len(world.get_component(PresentationState)) == 1


def test_mismatch_updates_tries_and_faces():
    bus, world, controller, presentation, jobs = _setup(["A", "B", "A", "B"])
    controller.tap(0)
    controller.tap(1)
    assert presentation.state.face_up == {0, 1}
    assert presentation.state.tries_label == "Tries left : 9"

    jobs.pop()()

    assert presentation.state.face_up == set()


def test_match_highlights_pair():
    bus, world, controller, presentation, jobs = _setup(["A", "B", "A", "B"])
    controller.tap(0)
    controller.tap(2)
    assert presentation.state.highlight == (0, 2)
    assert presentation.state.face_up == {0, 2}


def test_win_shows_notice_and_rebinds_board():
    bus, world, controller, presentation, jobs = _setup(["A", "A", "B", "B"])
    for index in range(4):
        controller.tap(index)

    state = presentation.state
    assert state.notice == WON_MESSAGE
    assert state.face_up == set()
    assert state.images == snapshot(world).images
    assert not state.locked


def test_loss_locks_successor_board_briefly():
    bus, world, controller, presentation, jobs = _setup(["A", "B", "A", "B"], tries_left=1)
    controller.tap(0)
    controller.tap(1)

    state = presentation.state
    assert state.notice == LOST_MESSAGE
    assert state.locked
    assert state.tries_label == "Tries left : 10"

    bus.emit(EVENT_TICK, dt=0.5)
    assert state.locked
    bus.emit(EVENT_TICK, dt=0.6)
    assert not state.locked


def test_notice_expires():
    bus, world, controller, presentation, jobs = _setup(["A", "A", "B", "B"])
    presentation.notify("hello")
    bus.emit(EVENT_TICK, dt=1.0)
    assert presentation.state.notice == "hello"
    bus.emit(EVENT_TICK, dt=1.5)
    assert presentation.state.notice is None


def test_persistence_notices(tmp_path):
    bus, world, controller, presentation, jobs = _setup(["A", "A", "B", "B"], tmp_path=tmp_path)

    bus.emit(EVENT_SAVE_REQUEST, path=None)
    assert presentation.state.notice == SAVED_MESSAGE

    bus.emit(EVENT_LOAD_REQUEST, path=tmp_path / "absent.txt")
    assert presentation.state.notice == LOAD_FAILED_MESSAGE
