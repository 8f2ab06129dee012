import pytest

from memory_match.errors import ParseError, StorageError
from memory_match.persistence.save_format import (
    SavedGame,
    decode_game,
    encode_game,
    read_save,
    write_save,
)
from memory_match.utils.game_state import GameStateView, TileView


def _view(images, revealed, tries_left=10, hiding=()):
    columns = int(len(images) ** 0.5)
    return GameStateView(
        columns=columns,
        tries_left=tries_left,
        started=any(revealed),
        generation=1,
        tiles=tuple(TileView(image, flag) for image, flag in zip(images, revealed)),
        hiding=hiding,
    )


def test_encode_matches_save_grammar():
    view = _view(["0.png", "1.png", "1.png", "0.png"], [True, False, False, True], tries_left=7)
    assert encode_game(view) == (
        "Tries: 7\n"
        "Board:\n"
        "0.png,1.png\n"
        "1.png,0.png\n"
        "State:\n"
        "T,F,F,T,\n"
    )


def test_encode_writes_pending_flip_back_face_down():
    view = _view(["A", "B", "A", "B"], [True, True, False, False], tries_left=9, hiding=(0, 1))
    assert encode_game(view).endswith("State:\nF,F,F,F,\n")


def test_decode_reads_encoded_text():
    text = "Tries: 3\nBoard:\nA,B,C\nC,B,A\nD,D,X\nState:\nF,T,F,F,T,F,T,T,F,\n"
    saved = decode_game(text)
    assert saved == SavedGame(
        tries_left=3,
        columns=3,
        images=("A", "B", "C", "C", "B", "A", "D", "D", "X"),
        revealed=(False, True, False, False, True, False, True, True, False),
    )
    assert saved.started


@pytest.mark.parametrize(
    "state_line, trailer",
    [
        ("F,F,F,F,", "\n"),
        ("F,F,F,F", "\n"),
        ("F,F,F,F,", ""),
        ("F,F,F,F,", "\n\n"),
        ("F,F,F,F,", "\r\n"),
    ],
)
def test_decode_tolerates_trailing_comma_and_newline_variance(state_line, trailer):
    text = f"Tries: 10\nBoard:\nA,A\nB,B\nState:\n{state_line}{trailer}"
    saved = decode_game(text)
    assert saved.revealed == (False, False, False, False)
    assert not saved.started


def test_started_recomputed_from_tries():
    saved = decode_game("Tries: 9\nBoard:\nA,A\nB,B\nState:\nF,F,F,F,\n")
    assert saved.started


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Tries 10\nBoard:\nA,A\nB,B\nState:\nF,F,F,F,\n",
        "Tries: ten\nBoard:\nA,A\nB,B\nState:\nF,F,F,F,\n",
        "Tries: -1\nBoard:\nA,A\nB,B\nState:\nF,F,F,F,\n",
        "Tries: 10\nBoard\nA,A\nB,B\nState:\nF,F,F,F,\n",
        "Tries: 10\nBoard:\nA,A\nB,B\n",
        "Tries: 10\nBoard:\nA,A,A\nB,B,B\nState:\nF,F,F,F,F,F,\n",
        "Tries: 10\nBoard:\nA\nState:\nF,\n",
        "Tries: 10\nBoard:\nA,A\nB,B\nState:\nF,F,F,\n",
        "Tries: 10\nBoard:\nA,A\nB,B\nState:\nF,F,X,F,\n",
        "Tries: 10\nBoard:\nA,A\nB,B\nState:\n",
        "Tries: 10\nBoard:\nA,\nB,B\nState:\nF,F,F,F,\n",
        "Tries: 10\nBoard:\nA,A\nB,B\nState:\nF,F,F,F,\nextra\n",
    ],
)
def test_decode_rejects_malformed_saves(text):
    with pytest.raises(ParseError):
        decode_game(text)


def test_parse_error_reports_line():
    with pytest.raises(ParseError) as excinfo:
        decode_game("Tries: 10\nBoard:\nA,A\nB,B\nState:\nF,F,Q,F,\n")
    assert excinfo.value.line == 6
    assert "line 6" in str(excinfo.value)


def test_write_and_read_save_round_trip(tmp_path):
    view = _view(["A", "B", "B", "A"], [False, True, True, False], tries_left=4)
    path = write_save(tmp_path / "game_save.txt", encode_game(view))

    saved = read_save(path)

    assert saved.tries_left == 4
    assert saved.columns == 2
    assert saved.images == view.images
    assert saved.revealed == view.revealed
    assert [p.name for p in tmp_path.iterdir()] == ["game_save.txt"]


def test_write_save_replaces_existing_file(tmp_path):
    target = tmp_path / "game_save.txt"
    target.write_text("old", encoding="ascii")
    write_save(target, "new\n")
    assert target.read_text(encoding="ascii") == "new\n"


def test_write_save_into_missing_directory_raises_storage_error(tmp_path):
    with pytest.raises(StorageError) as excinfo:
        write_save(tmp_path / "missing" / "game_save.txt", "Tries: 10\n")
    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.path == tmp_path / "missing" / "game_save.txt"


def test_read_missing_save_raises_storage_error(tmp_path):
    with pytest.raises(StorageError):
        read_save(tmp_path / "nope.txt")
