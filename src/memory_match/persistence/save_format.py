"""Text save format for a single game.

::

    Tries: 10
    Board:
    0.png,3.png
    3.png,0.png
    State:
    T,F,F,T,

Board rows are written top to bottom; the row count gives the side length.
The State line lists one ``T`` (face-up) or ``F`` (face-down) per tile and
ends with a comma, which readers must accept with or without.
"""
from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from memory_match.constants import MIN_COLUMNS, STARTING_TRIES
from memory_match.errors import ParseError, StorageError
from memory_match.utils.game_state import GameStateView

logger = logging.getLogger(__name__)

TRIES_HEADER = "Tries:"
BOARD_HEADER = "Board:"
STATE_HEADER = "State:"
STATE_TOKENS = {"T": True, "F": False}


@dataclass(frozen=True)
class SavedGame:
    """Fully parsed save, ready to be installed on a world."""

    tries_left: int
    columns: int
    images: Tuple[str, ...]
    revealed: Tuple[bool, ...]

    @property
    def started(self) -> bool:
        return any(self.revealed) or self.tries_left < STARTING_TRIES


def encode_game(view: GameStateView) -> str:
    """Render ``view`` in the save grammar.

    A pair that is waiting for its flip-back is written face-down.
    """
    lines = [f"{TRIES_HEADER} {view.tries_left}", BOARD_HEADER]
    images = view.images
    for row in range(view.columns):
        start = row * view.columns
        lines.append(",".join(images[start:start + view.columns]))
    lines.append(STATE_HEADER)
    hiding = set(view.hiding)
    states = "".join(
        ("T" if tile.revealed and index not in hiding else "F") + ","
        for index, tile in enumerate(view.tiles)
    )
    lines.append(states)
    return "\n".join(lines) + "\n"


def _parse_tries(line: str) -> int:
    if not line.startswith(TRIES_HEADER):
        raise ParseError(f"expected '{TRIES_HEADER} <int>', got {line!r}", line=1)
    raw = line[len(TRIES_HEADER):].strip()
    try:
        value = int(raw)
    except ValueError:
        raise ParseError(f"tries must be an integer, got {raw!r}", line=1) from None
    if value < 0:
        raise ParseError(f"tries cannot be negative, got {value}", line=1)
    return value


def decode_game(text: str) -> SavedGame:
    """Parse a save produced by :func:`encode_game` (or the legacy writer)."""
    lines = [line.rstrip("\r") for line in text.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise ParseError("save is empty")

    tries_left = _parse_tries(lines[0].strip())
    if len(lines) < 2 or lines[1].strip() != BOARD_HEADER:
        raise ParseError(f"expected '{BOARD_HEADER}'", line=2)

    rows: List[List[str]] = []
    cursor = 2
    while cursor < len(lines) and lines[cursor].strip() != STATE_HEADER:
        rows.append([cell.strip() for cell in lines[cursor].split(",")])
        cursor += 1
    if cursor >= len(lines):
        raise ParseError(f"missing '{STATE_HEADER}' section")

    size_columns = len(rows)
    if size_columns < MIN_COLUMNS:
        raise ParseError(f"board needs at least {MIN_COLUMNS} rows, got {size_columns}", line=cursor + 1)
    images: List[str] = []
    for offset, cells in enumerate(rows):
        line_no = 3 + offset
        if len(cells) != size_columns:
            raise ParseError(
                f"row has {len(cells)} ids, expected {size_columns}", line=line_no
            )
        if any(not cell for cell in cells):
            raise ParseError("empty image id", line=line_no)
        images.extend(cells)

    state_line_no = cursor + 2
    if state_line_no > len(lines):
        raise ParseError("missing tile states", line=state_line_no)
    tokens = [token.strip() for token in lines[cursor + 1].split(",")]
    if tokens and tokens[-1] == "":
        tokens.pop()
    if len(tokens) != len(images):
        raise ParseError(
            f"expected {len(images)} tile states, got {len(tokens)}", line=state_line_no
        )
    revealed: List[bool] = []
    for token in tokens:
        if token not in STATE_TOKENS:
            raise ParseError(f"unknown tile state {token!r}", line=state_line_no)
        revealed.append(STATE_TOKENS[token])
    if len(lines) > state_line_no:
        raise ParseError("unexpected content after tile states", line=state_line_no + 1)

    return SavedGame(
        tries_left=tries_left,
        columns=size_columns,
        images=tuple(images),
        revealed=tuple(revealed),
    )


def write_save(path: Path | str, text: str) -> Path:
    """Write ``text`` to ``path`` through a temporary file and an atomic rename."""
    target = Path(path)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="ascii",
            newline="\n",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(text)
        os.replace(tmp_name, target)
    except (OSError, UnicodeEncodeError) as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"could not write save {target}: {exc}", path=target) from exc
    return target


def read_save(path: Path | str) -> SavedGame:
    target = Path(path)
    try:
        text = target.read_text(encoding="ascii")
    except UnicodeDecodeError as exc:
        raise ParseError(f"save is not ASCII text: {exc}") from exc
    except OSError as exc:
        raise StorageError(f"could not read save {target}: {exc}", path=target) from exc
    return decode_game(text)
