from dataclasses import dataclass

@dataclass(slots=True)
class Tile:
    """One cell of the board.

    ``index`` is the row-major position (row 0 is the top row). ``image`` is an
    opaque catalog identifier; the presentation layer decides how to draw it.
    """
    index: int
    image: str
    revealed: bool = False
