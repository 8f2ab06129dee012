from memory_match.constants import FOOTER_HEIGHT, HEADER_HEIGHT, TILE_SIZE


def window_size_for(columns: int, tile_size: int = TILE_SIZE) -> tuple[int, int]:
    """Window (width, height) that fits a ``columns`` x ``columns`` board plus header and footer."""
    board = columns * tile_size
    return board, board + HEADER_HEIGHT + FOOTER_HEIGHT


def compute_board_geometry(window_width: int, window_height: int, columns: int):
    """Return (tile_size, start_x, start_y) for a board centred between footer and header.

    ``start_y`` is the bottom edge of the board in arcade's y-up coordinates.
    """
    available_h = window_height - HEADER_HEIGHT - FOOTER_HEIGHT
    tile_size = int(min(window_width / columns, available_h / columns))
    if tile_size < 20:
        tile_size = 20
    total = columns * tile_size
    start_x = (window_width - total) / 2
    start_y = FOOTER_HEIGHT + (available_h - total) / 2
    return tile_size, start_x, start_y


def tile_origin(index: int, columns: int, tile_size: int, start_x: float, start_y: float):
    """Bottom-left corner of tile ``index``; row 0 is drawn at the top."""
    row, col = divmod(index, columns)
    x = start_x + col * tile_size
    y = start_y + (columns - 1 - row) * tile_size
    return x, y


def tile_index_at(x: float, y: float, window_width: int, window_height: int, columns: int):
    """Map a window point to a row-major tile index, or None when outside the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, columns)
    total = columns * tile_size
    if x < start_x or x >= start_x + total:
        return None
    if y < start_y or y >= start_y + total:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = columns - 1 - row_from_bottom
    return row * columns + col
