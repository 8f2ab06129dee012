from __future__ import annotations

import zlib

from esper import World

from memory_match.components.presentation_state import PresentationState
from memory_match.constants import FOOTER_HEIGHT, HEADER_HEIGHT, TILE_PADDING
from memory_match.ui.layout import compute_board_geometry, tile_origin

HEADER_COLOR = (0x89, 0x46, 0xA6)
TILE_BACK_COLOR = (70, 70, 90)
HIGHLIGHT_COLOR = (250, 220, 90)
HINT_TEXT = "S: save   L: load   N: new game"


def face_color(image: str) -> tuple[int, int, int]:
    """Stable pastel color per image id; stands in for the decoded picture."""
    digest = zlib.crc32(image.encode("utf-8"))
    return (
        110 + (digest & 0x7F),
        110 + ((digest >> 8) & 0x7F),
        110 + ((digest >> 16) & 0x7F),
    )


class RenderSystem:
    """Draws the board, tries header and notices from PresentationState."""

    def __init__(self, world: World, window):
        self.world = world
        self.window = window

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        state = self._presentation()
        if state is None:
            return
        width, height = self.window.width, self.window.height
        tile_size, start_x, start_y = compute_board_geometry(width, height, state.columns)

        arcade.draw_lbwh_rectangle_filled(0, height - HEADER_HEIGHT, width, HEADER_HEIGHT, HEADER_COLOR)
        arcade.draw_text(
            state.tries_label,
            width / 2,
            height - HEADER_HEIGHT / 2,
            arcade.color.WHITE,
            24,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )

        inner = tile_size - 2 * TILE_PADDING
        for index, image in enumerate(state.images):
            x, y = tile_origin(index, state.columns, tile_size, start_x, start_y)
            left = x + TILE_PADDING
            bottom = y + TILE_PADDING
            face_up = index in state.face_up
            # A locked board after a loss is drawn as disabled: faces shown, dimmed.
            if face_up or state.locked:
                color = face_color(image)
                if state.locked:
                    color = tuple(c // 2 for c in color)
                arcade.draw_lbwh_rectangle_filled(left, bottom, inner, inner, color)
                arcade.draw_text(
                    image.rsplit(".", 1)[0],
                    left + inner / 2,
                    bottom + inner / 2,
                    arcade.color.BLACK,
                    20,
                    anchor_x="center",
                    anchor_y="center",
                )
            else:
                arcade.draw_lbwh_rectangle_filled(left, bottom, inner, inner, TILE_BACK_COLOR)
            if index in state.highlight:
                arcade.draw_lbwh_rectangle_outline(left, bottom, inner, inner, HIGHLIGHT_COLOR, border_width=3)

        footer_text = state.notice or HINT_TEXT
        arcade.draw_text(
            footer_text,
            width / 2,
            FOOTER_HEIGHT / 2,
            arcade.color.WHITE,
            14,
            anchor_x="center",
            anchor_y="center",
        )

    def _presentation(self) -> PresentationState | None:
        for _, state in self.world.get_component(PresentationState):
            return state
        return None
