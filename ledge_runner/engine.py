"""
Rendering Engine
=================
Double-buffered terminal renderer with a side-scrolling camera.

World space is measured in game units with y growing downward. The
camera maps a viewport of world units onto the terminal grid at a fixed
scale and follows the player horizontally.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from blessed import Terminal

from .geometry import Rect


# ANSI 256 color constants
NEON_CYAN = 51
NEON_BLUE = 63
NEON_YELLOW = 226
NEON_GREEN = 46
NEON_RED = 196

GRAY_MED = 245
GRAY_DARK = 238

WHITE = 255

# World units per terminal cell
UNITS_PER_COL = 10.0
UNITS_PER_ROW = 25.0

HUD_ROWS = 2


def camera_offset(player_x: float, viewport_width: float) -> float:
    """Horizontal camera scroll: keep the player centered, never left of 0."""
    return max(0.0, player_x - viewport_width / 2)


def world_rect_to_cells(rect: Rect, cam_x: float,
                        units_per_col: float = UNITS_PER_COL,
                        units_per_row: float = UNITS_PER_ROW) -> Tuple[int, int, int, int]:
    """
    Map a world rect to (col, row, cols, rows) on screen.

    Every non-empty rect covers at least one cell so thin bullets and
    platforms stay visible.
    """
    col = int((rect.x - cam_x) // units_per_col)
    row = int(rect.y // units_per_row)
    end_col = int((rect.right - cam_x) // units_per_col)
    end_row = int(rect.bottom // units_per_row)
    cols = max(1, end_col - col)
    rows = max(1, end_row - row)
    return col, row, cols, rows


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: int = 7
    bg_color: int = -1  # -1 = transparent/default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg_color = 7
        self.bg_color = -1


class DoubleBuffer:
    """
    Double-buffered terminal renderer.

    Writes to a back buffer, then swaps to front buffer,
    only updating cells that changed. No screen clears needed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal  # Cache reset sequence

    def _init_buffers(self):
        self.front = [[Cell() for _ in range(self.width)] for _ in range(self.height)]
        self.back = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bg_color: int = -1):
        """Put a character in the back buffer, clipped to the screen."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bg_color: int = -1):
        """Put a string in the back buffer."""
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self) -> str:
        """Swap buffers and generate output for changed cells only."""
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                front_cell = self.front[y][x]

                if not back_cell.matches(front_cell):
                    output_parts.append(self.term.move_xy(x, y))
                    # Reset colors to prevent bleed
                    output_parts.append(normal)
                    if back_cell.bg_color >= 0:
                        output_parts.append(self.term.on_color(back_cell.bg_color))
                    output_parts.append(self.term.color(back_cell.fg_color))
                    output_parts.append(back_cell.char if back_cell.char else ' ')

        self.front, self.back = self.back, self.front

        return ''.join(output_parts)


@dataclass
class GameRenderer:
    """
    High-level renderer that draws world rects through the camera.

    cam_x is in world units and is set once per frame by follow().
    The bottom HUD_ROWS rows are reserved for UI and never receive
    world geometry.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)
    cam_x: float = 0.0
    units_per_col: float = UNITS_PER_COL
    units_per_row: float = UNITS_PER_ROW

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def game_height(self) -> int:
        """Height of the playable area (excluding UI rows)."""
        return self.buffer.height - HUD_ROWS

    @property
    def viewport_width(self) -> float:
        """Visible world width in game units."""
        return self.width * self.units_per_col

    def follow(self, player_x: float):
        self.cam_x = camera_offset(player_x, self.viewport_width)

    def begin_frame(self):
        """Begin rendering a new frame."""
        self.buffer.clear_back()

    def end_frame(self) -> str:
        """Finalize frame and return the terminal output for changed cells."""
        return self.buffer.present()

    def fill_world_rect(self, rect: Rect, char: str, color: int):
        """Fill the cells covered by a world rect, clipped to the game area."""
        col, row, cols, rows = world_rect_to_cells(
            rect, self.cam_x, self.units_per_col, self.units_per_row
        )
        for y in range(row, min(row + rows, self.game_height)):
            for x in range(col, col + cols):
                self.buffer.put(x, y, char, color)

    def put_centered(self, y: int, text: str, color: int = WHITE):
        x = max(0, (self.width - len(text)) // 2)
        self.buffer.put_string(x, y, text, color)
