"""Character-by-character text layout with a fixed monospace advance."""
import math
import unicodedata
from dataclasses import dataclass
from typing import Optional

from constants import FONT_SIZE, GLYPH_ADVANCE_RATIO, LEFT_MARGIN, LINE_PITCH_RATIO, TAB_WIDTH
from palette import Color


@dataclass(frozen=True)
class LayoutMetrics:
    """Font size and margin that fix every glyph position.

    Glyph widths are never measured: the advance is ``font_size * 0.615``, so
    the display font has to be monospaced at this size.
    """
    font_size: int = FONT_SIZE
    left_margin: float = LEFT_MARGIN

    @property
    def advance(self) -> float:
        return self.font_size * GLYPH_ADVANCE_RATIO

    @property
    def line_pitch(self) -> int:
        return math.floor(self.font_size * LINE_PITCH_RATIO)

    def line_y(self, line: int) -> int:
        # Line 0 sits one pitch down so it is not drawn at y=0.
        return self.line_pitch * (line + 1)

    def column_x(self, column: int) -> float:
        return self.left_margin + column * self.advance


@dataclass(frozen=True)
class DrawInstruction:
    char: str
    line: int
    x: float
    color: Color


def is_drawable(char: str) -> bool:
    return not char.isspace() and unicodedata.category(char) != "Cc"


class LayoutCursor:
    """Tracks line and pixel x while text is walked one character at a time."""

    def __init__(self, metrics: LayoutMetrics) -> None:
        self.metrics = metrics
        self.line = 0
        self.column = 0

    @property
    def x(self) -> float:
        return self.metrics.column_x(self.column)

    @property
    def y(self) -> int:
        return self.metrics.line_y(self.line)

    def advance(self, char: str, color: Color) -> Optional[DrawInstruction]:
        """Move past ``char``, returning a draw instruction if it is visible."""
        if char == "\n":
            self.line += 1
            self.column = 0
            return None
        if char == "\t":
            self.column += TAB_WIDTH
            return None
        if char == " ":
            self.column += 1
            return None
        if not is_drawable(char):
            # Other control and whitespace characters take no room.
            return None
        instruction = DrawInstruction(char, self.line, self.x, color)
        self.column += 1
        return instruction
