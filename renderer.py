import pygame
from typing import Dict, Iterable, Tuple

from constants import BACKGROUND_COLOR, TRANSCRIPT_COLOR, TRANSCRIPT_MARGIN
from layout import DrawInstruction, LayoutMetrics
from palette import Color
from typing_session import TypingSession


class Renderer:
    """Draws a typing session onto a pygame surface.

    Layout positions are baselines; pygame blits from the top-left corner, so
    every blit is lifted by the font ascent.
    """

    def __init__(self, font: pygame.font.Font, metrics: LayoutMetrics) -> None:
        self.font = font
        self.metrics = metrics
        self.glyph_cache: Dict[Tuple[str, Color], pygame.Surface] = {}

    def glyph(self, char: str, color: Color) -> pygame.Surface:
        key = (char, color)
        surface = self.glyph_cache.get(key)
        if surface is None:
            surface = self.font.render(char, True, color)
            self.glyph_cache[key] = surface
        return surface

    def draw(self, surface: pygame.Surface, session: TypingSession) -> None:
        """Render the practice text and the transcript over a cleared background."""
        surface.fill(BACKGROUND_COLOR)
        self.draw_instructions(surface, session.instructions)
        self.draw_transcript(surface, session.transcript_lines())

    def draw_instructions(self, surface: pygame.Surface, instructions: Iterable[DrawInstruction]) -> None:
        ascent = self.font.get_ascent()
        for instruction in instructions:
            y = self.metrics.line_y(instruction.line) - ascent
            surface.blit(self.glyph(instruction.char, instruction.color), (instruction.x, y))

    def draw_transcript(self, surface: pygame.Surface, lines: Iterable[str]) -> None:
        """Draw the typed lines in one color, without per-character layout."""
        ascent = self.font.get_ascent()
        for i, line in enumerate(lines):
            if not line:
                continue
            text_surface = self.font.render(line, True, TRANSCRIPT_COLOR)
            surface.blit(text_surface, (TRANSCRIPT_MARGIN, self.metrics.line_y(i) - ascent))
