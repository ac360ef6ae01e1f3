"""Text labels drawn with a font from the resource manager."""

from __future__ import annotations

import pygame
from pygame.math import Vector2

from .config import WHITE
from .resources import resource_manager


def measure_text(font_id: str, text: str, size: float, spacing: float) -> Vector2:
    """Return the width and height ``text`` takes up at ``size`` with ``spacing``."""
    if not text:
        return Vector2(0, 0)
    font = resource_manager().get_font(font_id, size)
    width = sum(font.size(char)[0] for char in text) + spacing * (len(text) - 1)
    return Vector2(width, size)


class Text:
    """A line of text placed at ``position`` minus ``offset``."""

    def __init__(self, text, offset, position, font_id, size, spacing, color=WHITE):
        self.text = text
        self.offset = Vector2(offset)
        self.position = Vector2(position)
        self.font_id = font_id
        self.size = size
        self.spacing = spacing
        self.color = color
        self.measurement = Vector2(0, 0)

    def draw(self, surface: pygame.Surface) -> None:
        font = resource_manager().get_font(self.font_id, self.size)
        x, y = self.position - self.offset
        for char in self.text:
            glyph = font.render(char, True, self.color)
            surface.blit(glyph, (round(x), round(y)))
            x += font.size(char)[0] + self.spacing

    def set_position(self, position) -> None:
        self.position = Vector2(position)

    def measure(self) -> Vector2:
        """Measure the text, remember the result and return it."""
        self.measurement = measure_text(self.font_id, self.text, self.size, self.spacing)
        return Vector2(self.measurement)

    def center_offset(self) -> None:
        """Make ``position`` the centre of the text."""
        self.measure()
        self.offset = self.measurement / 2

    def set_text(self, text: str) -> None:
        """Replace the text and centre it on ``position``."""
        self.text = text
        self.center_offset()