"""A single-line text box for entering the player's name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import pygame
from pygame.math import Vector2

from .config import TEXT_SPACING, WHITE
from .sprites import PointerState, Sprite, read_pointer
from .text import Text, measure_text

TEXT_LENGTH = 10
_FIRST_CHAR = 32
_LAST_CHAR = 125


@dataclass(frozen=True)
class KeyboardState:
    """Keyboard input for one frame."""

    typed: str = ""
    backspace: bool = False


class _KeyboardReader:
    """Collects typed text and detects a fresh press of backspace."""

    def __init__(self) -> None:
        self._backspace_down = False

    def __call__(self) -> KeyboardState:
        try:
            typed = "".join(event.text for event in pygame.event.get(pygame.TEXTINPUT))
            down = bool(pygame.key.get_pressed()[pygame.K_BACKSPACE])
        except pygame.error:
            return KeyboardState()
        pressed = down and not self._backspace_down
        self._backspace_down = down
        return KeyboardState(typed, pressed)


def _set_cursor(cursor: int) -> None:
    try:
        pygame.mouse.set_cursor(cursor)
    except pygame.error:
        pass


class InputField(Sprite):
    """Takes keyboard input while the mouse is over it; holds up to ten characters."""

    def __init__(
        self,
        position,
        size_of_texture,
        frame_origin,
        texture_id: str,
        font_id: str,
        actual_size=None,
        pointer: Optional[Callable[[], PointerState]] = None,
        keyboard: Optional[Callable[[], KeyboardState]] = None,
    ) -> None:
        super().__init__(texture_id, 1, size_of_texture, frame_origin)
        self.font_id = font_id
        self.actual_size = Vector2(size_of_texture if actual_size is None else actual_size)
        self.offset = self.actual_size / 2
        self.text_size = self.actual_size.y - 30
        self.text_offset = Vector2(0, 0)
        self.focused = False
        self.pointer = pointer or read_pointer
        self.keyboard = keyboard or _KeyboardReader()
        self._text = ""
        self.set_position(position)

    @property
    def text(self) -> str:
        return self._text

    def _contains(self, point) -> bool:
        left, top = self.position - self.offset
        x, y = point
        return left <= x < left + self.actual_size.x and top <= y < top + self.actual_size.y

    def _refresh_offset(self) -> None:
        self.text_offset = measure_text(self.font_id, self._text, self.text_size, TEXT_SPACING) / 2

    def type_text(self, text: str) -> None:
        """Append printable characters while there is room; others are dropped."""
        for char in text:
            if _FIRST_CHAR <= ord(char) <= _LAST_CHAR and len(self._text) < TEXT_LENGTH:
                self._text += char
        if text:
            self._refresh_offset()

    def backspace(self) -> None:
        self._text = self._text[:-1]
        self._refresh_offset()

    def clear(self) -> None:
        self._text = ""

    def update(self, delta_time: float) -> None:
        self.focused = self._contains(self.pointer().position)
        self.frame = 1 if self.focused else 0
        if not self.focused:
            return
        _set_cursor(pygame.SYSTEM_CURSOR_IBEAM)
        keys = self.keyboard()
        if keys.typed:
            self.type_text(keys.typed)
        if keys.backspace:
            self.backspace()

    def draw(self, surface: pygame.Surface, size=None) -> None:
        super().draw(surface, self.actual_size if size is None else size)
        Text(
            self._text, self.text_offset, self.position, self.font_id,
            self.text_size, TEXT_SPACING, WHITE,
        ).draw(surface)
        if not self.focused:
            return
        if self._text:
            measured = measure_text(self.font_id, self._text, self.text_size, TEXT_SPACING)
            at = (self.position.x + measured.x / 2, self.position.y - measured.y / 2)
        else:
            at = (self.position.x, self.position.y - self.text_size / 2)
        Text("_", (0, 0), at, self.font_id, self.text_size, TEXT_SPACING, WHITE).draw(surface)