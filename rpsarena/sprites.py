"""Sprites: static, moving and rotating images, and clickable buttons."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import pygame
from pygame.math import Vector2

from .config import (
    BUTTON_MAX_STATES,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TEXT_SIZE,
    TEXT_SPACING,
    WHITE,
    ScreenSide,
)
from .resources import resource_manager
from .text import Text


@dataclass(frozen=True)
class PointerState:
    """Left mouse button state for one frame."""

    position: tuple[float, float]
    down: bool = False
    released: bool = False


def read_pointer() -> PointerState:
    """Read the mouse.

    Release events are peeked, not removed, so every reader in a frame sees
    the same state; the main loop drains the queue after updating.
    """
    try:
        position = pygame.mouse.get_pos()
        down = bool(pygame.mouse.get_pressed()[0])
        released = bool(pygame.event.peek(pygame.MOUSEBUTTONUP))
    except pygame.error:
        return PointerState((-1.0, -1.0))
    return PointerState(position, down, released)


def _screen_size() -> tuple[int, int]:
    try:
        surface = pygame.display.get_surface()
    except pygame.error:
        surface = None
    if surface is None:
        return SCREEN_WIDTH, SCREEN_HEIGHT
    return surface.get_size()


def _set_cursor(cursor: int) -> None:
    try:
        pygame.mouse.set_cursor(cursor)
    except pygame.error:
        pass


class Sprite:
    """One frame of a sprite sheet, centred on ``position``."""

    def __init__(self, texture_id, max_frames, frame_size, frame_origin=(0, 0)):
        self.texture_id = texture_id
        self.max_frames = max_frames
        self.frame_size = Vector2(frame_size)
        self.frame_origin = Vector2(frame_origin)
        self.position = Vector2(0, 0)
        self.frame = 0
        self.offset = self.frame_size / 2
        self.rotation = 0.0

    def draw(self, surface: pygame.Surface, size=None) -> None:
        """Draw the current frame, scaled to ``size`` if given."""
        texture = resource_manager().get_texture(self.texture_id)
        source = pygame.Rect(
            round(self.frame_origin.x + self.frame * self.frame_size.x),
            round(self.frame_origin.y),
            round(self.frame_size.x),
            round(self.frame_size.y),
        ).clip(texture.get_rect())
        if source.width == 0 or source.height == 0:
            return

        dest_size = Vector2(size) if size is not None else Vector2(self.frame_size)
        scaled = (max(1, round(dest_size.x)), max(1, round(dest_size.y)))
        image = pygame.transform.scale(texture.subsurface(source), scaled)

        top_left = self.position - self.offset
        if self.rotation:
            centre = top_left + dest_size / 2
            centre = self.position + (centre - self.position).rotate(self.rotation)
            image = pygame.transform.rotate(image, -self.rotation)
            rect = image.get_rect(center=(round(centre.x), round(centre.y)))
        else:
            rect = image.get_rect(topleft=(round(top_left.x), round(top_left.y)))
        surface.blit(image, rect)

    def update(self, delta_time: float) -> None:
        """A plain sprite does not change over time."""

    def set_frame(self, frame: int) -> None:
        """Select a frame; values outside 0..max_frames are ignored."""
        if 0 <= frame <= self.max_frames:
            self.frame = frame

    def set_position(self, position) -> None:
        self.position = Vector2(position)

    def is_outside_of_window(self) -> bool:
        width, height = _screen_size()
        x, y = self.position
        return x > width or x < 0 or y > height or y < 0

    def is_outside_of_window_side(self, side: ScreenSide) -> bool:
        width, height = _screen_size()
        x, y = self.position
        return {
            ScreenSide.LEFT: x < 0,
            ScreenSide.RIGHT: x > width,
            ScreenSide.TOP: y < 0,
            ScreenSide.BOTTOM: y > height,
        }.get(side, False)


class MovingSprite(Sprite):
    """A sprite moving at a constant velocity."""

    def __init__(self, texture_id, max_frames, frame_size, frame_origin, velocity):
        super().__init__(texture_id, max_frames, frame_size, frame_origin)
        self.velocity = Vector2(velocity)

    def update(self, delta_time: float) -> None:
        self.position += self.velocity * delta_time


class RotatingSprite(MovingSprite):
    """A moving sprite that also spins at a constant rate (degrees per second)."""

    def __init__(self, texture_id, max_frames, frame_size, frame_origin, velocity, rotation_speed):
        super().__init__(texture_id, max_frames, frame_size, frame_origin, velocity)
        self.rotation_speed = rotation_speed

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        self.rotation += self.rotation_speed * delta_time


class Button(Sprite):
    """A sprite with idle, hovered and pressed frames that calls ``on_click``."""

    def __init__(
        self,
        position,
        size_of_texture,
        frame_origin,
        texture_id,
        on_click: Callable[[], None],
        pointer: Optional[Callable[[], PointerState]] = None,
    ):
        super().__init__(texture_id, BUTTON_MAX_STATES, size_of_texture, frame_origin)
        self.on_click = on_click
        self.pointer = pointer or read_pointer
        self.disabled = False
        self.clicked = False
        self.set_position(position)

    def _contains(self, point) -> bool:
        left, top = self.position - self.offset
        x, y = point
        return left <= x < left + self.frame_size.x and top <= y < top + self.frame_size.y

    def update(self, delta_time: float) -> None:
        self.clicked = False
        super().update(delta_time)
        state = self.pointer()
        if not self._contains(state.position):
            self.frame = 0
            return
        if self.disabled:
            _set_cursor(pygame.SYSTEM_CURSOR_NO)
            self.frame = 0
            return
        _set_cursor(pygame.SYSTEM_CURSOR_HAND)
        self.frame = 1
        if state.down:
            self.frame = 2
        if state.released:
            self.clicked = True
            self.on_click()

    def clicked_update(self, delta_time: float) -> bool:
        """Update, then report whether the mouse button was released this frame."""
        self.update(delta_time)
        return self.pointer().released

    def was_clicked(self) -> bool:
        return self.clicked

    def disable(self) -> None:
        self.disabled = True

    def enable(self) -> None:
        self.disabled = False


class TextButton(Button):
    """A button with a label centred on it."""

    def __init__(
        self,
        position,
        size_of_texture,
        frame_origin,
        text,
        texture_id,
        font_id,
        on_click: Callable[[], None],
        pointer: Optional[Callable[[], PointerState]] = None,
    ):
        super().__init__(position, size_of_texture, frame_origin, texture_id, on_click, pointer)
        self.label = Text(text, (0, 0), (0, 0), font_id, TEXT_SIZE, TEXT_SPACING, WHITE)
        self.label.center_offset()
        self.label.set_position(self.position)

    def draw(self, surface: pygame.Surface, size=None) -> None:
        super().draw(surface, size)
        self.label.draw(surface)

    def update(self, delta_time: float) -> None:
        super().update(delta_time)