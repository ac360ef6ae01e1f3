"""Animated background of tumbling rocks, papers and scissors."""

from __future__ import annotations

import functools

import pygame

from .config import SCREEN_HEIGHT, SCREEN_WIDTH, ScreenSide, random_between
from .resources import resource_manager
from .sprites import RotatingSprite

BACKGROUND_TEXTURE_KEY = "backgroundSprite"
BACKGROUND_TEXTURE_PATH = "assets/backgroundSprite.png"
BACKGROUND_SPRITE_SIZE = (80.0, 100.0)
BACKGROUND_SPRITE_REAL_SIZE = (40.0, 50.0)
SPRITE_TYPES = 2
GENERATION_DELAY = 0.5
SPRITES_PER_GENERATION = 3


def _screen_size() -> tuple[int, int]:
    try:
        surface = pygame.display.get_surface()
    except pygame.error:
        surface = None
    if surface is None:
        return SCREEN_WIDTH, SCREEN_HEIGHT
    return surface.get_size()


class Background:
    """Spawns sprites above and left of the window and lets them drift across."""

    def __init__(self) -> None:
        resource_manager().load_texture(BACKGROUND_TEXTURE_KEY, BACKGROUND_TEXTURE_PATH)
        self.sprites: list[RotatingSprite] = []
        self.generation_timer = 0.0

    def _generate_sprites(self) -> None:
        width, height = _screen_size()
        size_x, size_y = BACKGROUND_SPRITE_SIZE
        for _ in range(SPRITES_PER_GENERATION):
            sprite_type = random_between(0, SPRITE_TYPES)
            velocity = (random_between(50, 300), random_between(50, 300))
            x = random_between(-width, width)
            if x < -size_x - 10:
                y = random_between(0, height)
            else:
                y = -size_y - random_between(0, 100)
            rotation_speed = random_between(-30, 30)

            sprite = RotatingSprite(
                BACKGROUND_TEXTURE_KEY,
                2,
                BACKGROUND_SPRITE_SIZE,
                (0, 0),
                velocity,
                rotation_speed,
            )
            sprite.set_position((x, y))
            sprite.set_frame(sprite_type)
            self.sprites.append(sprite)

    def update(self, delta_time: float) -> None:
        """Move the sprites, drop those gone past the right or bottom, spawn more."""
        for sprite in self.sprites:
            sprite.update(delta_time)
        self.sprites = [
            sprite
            for sprite in self.sprites
            if not (
                sprite.is_outside_of_window_side(ScreenSide.RIGHT)
                or sprite.is_outside_of_window_side(ScreenSide.BOTTOM)
            )
        ]

        self.generation_timer += delta_time
        if self.generation_timer >= GENERATION_DELAY:
            self._generate_sprites()
            self.generation_timer = 0.0

    def draw(self, surface: pygame.Surface) -> None:
        for sprite in self.sprites:
            sprite.draw(surface, BACKGROUND_SPRITE_REAL_SIZE)

    def clear(self) -> None:
        self.sprites.clear()


@functools.cache
def background() -> Background:
    """Return the shared background."""
    return Background()