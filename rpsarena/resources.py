"""Keyed store of textures, sounds and fonts."""

from __future__ import annotations

import functools
import logging

import pygame

from .config import BLACK, DEFAULT_FONT_KEY, DEFAULT_TEXTURE_KEY

_log = logging.getLogger(__name__)

_DEFAULT_TEXTURE_SIZE = (64, 64)


class ResourceManager:
    """Loads resources once and hands them out by key.

    Unknown texture and font keys fall back to the defaults; unknown sound
    keys raise KeyError.
    """

    def __init__(self) -> None:
        default_texture = pygame.Surface(_DEFAULT_TEXTURE_SIZE)
        default_texture.fill(BLACK)
        self._textures: dict[str, pygame.Surface] = {DEFAULT_TEXTURE_KEY: default_texture}
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        # Font files are kept by path; a font object is opened per pixel size.
        self._fonts: dict[str, str | None] = {DEFAULT_FONT_KEY: None}
        self._font_cache: dict[tuple[str, int], pygame.font.Font] = {}

    # Textures -----------------------------------------------------------

    def load_texture(self, key: str, file_path: str) -> None:
        """Load an image under ``key`` unless the key is already taken."""
        if key in self._textures:
            return
        try:
            self._textures[key] = pygame.image.load(file_path)
        except (OSError, pygame.error) as exc:
            _log.warning("could not load texture %r from %s: %s", key, file_path, exc)

    def get_texture(self, key: str) -> pygame.Surface:
        """Return the texture for ``key``, or the default texture."""
        if key in self._textures:
            return self._textures[key]
        return self._textures[DEFAULT_TEXTURE_KEY]

    def unload_texture(self, key: str) -> None:
        self._textures.pop(key, None)

    # Sounds -------------------------------------------------------------

    def load_sound(self, key: str, file_path: str) -> None:
        """Load a sound under ``key`` unless the key is already taken."""
        if key in self._sounds:
            return
        try:
            self._sounds[key] = pygame.mixer.Sound(file_path)
        except (OSError, pygame.error) as exc:
            _log.warning("could not load sound %r from %s: %s", key, file_path, exc)

    def get_sound(self, key: str) -> pygame.mixer.Sound:
        """Return the sound for ``key``; raises KeyError when it is unknown."""
        return self._sounds[key]

    def unload_sound(self, key: str) -> None:
        self._sounds.pop(key, None)

    # Fonts --------------------------------------------------------------

    def load_font(self, key: str, file_path: str) -> None:
        """Register a font file under ``key`` unless the key is already taken."""
        if key not in self._fonts:
            self._fonts[key] = file_path

    def get_font(self, key: str, size: float) -> pygame.font.Font:
        """Return the font for ``key`` at ``size`` pixels, or the default font."""
        if key not in self._fonts:
            key = DEFAULT_FONT_KEY
        path = self._fonts[key]
        pixel_size = max(1, round(size))
        font = self._font_cache.get((key, pixel_size))
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = self._open_font(path, pixel_size)
            self._font_cache[(key, pixel_size)] = font
        return font

    def unload_font(self, key: str) -> None:
        if key not in self._fonts:
            return
        del self._fonts[key]
        for cached in [entry for entry in self._font_cache if entry[0] == key]:
            del self._font_cache[cached]

    @staticmethod
    def _open_font(path: str | None, size: int) -> pygame.font.Font:
        if path is not None:
            try:
                return pygame.font.Font(path, size)
            except (OSError, pygame.error) as exc:
                _log.warning("could not load font from %s: %s", path, exc)
        return pygame.font.Font(None, size)

    # All ------------------------------------------------------------------

    def clean_up(self) -> None:
        """Drop every resource, the defaults included."""
        self._textures.clear()
        self._sounds.clear()
        self._fonts.clear()
        self._font_cache.clear()


@functools.cache
def resource_manager() -> ResourceManager:
    """Return the shared resource manager."""
    return ResourceManager()