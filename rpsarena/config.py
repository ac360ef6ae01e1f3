"""Shared constants, enumerations and small helpers for the game."""

from __future__ import annotations

import random
from enum import IntEnum

# Window
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
WINDOW_TITLE = "Rock-Paper-Scissors"

# Networking
PORT = 48051
TIMEOUT_MS = 1000
BUFFER_SIZE = 256
DISCOVER = "DISCOVER"

# Text
TEXT_SPACING = 2.0
TEXT_SIZE = 40.0
TITLE_SIZE = 150.0

# Colours (RGBA)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
RAYWHITE = (245, 245, 245, 255)
MY_LIGHTGRAY = (217, 217, 217, 255)
MY_DARKGRAY = (166, 166, 166, 255)
MY_YELLOW = (255, 222, 89, 255)
MY_ORANGE = (255, 189, 89, 255)

# Resource keys
DEFAULT_FONT_KEY = "default"
DEFAULT_TEXTURE_KEY = "default"
MINECRAFT_FONT_KEY = "minecraft-font"

READY_TEXTURE_KEY = "player_ready"
READY_SIZE = (34.0, 60.0)

PLAYER_TEXTURE_KEY = "player_sprite"
PLAYER_SIZE = (500.0, 300.0)
PLAYER_LEFT_OFFSET = (0.0, 0.0)
PLAYER_RIGHT_OFFSET = (0.0, 300.0)

# Buttons
BUTTON_MAX_STATES = 2
BUTTON_TXT_KEY = "button"

MENU_BUTTON_SIZE = (600.0, 100.0)
MENU_BUTTON_SHEET_OFFSET = (0.0, 0.0)

SMALL_BUTTON_SIZE = (100.0, 100.0)
SMALL_BUTTON_EXIT_OFFSET = (0.0, 100.0)
SMALL_BUTTON_RELOAD_OFFSET = (0.0, 200.0)
SMALL_BUTTON_PAPER_OFFSET = (300.0, 100.0)
SMALL_BUTTON_ROCK_OFFSET = (600.0, 100.0)
SMALL_BUTTON_SCISSORS_OFFSET = (900.0, 100.0)
SMALL_BUTTON_HOME_OFFSET = (300.0, 200.0)

TINY_BUTTON_SIZE = (50.0, 50.0)
TINY_BUTTON_LEFTARROW_OFFSET = (0.0, 300.0)
TINY_BUTTON_RIGHTARROW_OFFSET = (150.0, 300.0)


class ScreenSide(IntEnum):
    """A side of the window."""

    LEFT = 0
    RIGHT = 1
    TOP = 2
    BOTTOM = 3


class PlayerType(IntEnum):
    """Role a player takes in a match."""

    HOST = 0
    CLIENT = 1
    OFFLINE = 2
    ENEMY = 3


class SceneType(IntEnum):
    """Scenes that can be pushed by type."""

    INTRO = 0
    SETUP = 1
    HOST_LOBBY = 2
    SERVER_SELECTION = 3
    GAME_SCENE = 4
    LOADING_SCENE = 5


def random_between(low: int, high: int) -> int:
    """Return a random integer in the closed range [low, high]."""
    if high < low:
        raise ValueError(f"empty range: {low}..{high}")
    return random.randint(low, high)