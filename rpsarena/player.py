"""Players: the local player, networked players and the computer opponent."""

from __future__ import annotations

import re
import threading
import time
from enum import IntEnum
from typing import Optional, Protocol

from .config import (
    PLAYER_LEFT_OFFSET,
    PLAYER_RIGHT_OFFSET,
    PLAYER_SIZE,
    PLAYER_TEXTURE_KEY,
    random_between,
)
from .sprites import Sprite

COMPUTER_NAME = "Computer"
COMPUTER_THINK_TIME = 1.5
PLAYER_FRAMES = 2

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Choice(IntEnum):
    """A hand; the value is also the sprite frame that shows it."""

    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    def __str__(self) -> str:
        return self.name.capitalize()


class Connection(Protocol):
    """What a networked player needs from its socket."""

    def send(self, message: str) -> None: ...

    def receive(self) -> str: ...


def _parse_choice(message: str) -> Choice:
    """Read a choice the way the wire format is written: a leading integer, 0 if none."""
    match = _LEADING_INT.match(message)
    value = int(match.group(1)) if match else 0
    try:
        return Choice(value)
    except ValueError:
        raise ValueError(f"invalid choice received: {message!r}") from None


class Player(Sprite):
    """A player with a name, a score and the hand chosen this round."""

    def __init__(
        self,
        name: str,
        texture_id: str = PLAYER_TEXTURE_KEY,
        max_frames: int = PLAYER_FRAMES,
        frame_size=PLAYER_SIZE,
        frame_origin=PLAYER_RIGHT_OFFSET,
    ) -> None:
        super().__init__(texture_id, max_frames, frame_size, frame_origin)
        self.name = name
        self.score = 0
        self.choice = Choice.PAPER
        self._chosen = threading.Event()

    def choose(self, choice: Optional[Choice] = None) -> None:
        """Pick ``choice``; without one a local player does nothing."""
        if choice is None:
            return
        self.choice = Choice(choice)
        self._chosen.set()

    def reset_chosen(self) -> None:
        self._chosen.clear()
        self.frame = 0

    def has_chosen(self) -> bool:
        return self._chosen.is_set()

    def show_result(self) -> None:
        """Show the chosen hand."""
        self.frame = int(self.choice)

    def add_score(self) -> None:
        self.score += 1


class OnlinePlayer(Player):
    """The local player in a networked game; every choice is sent to the opponent."""

    def __init__(
        self,
        name: str,
        connection: Connection,
        texture_id: str = PLAYER_TEXTURE_KEY,
        max_frames: int = PLAYER_FRAMES,
        frame_size=PLAYER_SIZE,
        frame_origin=PLAYER_RIGHT_OFFSET,
    ) -> None:
        super().__init__(name, texture_id, max_frames, frame_size, frame_origin)
        self.connection = connection

    def choose(self, choice: Optional[Choice] = None) -> None:
        if choice is None:
            return
        super().choose(choice)
        self.connection.send(str(int(self.choice)))


class Enemy(OnlinePlayer):
    """The remote opponent; its name and choices arrive over the connection."""

    def __init__(
        self,
        connection: Connection,
        texture_id: str = PLAYER_TEXTURE_KEY,
        max_frames: int = PLAYER_FRAMES,
        frame_size=PLAYER_SIZE,
        frame_origin=PLAYER_LEFT_OFFSET,
    ) -> None:
        super().__init__("", connection, texture_id, max_frames, frame_size, frame_origin)
        self.name = connection.receive()

    def choose(self, choice: Optional[Choice] = None) -> None:
        """Wait for the opponent's choice; any argument is ignored."""
        received = _parse_choice(self.connection.receive())
        Player.choose(self, received)


class Computer(Player):
    """An offline opponent that picks at random after a short pause."""

    def __init__(
        self,
        texture_id: str = PLAYER_TEXTURE_KEY,
        max_frames: int = PLAYER_FRAMES,
        frame_size=PLAYER_SIZE,
        frame_origin=PLAYER_LEFT_OFFSET,
        think_time: float = COMPUTER_THINK_TIME,
    ) -> None:
        super().__init__(COMPUTER_NAME, texture_id, max_frames, frame_size, frame_origin)
        self.think_time = think_time

    def choose(self, choice: Optional[Choice] = None) -> None:
        """Pick a random hand; any argument is ignored."""
        if self.think_time > 0:
            time.sleep(self.think_time)
        Player.choose(self, Choice(random_between(0, 2)))