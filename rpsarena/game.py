"""The match: who plays whom, over which connection, and who wins a round."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Optional, Union

from .config import PORT, PlayerType
from .connection import ClientSocket, EnemySocket, GameSocket, NetworkError
from .player import COMPUTER_THINK_TIME, Choice, Computer, Enemy, OnlinePlayer, Player
from .server import PlayerServer

_log = logging.getLogger(__name__)

WIN = 1
DRAW = 0
LOSS = -1

_BEATS = {
    (Choice.SCISSORS, Choice.PAPER),
    (Choice.PAPER, Choice.ROCK),
    (Choice.ROCK, Choice.SCISSORS),
}

_CHOICE_WORDS = {
    "r": Choice.ROCK,
    "rock": Choice.ROCK,
    "0": Choice.ROCK,
    "p": Choice.PAPER,
    "paper": Choice.PAPER,
    "1": Choice.PAPER,
    "s": Choice.SCISSORS,
    "scissors": Choice.SCISSORS,
    "2": Choice.SCISSORS,
}

_CLEAR_SCREEN = "\033[2J\033[H"

ServerAddress = Union[tuple, str, None]


def check_win(p1, p2) -> int:
    """Return 1 if ``p1`` beats ``p2``, 0 on a draw and -1 if ``p1`` loses."""
    p1, p2 = Choice(p1), Choice(p2)
    if (p1, p2) in _BEATS:
        return WIN
    if p1 == p2:
        return DRAW
    return LOSS


class Game:
    """Sets up the two players, locally or over the network, in a background thread."""

    def __init__(self, port: int = PORT, computer_think_time: float = COMPUTER_THINK_TIME) -> None:
        self.port = port
        self.computer_think_time = computer_think_time
        self.player: Optional[Player] = None
        self.enemy: Optional[Player] = None
        self.player_type: Optional[PlayerType] = None
        self.enemy_type: Optional[PlayerType] = None
        self.server_error = False
        self.connection_error = False
        self.setup_finished = False
        self._is_set_up = False
        self._setup_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._cancelled = False
        self._sockets: list[GameSocket] = []
        self._connection: Optional[GameSocket] = None

    @property
    def is_set_up(self) -> bool:
        return self._is_set_up

    def check_win(self, p1, p2) -> int:
        return check_win(p1, p2)

    def _register(self, sock: GameSocket) -> bool:
        """Keep ``sock`` for clean-up; close it instead if the game was torn down."""
        with self._lock:
            if self._cancelled:
                sock.close()
                return False
            self._sockets.append(sock)
            return True

    def setup(self, nick: str, player_type, server_address: ServerAddress = None) -> None:
        """Start setting the game up in the background; ignored once already set up."""
        if self._is_set_up:
            return
        player_type = PlayerType(player_type)
        targets = {
            PlayerType.HOST: (self.setup_server, (nick,)),
            PlayerType.CLIENT: (self.setup_client, (nick, server_address)),
            PlayerType.OFFLINE: (self.setup_offline, (nick,)),
        }
        if player_type not in targets:
            raise ValueError(f"cannot set up a game as {player_type.name}")
        self.player_type = player_type
        self._is_set_up = True
        with self._lock:
            self._cancelled = False
        target, args = targets[player_type]
        self._setup_thread = threading.Thread(target=target, args=args, daemon=True)
        self._setup_thread.start()

    def wait_for_setup(self, timeout: Optional[float] = None) -> bool:
        """Wait for the setup thread and report whether setup finished."""
        thread = self._setup_thread
        if thread is not None:
            thread.join(timeout)
        return self.setup_finished

    def setup_server(self, nick: str) -> None:
        """Host: listen, answer discovery, accept one player and exchange names."""
        try:
            server = PlayerServer(nick, port=self.port)
        except NetworkError as exc:
            _log.error("could not start server: %s", exc)
            self.server_error = True
            return
        if not self._register(server):
            return
        self._connection = server
        try:
            server.start_listening()
            server.start_responding_for_broadcast()
        except NetworkError as exc:
            _log.error("could not start server: %s", exc)
            self.server_error = True
            return

        enemy_socket = EnemySocket()
        if not self._register(enemy_socket):
            return
        try:
            enemy_socket.connect_to_server(server)
            enemy_socket.send(nick)
            server.stop_responding_for_broadcast()
            self.enemy = Enemy(enemy_socket)
            self.player = OnlinePlayer(nick, enemy_socket)
            self.enemy_type = PlayerType.CLIENT
            self.setup_finished = True
        except (NetworkError, ValueError) as exc:
            _log.debug("hosting ended before a player joined: %s", exc)

    @staticmethod
    def _resolve(server_address: ServerAddress, port: int) -> tuple[str, int]:
        if server_address is None:
            return "0.0.0.0", port
        if isinstance(server_address, str):
            return server_address, port
        host = server_address[0]
        return host, server_address[1] if len(server_address) > 1 else port

    def setup_client(self, nick: str, server_address: ServerAddress) -> None:
        """Join: connect to the host and exchange names."""
        host, port = self._resolve(server_address, self.port)
        try:
            client = ClientSocket(host, port)
            if not self._register(client):
                return
            self._connection = client
            client.send(nick)
            self.enemy = Enemy(client)
            self.player = OnlinePlayer(nick, client)
            self.enemy_type = PlayerType.HOST
            self.setup_finished = True
        except (NetworkError, ValueError) as exc:
            _log.error("could not join game: %s", exc)
            self.connection_error = True

    def setup_offline(self, nick: str) -> None:
        """Play against the computer."""
        self.enemy_type = PlayerType.OFFLINE
        self.player_type = PlayerType.OFFLINE
        self.player = Player(nick)
        self.enemy = Computer(think_time=self.computer_think_time)
        self.setup_finished = True

    @staticmethod
    def _ask_choice() -> Choice:
        while True:
            answer = input("Choose [r]ock, [p]aper or [s]cissors: ").strip().lower()
            if answer in _CHOICE_WORDS:
                return _CHOICE_WORDS[answer]
            print("Unknown choice.")

    def run(self) -> None:
        """Play rounds on the console until input ends."""
        player, enemy = self.player, self.enemy
        if player is None or enemy is None:
            raise RuntimeError("game is not set up")
        while True:
            print(_CLEAR_SCREEN, end="")
            print(f"Score: {player.name}({player.score}) - ({enemy.score}){enemy.name}")
            try:
                choice = self._ask_choice()
            except EOFError:
                return
            player.choose(choice)
            enemy.choose()
            print(f"{player.choice} VS {enemy.choice}")
            result = check_win(player.choice, enemy.choice)
            if result == WIN:
                print("You won!")
                player.add_score()
            elif result == DRAW:
                print("Draw!")
            else:
                print("You lost!")
                enemy.add_score()
            try:
                input("Press Enter to continue...")
            except EOFError:
                return

    def deinitialize(self) -> None:
        """Close every socket, wait for the setup thread and drop both players."""
        if not self._is_set_up:
            return
        self._is_set_up = False
        with self._lock:
            self._cancelled = True
            sockets, self._sockets = self._sockets, []
        for sock in sockets:
            sock.shutdown_server()
            sock.disconnect_from_server()
            sock.close()
        if self._setup_thread is not None:
            if self._setup_thread is not threading.current_thread():
                self._setup_thread.join()
            self._setup_thread = None
        self.server_error = False
        self.connection_error = False
        self.setup_finished = False
        self.player = None
        self.enemy = None
        self._connection = None

    def move_player(self) -> Optional[Player]:
        """Hand the local player over; the game no longer holds it."""
        player, self.player = self.player, None
        return player

    def move_enemy(self) -> Optional[Player]:
        """Hand the opponent over; the game no longer holds it."""
        enemy, self.enemy = self.enemy, None
        return enemy

    def disconnect(self) -> None:
        if self._connection is not None:
            self._connection.disconnect_from_server()


@functools.cache
def game() -> Game:
    """Return the shared game."""
    return Game()