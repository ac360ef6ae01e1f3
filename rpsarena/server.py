"""The hosting player's listening socket and discovery responder."""

from __future__ import annotations

import logging
import os
import socket
import threading
from typing import Optional

from .config import BUFFER_SIZE, DISCOVER, PORT, TIMEOUT_MS
from .connection import GameSocket, NetworkError

_log = logging.getLogger(__name__)


class PlayerServer(GameSocket):
    """Listens for one opponent and answers discovery broadcasts with its name."""

    def __init__(
        self,
        name: str,
        port: int = PORT,
        host: str = "",
        timeout: float = TIMEOUT_MS / 1000,
    ) -> None:
        self.name = name
        self._broadcast: Optional[socket.socket] = None
        self._responding = False
        self._responder: Optional[threading.Thread] = None
        super().__init__()

        if os.name != "nt":
            self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._socket.bind((host, port))
        except OSError as exc:
            _log.info("bind() failed: %s", exc)
            self.close()
            raise NetworkError("Failed to bind socket") from exc
        bound_port = self._socket.getsockname()[1]

        try:
            self._broadcast = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            self.close()
            raise NetworkError("Socket creation failed") from exc
        self._broadcast.settimeout(timeout)
        try:
            self._broadcast.bind((host, bound_port))
        except OSError as exc:
            _log.info("bind() for broadcast failed: %s", exc)
            self.close()
            raise NetworkError("Failed to bind broadcast socket") from exc

    @property
    def response(self) -> str:
        """What the server answers to a discovery message."""
        return f"{self.name}'s server"

    def _respond_for_broadcast(self) -> None:
        sock = self._broadcast
        discover = DISCOVER.encode("ascii")
        while self._responding and sock is not None:
            try:
                data, client = sock.recvfrom(BUFFER_SIZE)
            except socket.timeout:
                continue
            except OSError:
                break
            if data and data.split(b"\0", 1)[0] == discover:
                try:
                    sock.sendto(self.response.encode("utf-8"), client)
                except OSError as exc:
                    _log.debug("discovery reply failed: %s", exc)

    def start_listening(self) -> None:
        sock = self._require_socket("listen() failed")
        try:
            sock.listen(1)
        except OSError as exc:
            _log.info("Error listening on socket: %s", exc)
            self.close()
            raise NetworkError("listen() failed") from exc
        _log.info("Waiting for second player to connect...")

    def start_responding_for_broadcast(self) -> None:
        self.stop_responding_for_broadcast()
        self._responding = True
        self._responder = threading.Thread(target=self._respond_for_broadcast, daemon=True)
        self._responder.start()

    def stop_responding_for_broadcast(self) -> None:
        self._responding = False
        if self._responder is not None:
            if self._responder is not threading.current_thread():
                self._responder.join()
            self._responder = None

    def shutdown_server(self) -> None:
        """Stop responding and close both sockets, waking a pending accept."""
        self.stop_responding_for_broadcast()
        super().close()
        if self._broadcast is not None:
            self._broadcast.close()
            self._broadcast = None

    def close(self) -> None:
        self.shutdown_server()