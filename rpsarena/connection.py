"""TCP connection between the two players.

Every message travels in a fixed frame of ``BUFFER_SIZE`` bytes: the UTF-8
text followed by NUL padding.
"""

from __future__ import annotations

import logging
import socket
from typing import Optional, Union

from .config import BUFFER_SIZE, PORT

_log = logging.getLogger(__name__)

Address = tuple


class NetworkError(Exception):
    """A socket operation failed."""


def _encode_frame(message: str) -> bytes:
    data = message.encode("utf-8")
    if len(data) >= BUFFER_SIZE:
        raise ValueError(f"message of {len(data)} bytes does not fit in {BUFFER_SIZE}")
    return data.ljust(BUFFER_SIZE, b"\0")


def _decode_frame(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _discard(sock: socket.socket) -> None:
    """Shut a socket down, waking any thread blocked on it, and close it."""
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    sock.close()


class GameSocket:
    """A TCP socket carrying framed text messages.

    The server hooks report False here, meaning nothing was done; server
    subclasses give them meaning.
    """

    def __init__(self, create_socket: bool = True) -> None:
        self._socket: Optional[socket.socket] = None
        if create_socket:
            try:
                self._socket = socket.socket(
                    socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP
                )
            except OSError as exc:
                raise NetworkError(f"Error at socket(): {exc}") from exc

    def __enter__(self) -> "GameSocket":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def local_address(self) -> Optional[Address]:
        """The address the socket is bound to, or None once it is closed."""
        if self._socket is None:
            return None
        try:
            return self._socket.getsockname()
        except OSError:
            return None

    # Server hooks ----------------------------------------------------------

    def start_listening(self) -> bool:
        """Accept incoming connections; False because a plain socket does not serve."""
        return False

    def start_responding_for_broadcast(self) -> bool:
        """Answer discovery broadcasts; False because a plain socket does not serve."""
        return False

    def stop_responding_for_broadcast(self) -> bool:
        """Stop answering discovery broadcasts; False because none were answered."""
        return False

    def shutdown_server(self) -> bool:
        """Stop serving; False because a plain socket has no server to stop."""
        return False

    # Connection hooks ------------------------------------------------------

    def connect_to_server(self, server_socket) -> bool:
        """Take a connection from ``server_socket``; a plain socket cannot."""
        return False

    def disconnect_from_server(self) -> None:
        """Drop the connection by closing the socket."""
        self.close()

    # Messaging -------------------------------------------------------------

    def _require_socket(self, what: str) -> socket.socket:
        if self._socket is None:
            raise NetworkError(f"{what}: socket is closed")
        return self._socket

    def send(self, message: str) -> None:
        """Send one framed message to the connected peer."""
        frame = _encode_frame(message)
        sock = self._require_socket("Server send error")
        try:
            sock.sendall(frame)
        except OSError as exc:
            raise NetworkError("Server send error") from exc

    def receive(self) -> str:
        """Receive one framed message; an empty string once the peer has gone."""
        sock = self._require_socket("Server recv error")
        data = bytearray()
        try:
            while len(data) < BUFFER_SIZE:
                chunk = sock.recv(BUFFER_SIZE - len(data))
                if not chunk:
                    break
                data += chunk
        except OSError as exc:
            raise NetworkError("Server recv error") from exc
        return _decode_frame(bytes(data))

    def send_to(self, message: str, address: Address) -> None:
        """Send one framed message to ``address``."""
        frame = _encode_frame(message)
        sock = self._require_socket("Send error")
        try:
            sock.sendto(frame, address)
        except OSError as exc:
            raise NetworkError("Send error") from exc

    def receive_from(self) -> tuple[str, Address]:
        """Receive one message and return it with the sender's address."""
        sock = self._require_socket("Server recv error")
        try:
            data, address = sock.recvfrom(BUFFER_SIZE)
        except OSError as exc:
            raise NetworkError("Server recv error") from exc
        return _decode_frame(data), address

    def close(self) -> None:
        """Close the socket; safe to call more than once."""
        if self._socket is not None:
            _discard(self._socket)
            self._socket = None


class ClientSocket(GameSocket):
    """A connection from a joining player to the hosting player."""

    def __init__(self, address: str, port: int = PORT) -> None:
        super().__init__()
        self.server_address = (address, port)
        try:
            self._socket.connect(self.server_address)
        except OSError as exc:
            _log.info("Connection with server failed: %s", exc)
            self.close()
            raise NetworkError("Connection with server failed") from exc
        _log.info("Connected to the server")

    def disconnect_from_server(self) -> None:
        if self._socket is not None:
            self.close()
            _log.info("Disconnected from server")


class EnemySocket(GameSocket):
    """The host's end of the connection to the joining player."""

    def __init__(self) -> None:
        super().__init__(create_socket=False)
        self.peer_address: Optional[Address] = None

    def connect_to_server(self, server_socket: Union[GameSocket, socket.socket]) -> bool:
        """Wait for a player to connect to ``server_socket`` and take the connection."""
        if isinstance(server_socket, GameSocket):
            listener = server_socket._socket
        else:
            listener = server_socket
        if listener is None:
            raise NetworkError("Accept failed: server socket is closed")
        try:
            connection, address = listener.accept()
        except OSError as exc:
            _log.info("Accept failed: %s", exc)
            raise NetworkError("Accept failed") from exc
        self.close()
        self._socket = connection
        self.peer_address = address
        _log.info("Connected with player")
        return True

    def disconnect_from_server(self) -> None:
        self.close()