"""Discovery of hosted games by UDP broadcast."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Optional

from .config import BUFFER_SIZE, DISCOVER, PORT, TIMEOUT_MS

_log = logging.getLogger(__name__)

SEARCH_INTERVAL = 2.0

Server = tuple[str, tuple]


class BroadcastSocket:
    """Sends discovery messages and collects the names of servers that answer."""

    def __init__(
        self,
        port: int = PORT,
        address: str = "<broadcast>",
        timeout: float = TIMEOUT_MS / 1000,
    ) -> None:
        self.target = (address, port)
        self._results: list[Server] = []
        self._running = False
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._socket: Optional[socket.socket] = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            _log.error("Socket creation failed: %s", exc)
            return
        sock.settimeout(timeout)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        except OSError as exc:
            _log.warning("could not enable broadcast: %s", exc)
        self._socket = sock

    def __enter__(self) -> "BroadcastSocket":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _search_round(self) -> list[Server]:
        sock = self._socket
        if sock is None:
            return []
        try:
            sock.sendto(DISCOVER.encode("ascii"), self.target)
        except OSError as exc:
            _log.debug("discovery send failed: %s", exc)
        found: list[Server] = []
        while True:
            try:
                data, address = sock.recvfrom(BUFFER_SIZE)
            except OSError:
                break
            if not data:
                break
            name = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
            found.append((name, address))
        return found

    def _search_for_servers(self) -> None:
        while True:
            self._results = self._search_round()
            if not self._running:
                break
            self._stop.wait(SEARCH_INTERVAL)
            if not self._running:
                break

    def _start(self) -> None:
        self._thread = threading.Thread(target=self._search_for_servers, daemon=True)
        self._thread.start()

    def _join(self) -> None:
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def start_broadcast(self) -> None:
        """Search repeatedly in the background until results are asked for."""
        self._running = False
        self._stop.set()
        self._join()
        self._running = True
        self._stop.clear()
        self._start()

    def search_once(self) -> None:
        """Run a single search in the background."""
        self._running = False
        self._stop.set()
        self._join()
        self._stop.clear()
        self._start()

    def get_results(self) -> list[Server]:
        """Stop searching, wait for the search to end and return what it found."""
        if self._thread is None:
            raise RuntimeError("Thread not started, could not get results from BroadcastSocket")
        self._running = False
        self._stop.set()
        self._join()
        return list(self._results)

    def close(self) -> None:
        """Stop any search and close the socket."""
        self._running = False
        self._stop.set()
        self._join()
        if self._socket is not None:
            self._socket.close()
            self._socket = None