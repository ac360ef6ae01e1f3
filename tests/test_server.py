import socket
import threading

import pytest

from rpsarena.config import DISCOVER
from rpsarena.connection import ClientSocket, EnemySocket, NetworkError
from rpsarena.server import PlayerServer


@pytest.fixture
def server():
    srv = PlayerServer("Alice", port=0, host="127.0.0.1", timeout=0.05)
    yield srv
    srv.close()


def _discover(port, payload=DISCOVER.encode("ascii"), timeout=1.0):
    """Send ``payload`` to the server and return its reply, or None if none came."""
    udp = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    udp.settimeout(timeout)
    try:
        udp.sendto(payload, ("127.0.0.1", port))
        try:
            return udp.recvfrom(1024)[0]
        except socket.timeout:
            return None
    finally:
        udp.close()


def test_server_binds_requested_host(server):
    assert server.local_address[0] == "127.0.0.1"


def test_answers_discovery_with_its_name(server):
    server.start_responding_for_broadcast()
    assert _discover(server.local_address[1]) == b"Alice's server"


def test_ignores_other_messages(server):
    server.start_responding_for_broadcast()
    port = server.local_address[1]
    assert _discover(port, b"HELLO", timeout=0.5) is None
    assert _discover(port) == b"Alice's server"


def test_stops_answering_after_stop(server):
    server.start_responding_for_broadcast()
    port = server.local_address[1]
    assert _discover(port) == b"Alice's server"
    server.stop_responding_for_broadcast()
    assert _discover(port, timeout=0.5) is None


def test_handshake_with_client(server):
    server.start_listening()
    client = ClientSocket("127.0.0.1", server.local_address[1])
    enemy = EnemySocket()
    try:
        assert enemy.connect_to_server(server) is True
        enemy.send("Alice")
        assert client.receive() == "Alice"
        client.send("Bob")
        assert enemy.receive() == "Bob"
    finally:
        client.close()
        enemy.close()


def test_tcp_port_in_use_raises():
    occupier = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    occupier.bind(("127.0.0.1", 0))
    occupier.listen(1)
    try:
        with pytest.raises(NetworkError, match="Failed to bind socket"):
            PlayerServer("Alice", port=occupier.getsockname()[1], host="127.0.0.1")
    finally:
        occupier.close()


def test_udp_port_in_use_raises():
    occupier = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    occupier.bind(("127.0.0.1", 0))
    try:
        with pytest.raises(NetworkError, match="Failed to bind broadcast socket"):
            PlayerServer("Alice", port=occupier.getsockname()[1], host="127.0.0.1")
    finally:
        occupier.close()


def test_shutdown_closes_listening_socket(server):
    server.start_listening()
    server.shutdown_server()
    assert server.local_address is None
    with pytest.raises(NetworkError):
        EnemySocket().connect_to_server(server)
    with pytest.raises(NetworkError):
        server.start_listening()


def test_shutdown_wakes_pending_accept(server):
    server.start_listening()
    errors = []

    def wait_for_player():
        try:
            EnemySocket().connect_to_server(server)
        except NetworkError as exc:
            errors.append(exc)

    waiter = threading.Thread(target=wait_for_player, daemon=True)
    waiter.start()
    waiter.join(0.2)
    server.shutdown_server()
    waiter.join(5)
    assert not waiter.is_alive()
    assert server.local_address is None
    assert len(errors) == 1
    assert str(errors[0]).startswith("Accept failed")