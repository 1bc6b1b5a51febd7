from __future__ import annotations

import socket

import pytest

from dummyserver import DummyWebSocketServer, accepting


@pytest.fixture
def ws_server():
    """Factory for started :class:`DummyWebSocketServer` instances."""
    servers = []

    def make(respond=accepting) -> DummyWebSocketServer:
        server = DummyWebSocketServer(respond).start()
        servers.append(server)
        return server

    yield make

    for server in servers:
        server.stop()


@pytest.fixture
def refused_port():
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
