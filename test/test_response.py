"""
Tests for upgrade response parsing and accept key checks.
"""

from __future__ import annotations

import socket

import pytest

from dummyserver import RFC_ACCEPT, RFC_KEY, FakeSocket
from wshandshake.exceptions import HandshakeError, ResponseTooLargeError
from wshandshake.util.response import (
    WS_GUID,
    accept_key_matches,
    compute_accept_key,
    extract_accept_key,
    read_response_head,
)

RESPONSE = (
    "HTTP/1.1 101 Switching Protocols\r\n"
    "Upgrade: websocket\r\n"
    "Connection: Upgrade\r\n"
    f"Sec-WebSocket-Accept: {RFC_ACCEPT}\r\n"
    "\r\n"
)


class TestComputeAcceptKey:
    """Tests for compute_accept_key."""

    def test_rfc6455_example(self):
        """Test the example from RFC 6455 section 1.3."""
        assert compute_accept_key(RFC_KEY) == RFC_ACCEPT

    def test_guid(self):
        """Test the protocol GUID."""
        assert WS_GUID == "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"

    def test_matches(self):
        """Test comparing received accept values."""
        assert accept_key_matches(RFC_KEY, RFC_ACCEPT)
        assert not accept_key_matches(RFC_KEY, RFC_ACCEPT.lower())
        assert not accept_key_matches(RFC_KEY, "")


class TestExtractAcceptKey:
    """Tests for extract_accept_key."""

    def test_present(self):
        """Test finding the header."""
        assert extract_accept_key(RESPONSE) == RFC_ACCEPT

    def test_case_insensitive_name(self):
        """Test that the header name is matched case-insensitively."""
        response = RESPONSE.replace("Sec-WebSocket-Accept", "sec-websocket-accept")
        assert extract_accept_key(response) == RFC_ACCEPT

    def test_value_is_trimmed(self):
        """Test that surrounding whitespace is dropped from the value."""
        response = RESPONSE.replace(f": {RFC_ACCEPT}", f":   {RFC_ACCEPT} \t")
        assert extract_accept_key(response) == RFC_ACCEPT

    def test_no_space_after_colon(self):
        """Test a header written without a space after the colon."""
        response = RESPONSE.replace(f": {RFC_ACCEPT}", f":{RFC_ACCEPT}")
        assert extract_accept_key(response) == RFC_ACCEPT

    def test_absent(self):
        """Test a response without the header."""
        response = "HTTP/1.1 101 Switching Protocols\r\nUpgrade: websocket\r\n\r\n"
        assert extract_accept_key(response) is None

    def test_only_whole_header_names(self):
        """Test that a header merely ending in the name doesn't count."""
        response = f"HTTP/1.1 101 Switching Protocols\r\nX-Sec-WebSocket-Accept: {RFC_ACCEPT}\r\n\r\n"
        assert extract_accept_key(response) is None

    def test_empty_value_does_not_swallow_next_line(self):
        """Test that an empty header value stays empty."""
        response = "HTTP/1.1 101 OK\r\nSec-WebSocket-Accept:\r\nUpgrade: websocket\r\n\r\n"
        assert extract_accept_key(response) == ""


class TestReadResponseHead:
    """Tests for read_response_head."""

    def test_reads_up_to_terminator(self):
        """Test that reading stops right after the blank line."""
        frame = b"\x81\x02hi"
        sock = FakeSocket(RESPONSE.encode() + frame)

        assert read_response_head(sock) == RESPONSE
        assert bytes(sock.incoming) == frame

    def test_with_socketpair(self):
        """Test reading from a real socket."""
        client, server = socket.socketpair()
        try:
            server.sendall(RESPONSE.encode() + b"rest")
            assert read_response_head(client) == RESPONSE
            assert client.recv(4) == b"rest"
        finally:
            client.close()
            server.close()

    def test_too_large(self):
        """Test a header block that doesn't end within the limit."""
        sock = FakeSocket(b"HTTP/1.1 101 OK\r\nX-Padding: " + b"a" * 2000 + b"\r\n\r\n")

        with pytest.raises(ResponseTooLargeError) as e:
            read_response_head(sock, max_size=1024, address="ws://example.com/")

        assert e.value.limit == 1024
        assert e.value.address == "ws://example.com/"
        assert "too large" in str(e.value)
        assert len(e.value.response) == 1024 + 4

    def test_exactly_at_limit(self):
        """Test a header block exactly as large as the limit."""
        head = b"HTTP/1.1 101 OK\r\nX: " + b"a" * 80
        sock = FakeSocket(head + b"\r\n\r\n")

        assert read_response_head(sock, max_size=len(head)) == (head + b"\r\n\r\n").decode()

    def test_peer_closes_early(self):
        """Test a connection closed before the end of the head."""
        sock = FakeSocket(b"HTTP/1.1 101 OK\r\nUpgrade: websocket\r\n")

        with pytest.raises(HandshakeError) as e:
            read_response_head(sock, address="ws://example.com/")

        assert e.value.response == "HTTP/1.1 101 OK\r\nUpgrade: websocket\r\n"
        assert "ws://example.com/" in str(e.value)

    def test_transport_errors_propagate(self):
        """Test that socket errors are left to the caller."""
        client, server = socket.socketpair()
        client.settimeout(0.05)
        try:
            with pytest.raises(socket.timeout):
                read_response_head(client)
        finally:
            client.close()
            server.close()
