"""
Tests for handshake key generation and request serialization.
"""

from __future__ import annotations

import base64
import random

from wshandshake.util.request import (
    KEY_CHARS,
    KEY_LENGTH,
    encode_request,
    generate_key,
    make_headers,
)


class TestGenerateKey:
    """Tests for generate_key."""

    def test_alphabet(self):
        """Test the key alphabet."""
        assert len(set(KEY_CHARS)) == len(KEY_CHARS) == 74
        assert set('!"$&/()=[]{}') <= set(KEY_CHARS)
        assert KEY_LENGTH == 16

    def test_decodes_to_sixteen_alphabet_chars(self):
        """Test that every key decodes to 16 bytes from the alphabet."""
        for _ in range(200):
            raw = base64.b64decode(generate_key(), validate=True)
            assert len(raw) == 16
            assert set(raw.decode("ascii")) <= set(KEY_CHARS)

    def test_keys_are_distinct(self):
        """Test that successive keys don't repeat."""
        keys = [generate_key() for _ in range(1000)]
        assert len(set(keys)) == 1000

    def test_key_length(self):
        """Test the encoded key length."""
        assert len(generate_key()) == 24

    def test_custom_random_source(self):
        """Test that a seeded random source gives reproducible keys."""
        assert generate_key(random.Random(42)) == generate_key(random.Random(42))


class TestMakeHeaders:
    """Tests for make_headers."""

    def test_empty(self):
        """Test that no arguments give no headers."""
        assert make_headers() == {}

    def test_basic_auth_tuple(self):
        """Test basic auth from a tuple."""
        headers = make_headers(basic_auth=("user", "pass"))
        assert headers == {"Authorization": "Basic dXNlcjpwYXNz"}

    def test_basic_auth_has_no_line_break(self):
        """Test that the auth value carries no trailing CRLF."""
        value = make_headers(basic_auth=("user", ""))["Authorization"]
        assert value == "Basic dXNlcjo="
        assert "\r" not in value and "\n" not in value


class TestEncodeRequest:
    """Tests for encode_request."""

    def test_layout(self):
        """Test the request line, header lines and terminator."""
        request = encode_request(
            "/chat?x=1#frag",
            [("Host", "example.com:80"), ("Upgrade", "websocket")],
        )

        assert request == (
            b"GET /chat?x=1#frag HTTP/1.1\r\n"
            b"Host: example.com:80\r\n"
            b"Upgrade: websocket\r\n"
            b"\r\n"
        )

    def test_no_headers(self):
        """Test a request without headers."""
        assert encode_request("/", []) == b"GET / HTTP/1.1\r\n\r\n"
