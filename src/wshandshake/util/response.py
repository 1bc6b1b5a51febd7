"""
Response utilities for wshandshake.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import socket
import typing

from ..exceptions import HandshakeError, ResponseTooLargeError

WS_GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"

HEADER_TERMINATOR = b"\r\n\r\n"

DEFAULT_MAX_RESPONSE_SIZE = 1024

_ACCEPT_RE = re.compile(r"^Sec-WebSocket-Accept:[ \t]*(.*?)[ \t\r]*$", re.IGNORECASE | re.MULTILINE)


def compute_accept_key(key: str) -> str:
    """
    Derive the ``Sec-WebSocket-Accept`` value a server must send for *key*.

    >>> compute_accept_key("dGhlIHNhbXBsZSBub25jZQ==")
    's3pPLMBiTxaQ9kYGzzhZRbK+xOo='
    """
    digest = hashlib.sha1((key + WS_GUID).encode("ascii")).digest()
    return base64.b64encode(digest).decode("ascii")


def extract_accept_key(response: str) -> typing.Optional[str]:
    """
    Find the ``Sec-WebSocket-Accept`` header in a raw response head.

    The header name is matched case-insensitively at the start of a line.
    Returns the trimmed value, or None if the header is absent.
    """
    match = _ACCEPT_RE.search(response)
    if match is None:
        return None
    return match.group(1).strip()


def accept_key_matches(key: str, accept_key: str) -> bool:
    """Compare a received accept value with the one expected for *key*."""
    expected = compute_accept_key(key)
    return hmac.compare_digest(expected.encode("ascii"), accept_key.encode("latin-1"))


def read_response_head(
    sock: socket.socket,
    max_size: int = DEFAULT_MAX_RESPONSE_SIZE,
    address: typing.Optional[str] = None,
) -> str:
    """
    Read a response head from *sock*, up to and including the blank line.

    Bytes are read one at a time so that nothing past the terminator is
    consumed; the socket is left positioned on the first frame.

    :param sock: Connected socket
    :param max_size: Largest header block accepted, terminator excluded
    :param address: Target address used in error messages
    :raises ResponseTooLargeError: If no terminator shows up within *max_size* bytes
    :raises HandshakeError: If the peer closes the connection mid-head
    :raises OSError: On transport errors, including timeouts
    """
    buf = bytearray()
    limit = max_size + len(HEADER_TERMINATOR)

    while not buf.endswith(HEADER_TERMINATOR):
        if len(buf) >= limit:
            raise ResponseTooLargeError(address or "", max_size, buf.decode("latin-1"))
        chunk = sock.recv(1)
        if not chunk:
            raise HandshakeError(
                f"Connection to '{address}' failed: "
                "server closed the connection before the end of the upgrade response:\n"
                + buf.decode("latin-1"),
                address=address,
                response=buf.decode("latin-1"),
            )
        buf += chunk

    return buf.decode("latin-1")
