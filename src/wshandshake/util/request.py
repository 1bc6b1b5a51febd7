"""
Request utilities for wshandshake.
"""

from __future__ import annotations

import base64
import random
import typing
from typing import Optional, Tuple

# Characters a handshake key is drawn from before base64 encoding.
KEY_CHARS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ!"$&/()=[]{}0123456789'
KEY_LENGTH = 16

CRLF = "\r\n"


def generate_key(rng: Optional[random.Random] = None) -> str:
    """
    Generate a fresh ``Sec-WebSocket-Key``.

    Sixteen characters are sampled with replacement from :data:`KEY_CHARS`
    and base64 encoded. The key only has to be unlikely to repeat, so the
    module level PRNG is good enough.

    :param rng: Optional random source, defaults to the ``random`` module
    """
    chars = (rng or random).choices(KEY_CHARS, k=KEY_LENGTH)
    return base64.b64encode("".join(chars).encode("ascii")).decode("ascii")


def make_headers(basic_auth: Optional[Tuple[str, str]] = None) -> typing.Dict[str, str]:
    """
    Shortcuts for generating request headers.

    :param basic_auth:
        A (username, password) tuple for 'Authorization: Basic ...' auth.

    Example:

    .. code-block:: python

        import wshandshake

        headers = wshandshake.util.make_headers(basic_auth=("user", "pass"))
        # {'Authorization': 'Basic dXNlcjpwYXNz'}
    """
    headers: typing.Dict[str, str] = {}

    if basic_auth:
        credentials = f"{basic_auth[0]}:{basic_auth[1]}".encode("utf-8")
        headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode('ascii')}"

    return headers


def encode_request(request_uri: str, headers: typing.Iterable[Tuple[str, str]]) -> bytes:
    """
    Serialize a request head.

    The ``GET`` request line and every ``Name: Value`` header line are
    joined with CRLF and the head is terminated by an empty line.

    :param request_uri: Path with query and fragment
    :param headers: Ordered ``(name, value)`` pairs
    """
    lines = [f"GET {request_uri} HTTP/1.1"]
    lines.extend(f"{name}: {value}" for name, value in headers)
    return (CRLF.join(lines) + CRLF + CRLF).encode("utf-8")
