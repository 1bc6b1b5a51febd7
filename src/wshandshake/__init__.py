"""
wshandshake - the client side of the WebSocket opening handshake.

wshandshake turns a ``ws://`` or ``wss://`` URI into a connected socket
on which the server has accepted the WebSocket upgrade:
- URI parsing with ws/wss default ports
- Plain TCP or TLS connections with connect and read timeouts
- Upgrade request with basic auth and caller header overrides
- Sec-WebSocket-Accept verification

:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import typing

# Import version
from ._version import __version__

# Set default logging handler to avoid "No handler found" warnings.
import logging
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

# Import exceptions first to avoid circular imports
from . import exceptions

from ._collections import HTTPHeaderDict
from .connection import WebSocketConnection
from .exceptions import (
    BadURIError,
    ConnectionError,
    ConnectTimeoutError,
    HandshakeError,
    InvalidAcceptKeyError,
    InvalidArgumentError,
    NewConnectionError,
    ReadTimeoutError,
    ResponseTooLargeError,
    URLSchemeUnknown,
    WebSocketError,
)
from .headers import HEADER_STAGES, resolve_headers
from .options import DEFAULT_OPTIONS, HandshakeOptions
from .util.timeout import Timeout
from .util.url import Url, parse_url

__all__ = (
    "__version__",
    "exceptions",
    "HTTPHeaderDict",
    "WebSocketConnection",
    "HandshakeOptions",
    "DEFAULT_OPTIONS",
    "HEADER_STAGES",
    "Timeout",
    "Url",
    "connect",
    "parse_url",
    "resolve_headers",
    "add_stderr_logger",
    "disable_warnings",
    # Exceptions
    "WebSocketError",
    "BadURIError",
    "URLSchemeUnknown",
    "InvalidArgumentError",
    "ConnectionError",
    "NewConnectionError",
    "ConnectTimeoutError",
    "ReadTimeoutError",
    "HandshakeError",
    "InvalidAcceptKeyError",
    "ResponseTooLargeError",
)


def connect(
    url: str,
    options: HandshakeOptions | None = None,
    **kwargs: typing.Any,
) -> WebSocketConnection:
    """
    Connect to a WebSocket server.

    This is a convenience function that creates a WebSocketConnection
    and performs the WebSocket handshake.

    :param url: The WebSocket URL to connect to (ws:// or wss://)
    :param options: Handshake options, defaults to :data:`DEFAULT_OPTIONS`
    :param kwargs: Individual options merged over *options*
    :return: A connected WebSocketConnection
    :raises BadURIError: If the URL is malformed or not ws/wss
    :raises ConnectionError: If the connection fails
    :raises HandshakeError: If the server rejects or botches the upgrade
    """
    if kwargs:
        options = options if options is not None else DEFAULT_OPTIONS
        options = options.replace(_stacklevel=3, **kwargs)
    conn = WebSocketConnection(url, options)
    conn.connect()
    return conn


def add_stderr_logger(level=logging.DEBUG):
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


def disable_warnings(category=exceptions.DeprecatedOptionWarning):
    """
    Disable wshandshake warnings.
    """
    import warnings

    warnings.filterwarnings("ignore", category=category)
