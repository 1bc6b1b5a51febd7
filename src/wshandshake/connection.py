"""
WebSocket opening handshake for wshandshake.

This module provides the client side of the RFC 6455 opening handshake:
it connects to a ``ws://`` or ``wss://`` URI, sends the upgrade request
and verifies the server's ``Sec-WebSocket-Accept`` answer. The socket it
returns is ready for a framing layer.
"""

from __future__ import annotations

import logging
import socket
import ssl
import typing

from ._collections import HTTPHeaderDict
from .exceptions import (
    ConnectTimeoutError,
    ConnectionError,
    HandshakeError,
    InvalidAcceptKeyError,
    NewConnectionError,
    ReadTimeoutError,
)
from .headers import resolve_headers
from .options import DEFAULT_OPTIONS, HandshakeOptions
from .util.connection import create_connection
from .util.request import encode_request, generate_key
from .util.response import accept_key_matches, extract_accept_key, read_response_head
from .util.ssl_ import ssl_wrap_socket
from .util.url import Url, parse_url

log = logging.getLogger(__name__)

_REDACTED_HEADERS = frozenset(["authorization", "proxy-authorization"])


class WebSocketConnection:
    """
    Client side of a WebSocket opening handshake.

    One instance drives the handshake to one URI. :meth:`connect` runs
    every step in order (parse the URI, open the socket, send the upgrade
    request, check the response) and closes the socket on any failure.
    After a successful handshake the instance holds the open socket until
    :meth:`close` is called.

    Not safe for concurrent :meth:`connect` calls; use one instance per
    attempt.
    """

    def __init__(
        self,
        url: str,
        options: HandshakeOptions | None = None,
        **kwargs: typing.Any,
    ) -> None:
        """
        Initialize a new WebSocketConnection.

        :param url: The WebSocket URL to connect to (ws:// or wss://)
        :param options: Handshake options, defaults to :data:`DEFAULT_OPTIONS`
        :param kwargs: Individual options merged over *options*
        :raises InvalidArgumentError: If an option is unknown or invalid
        """
        options = options if options is not None else DEFAULT_OPTIONS
        if kwargs:
            options = options.replace(_stacklevel=3, **kwargs)

        self.url = url
        self.options = options

        self.sock: socket.socket | None = None
        self.key: str | None = None
        self.response: str | None = None
        self.target: Url | None = None

    def __repr__(self) -> str:
        state = "connected" if self.connected else "not connected"
        return f"<{type(self).__name__} {self.url!r} ({state})>"

    @property
    def connected(self) -> bool:
        """Check if the handshake completed and the socket is still open."""
        return self.sock is not None and self.sock.fileno() != -1

    @property
    def fragment_size(self) -> int:
        """Frame payload size the framing layer should use."""
        return self.options.fragment_size

    def connect(self) -> socket.socket:
        """
        Perform the WebSocket handshake.

        Does nothing but return the current socket if already connected.

        :return: The connected socket, positioned right after the response
        :raises BadURIError: If the URI is malformed or not ws/wss
        :raises InvalidArgumentError: If a header would produce an invalid request
        :raises ConnectionError: If the connection can't be opened or breaks
        :raises HandshakeError: If the server's response is not a valid upgrade
        """
        if self.connected:
            return self.sock  # type: ignore[return-value]

        url = parse_url(self.url)
        sock = self._new_conn(url)

        try:
            key = generate_key()
            headers = resolve_headers(url, key, self.options)
            self._send_request(sock, url, headers)
            response = self._read_response(sock, url)
            self._validate_response(url, key, response)
        except BaseException:
            sock.close()
            raise

        self.target = url
        self.key = key
        self.response = response
        self.sock = sock
        log.debug(f"WebSocket handshake with {url.address} complete")
        return sock

    def _new_conn(self, url: Url) -> socket.socket:
        """Open a socket to *url*, wrapped with TLS for wss."""
        timeout = self.options.timeout

        log.debug(f"Opening socket to {url.host_header}")
        try:
            sock = create_connection(
                (url.host, url.port),
                timeout=timeout.connect_timeout,
                socket_options=self.options.socket_options,
            )
        except socket.timeout as e:
            raise ConnectTimeoutError(
                url.host,
                url.port,
                e,
                message=f"Connection to {url.host_header} timed out. "
                f"(connect timeout={timeout.connect_timeout})",
            ) from e
        except OSError as e:
            raise NewConnectionError(url.host, url.port, e) from e

        try:
            if url.is_secure:
                sock = ssl_wrap_socket(
                    sock,
                    server_hostname=url.host,
                    ssl_context=self.options.context,
                )
            elif self.options.context is not None:
                log.debug(f"Ignoring TLS context for plain connection to {url.host_header}")

            sock.settimeout(timeout.read_timeout)
        except socket.timeout as e:
            sock.close()
            raise ConnectTimeoutError(
                url.host,
                url.port,
                e,
                message=f"TLS handshake with {url.host_header} timed out",
            ) from e
        except (ssl.SSLError, OSError) as e:
            sock.close()
            raise NewConnectionError(url.host, url.port, e) from e
        except BaseException:
            sock.close()
            raise

        return sock

    def _send_request(self, sock: socket.socket, url: Url, headers: HTTPHeaderDict) -> None:
        request = encode_request(url.request_uri, headers.items())

        if log.isEnabledFor(logging.DEBUG):
            shown = [
                (name, "<redacted>" if name.lower() in _REDACTED_HEADERS else value)
                for name, value in headers.items()
            ]
            log.debug(f"Sending handshake to {url.address}: {shown}")

        try:
            sock.sendall(request)
        except socket.timeout as e:
            raise ReadTimeoutError(
                url.host,
                url.port,
                e,
                message=f"Sending handshake to {url.host_header} timed out",
            ) from e
        except OSError as e:
            raise ConnectionError(
                url.host,
                url.port,
                e,
                message=f"Failed to send handshake to {url.host_header}",
            ) from e

    def _read_response(self, sock: socket.socket, url: Url) -> str:
        try:
            response = read_response_head(
                sock,
                max_size=self.options.max_response_size,
                address=url.address,
            )
        except socket.timeout as e:
            raise ReadTimeoutError(
                url.host,
                url.port,
                e,
                message=f"Reading upgrade response from {url.host_header} timed out. "
                f"(read timeout={self.options.timeout.read_timeout})",
            ) from e
        except OSError as e:
            raise ConnectionError(
                url.host,
                url.port,
                e,
                message=f"Failed to read upgrade response from {url.host_header}",
            ) from e

        log.debug(f"Upgrade response from {url.address}: {response!r}")
        return response

    def _validate_response(self, url: Url, key: str, response: str) -> None:
        # Only Sec-WebSocket-Accept is checked; the status line and other
        # headers are left to the caller.
        accept_key = extract_accept_key(response)
        if accept_key is None:
            raise HandshakeError(
                f"Connection to '{url.address}' failed: "
                f"Server sent invalid upgrade response:\n{response}",
                address=url.address,
                response=response,
            )

        if not accept_key_matches(key, accept_key):
            raise InvalidAcceptKeyError(url.address, response, accept_key)

    def close(self) -> None:
        """Close the socket, if open."""
        sock, self.sock = self.sock, None
        if sock is not None:
            sock.close()

    def __enter__(self) -> WebSocketConnection:
        """Enter context manager."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: typing.Any,
    ) -> None:
        """Exit context manager."""
        self.close()
