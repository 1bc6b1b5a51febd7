"""
Exceptions for wshandshake.

This module contains all exceptions raised by wshandshake.
"""

from __future__ import annotations


class WebSocketError(Exception):
    """Base exception used by this module."""
    pass


class WebSocketWarning(Warning):
    """Base warning used by this module."""
    pass


class BadURIError(ValueError, WebSocketError):
    """Raised when there is something wrong with a given WebSocket URI."""

    def __init__(self, uri: str, message: str | None = None) -> None:
        self.uri = uri
        super().__init__(message or f"Invalid url '{uri}' provided.")


class URLSchemeUnknown(BadURIError):
    """Raised when a URI has a scheme other than ws or wss."""

    def __init__(self, uri: str, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(
            uri,
            f"Url should have scheme ws or wss, not '{scheme}' from URI '{uri}'.",
        )


class InvalidArgumentError(ValueError, WebSocketError):
    """Raised when a handshake option holds a value of the wrong kind."""
    pass


class TimeoutError(WebSocketError):
    """Raised when a socket timeout occurs."""
    pass


class ConnectionError(WebSocketError):
    """
    Raised when there is a transport-level error with a connection.

    Carries the target host and port and the underlying error, if any.
    """

    def __init__(
        self,
        host: str,
        port: int,
        reason: BaseException | str | None = None,
        message: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        self.errno: int | None = getattr(reason, "errno", None)

        if message is None:
            message = f"Could not open socket to \"{host}:{port}\""
        if reason is not None:
            message += f": {reason}"
            if self.errno is not None and f"[Errno {self.errno}]" not in str(reason):
                message += f" ({self.errno})"
        super().__init__(message)


class NewConnectionError(ConnectionError):
    """Raised when we fail to establish a new connection to a server."""
    pass


class ConnectTimeoutError(NewConnectionError, TimeoutError):
    """Raised when a socket timeout occurs while connecting to a server."""
    pass


class ReadTimeoutError(ConnectionError, TimeoutError):
    """Raised when a socket timeout occurs while talking to a connected server."""
    pass


class HandshakeError(WebSocketError):
    """
    Raised when the server answered but the answer is not a valid
    WebSocket upgrade response.
    """

    def __init__(
        self,
        message: str,
        address: str | None = None,
        response: str | None = None,
    ) -> None:
        super().__init__(message)
        self.address = address
        self.response = response


class ResponseTooLargeError(HandshakeError):
    """Raised when the response header block exceeds the configured limit."""

    def __init__(self, address: str, limit: int, response: str | None = None) -> None:
        super().__init__(
            f"Connection to '{address}' failed: "
            f"upgrade response too large (no end of headers within {limit} bytes)",
            address=address,
            response=response,
        )
        self.limit = limit


class InvalidAcceptKeyError(HandshakeError):
    """Raised when Sec-WebSocket-Accept does not match the handshake key."""

    def __init__(
        self,
        address: str | None = None,
        response: str | None = None,
        accept_key: str | None = None,
    ) -> None:
        super().__init__("Server sent bad upgrade response.", address, response)
        self.accept_key = accept_key


class DeprecatedOptionWarning(WebSocketWarning, DeprecationWarning):
    """Warned when a deprecated handshake option is used."""
    pass
