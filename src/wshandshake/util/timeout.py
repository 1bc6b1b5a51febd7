"""
Timeout handling for wshandshake.

This module provides classes for handling timeouts.
"""

from __future__ import annotations

import typing

from ..exceptions import InvalidArgumentError

# Type for timeout values accepted from callers
_TYPE_TIMEOUT = typing.Union["Timeout", float, int]


class Timeout:
    """
    Timeout configuration.

    A handshake applies two timeouts: one bounding the TCP/TLS connect and
    one set on the established socket for every later read and write. A
    plain number sets both to the same value.
    """

    DEFAULT_TIMEOUT: typing.ClassVar[float] = 5.0

    def __init__(self, connect=None, read=None):
        """
        Initialize a new Timeout.

        :param connect: Timeout for establishing the connection, in seconds
        :param read: Timeout for reads and writes on the open socket, in seconds
        """
        self._connect = self._validate(connect, "connect")
        self._read = self._validate(read, "read")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connect={self._connect!r}, read={self._read!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timeout):
            return NotImplemented
        return (self._connect, self._read) == (other._connect, other._read)

    def __hash__(self) -> int:
        return hash((self._connect, self._read))

    @staticmethod
    def _validate(value, name):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(
                f"Timeout value {name} was {value!r}, but it must be an int or float."
            )
        if value <= 0:
            raise InvalidArgumentError(
                f"Attempted to set {name} timeout to {value}, but the "
                "timeout cannot be set to a value less than or equal to 0."
            )
        return float(value)

    @classmethod
    def from_float(cls, timeout: _TYPE_TIMEOUT) -> Timeout:
        """
        Create a Timeout from a number, or pass an existing Timeout through.

        :param timeout: Timeout value in seconds
        :return: Timeout instance
        """
        if isinstance(timeout, Timeout):
            return timeout
        return Timeout(connect=timeout, read=timeout)

    @property
    def connect_timeout(self) -> float:
        """Get the connect timeout."""
        if self._connect is None:
            return self.DEFAULT_TIMEOUT
        return self._connect

    @property
    def read_timeout(self) -> float:
        """Get the read timeout."""
        if self._read is None:
            return self.connect_timeout
        return self._read
