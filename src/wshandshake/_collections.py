"""
Collections for wshandshake.

This module provides specialized container datatypes.
"""

from __future__ import annotations

import typing
from collections.abc import Mapping, MutableMapping


class HTTPHeaderDict(MutableMapping[str, str]):
    """
    A case-insensitive mapping of HTTP headers.

    This class allows for case-insensitive lookups of HTTP headers while
    preserving the insertion order of the headers. Setting an existing
    header replaces both its value and the spelling of its name, but the
    header keeps its original position.
    """

    def __init__(self, headers=None, **kwargs):
        """
        Initialize a new HTTPHeaderDict.

        :param headers: Initial headers to add
        :param kwargs: Additional headers to add
        """
        self._container: dict[str, tuple[str, str]] = {}
        if headers is not None:
            if isinstance(headers, HTTPHeaderDict):
                self._container = headers._container.copy()
            else:
                self.extend(headers)
        if kwargs:
            self.extend(kwargs)

    def __getitem__(self, key):
        return self._container[key.lower()][1]

    def __setitem__(self, key, value):
        if isinstance(key, bytes):
            key = key.decode("ascii")
        self._container[key.lower()] = (key, str(value))

    def __delitem__(self, key):
        del self._container[key.lower()]

    def __iter__(self):
        return (key for key, value in self._container.values())

    def __len__(self):
        return len(self._container)

    def __contains__(self, key):
        if not isinstance(key, str):
            return False
        return key.lower() in self._container

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return False
        if not isinstance(other, HTTPHeaderDict):
            other = HTTPHeaderDict(other)
        return dict(self.lower_items()) == dict(other.lower_items())

    def __repr__(self):
        return f"{type(self).__name__}({dict(self.items())})"

    def copy(self) -> HTTPHeaderDict:
        """Return a copy of this HTTPHeaderDict."""
        return HTTPHeaderDict(self)

    def extend(self, headers: typing.Any = None, **kwargs: str) -> None:
        """
        Set headers from another source, overriding existing ones.

        :param headers: A mapping or an iterable of ``(name, value)`` pairs
        :param kwargs: Additional headers to set
        """
        if headers is not None:
            if isinstance(headers, Mapping):
                pairs = headers.items()
            else:
                pairs = headers
            for key, value in pairs:
                self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def lower_items(self) -> typing.Iterator[tuple[str, str]]:
        """Get all headers as lowercase key-value pairs."""
        return ((key.lower(), value) for key, value in self.items())
