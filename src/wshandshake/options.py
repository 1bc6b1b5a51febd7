"""
Handshake configuration for wshandshake.

:class:`HandshakeOptions` is an immutable value. Callers build their own
by replacing fields of :data:`DEFAULT_OPTIONS`; nothing in the library
mutates an options instance.
"""

from __future__ import annotations

import dataclasses
import ssl
import types
import typing
import warnings
from dataclasses import dataclass, field

from ._version import __version__
from .exceptions import DeprecatedOptionWarning, InvalidArgumentError
from .util.connection import default_socket_options
from .util.response import DEFAULT_MAX_RESPONSE_SIZE
from .util.timeout import Timeout

DEFAULT_USER_AGENT = f"python-wshandshake/{__version__}"
DEFAULT_FRAGMENT_SIZE = 4096

_TYPE_HEADERS = typing.Union[
    typing.Mapping[str, str], typing.Iterable[typing.Tuple[str, str]], None
]


@dataclass(frozen=True)
class HandshakeOptions:
    """
    Options for a single WebSocket opening handshake.

    :param timeout: Seconds allowed for the connect and for each later read
        and write, or a :class:`~wshandshake.util.timeout.Timeout`
    :param fragment_size: Frame payload size for the framing layer; only
        carried through the handshake
    :param context: Pre-built :class:`ssl.SSLContext` for ``wss``; a default
        one using the certifi CA bundle is created when None
    :param headers: Headers that set or override the generated ones, matched
        case-insensitively
    :param origin: Deprecated, use ``headers={"Origin": ...}`` instead
    :param max_response_size: Largest accepted response header block in bytes
    :param user_agent: Value of the ``User-Agent`` header
    :param socket_options: ``setsockopt`` triples applied before connecting
    """

    timeout: typing.Union[Timeout, float, int] = Timeout.DEFAULT_TIMEOUT
    fragment_size: int = DEFAULT_FRAGMENT_SIZE
    context: typing.Optional[ssl.SSLContext] = None
    headers: _TYPE_HEADERS = None
    origin: typing.Optional[str] = None
    max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE
    user_agent: str = DEFAULT_USER_AGENT
    socket_options: typing.Optional[typing.Sequence[tuple]] = field(
        default=tuple(default_socket_options)
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "timeout", Timeout.from_float(self.timeout))

        if self.context is not None and not isinstance(self.context, ssl.SSLContext):
            raise InvalidArgumentError(
                f"Stream context in options.context isn't a valid context: {self.context!r}"
            )

        for name in ("fragment_size", "max_response_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive integer, not {value!r}")

        if self.headers is not None:
            try:
                headers = dict(self.headers)
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(f"headers must be a mapping of name to value: {e}") from None
            for name, value in headers.items():
                if not isinstance(name, str):
                    raise InvalidArgumentError(f"Header names must be strings, not {name!r}")
                if isinstance(value, bool) or not isinstance(value, (str, int)):
                    raise InvalidArgumentError(
                        f"Value for header {name!r} must be a string or an integer, not {value!r}"
                    )
                headers[name] = str(value)
            object.__setattr__(self, "headers", types.MappingProxyType(headers))

        if self.socket_options is not None:
            object.__setattr__(self, "socket_options", tuple(self.socket_options))

        if self.origin is not None:
            _warn_origin(stacklevel=4)

    def replace(self, *, _stacklevel: int = 2, **changes: typing.Any) -> HandshakeOptions:
        """
        Return new options with *changes* merged over these ones.

        The ``origin`` deprecation warning is only emitted when *changes*
        sets it, and points at the caller *_stacklevel* frames up.

        :raises InvalidArgumentError: On an unknown option name or a bad value
        """
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise InvalidArgumentError(f"Unknown handshake options: {', '.join(sorted(unknown))}")

        sets_origin = changes.get("origin") is not None
        origin = changes.pop("origin", self.origin)
        options = dataclasses.replace(self, origin=None, **changes)
        object.__setattr__(options, "origin", origin)
        if sets_origin:
            _warn_origin(stacklevel=_stacklevel + 1)
        return options


def _warn_origin(stacklevel: int) -> None:
    warnings.warn(
        "The 'origin' option is deprecated, "
        "set an 'Origin' header through 'headers' instead.",
        DeprecatedOptionWarning,
        stacklevel=stacklevel,
    )


DEFAULT_OPTIONS = HandshakeOptions()
