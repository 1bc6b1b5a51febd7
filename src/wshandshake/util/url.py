"""
URI parsing for wshandshake.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

import idna

from ..exceptions import BadURIError, URLSchemeUnknown

DEFAULT_PORTS = {"ws": 80, "wss": 443}


@dataclass(frozen=True)
class Url:
    """
    Immutable description of a WebSocket endpoint.

    Built once per connection attempt by :func:`parse_url`.
    """

    scheme: str
    host: str
    port: int
    user: typing.Optional[str] = None
    password: typing.Optional[str] = None
    path: str = "/"
    query: str = ""
    fragment: str = ""

    @property
    def is_secure(self) -> bool:
        return self.scheme == "wss"

    @property
    def has_credentials(self) -> bool:
        """Whether the URI carried a non-empty user or password."""
        return bool(self.user or self.password)

    @property
    def request_uri(self) -> str:
        """
        Path with query and fragment, as sent on the request line.

        The query and the fragment are only appended when non-empty.
        """
        uri = self.path
        if self.query:
            uri += "?" + self.query
        if self.fragment:
            uri += "#" + self.fragment
        return uri

    @property
    def netloc_host(self) -> str:
        """Host suitable for a URL or a Host header (IPv6 literals bracketed)."""
        if ":" in self.host:
            return f"[{self.host}]"
        return self.host

    @property
    def host_header(self) -> str:
        return f"{self.netloc_host}:{self.port}"

    @property
    def address(self) -> str:
        """Human readable target used in error messages."""
        return f"{self.scheme}://{self.netloc_host}{self.request_uri}"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host_header}{self.request_uri}"

    def __str__(self) -> str:
        return self.url


def _idna_encode(uri: str, host: str) -> str:
    if host.isascii():
        return host
    try:
        return idna.encode(host, uts46=True).decode("ascii")
    except idna.IDNAError:
        raise BadURIError(uri, f"Name '{host}' is not a valid IDNA label") from None


def parse_url(uri: str) -> Url:
    """
    Split a ``ws://`` or ``wss://`` URI into a :class:`Url`.

    Missing parts are filled in with defaults: port 80 for ``ws`` and 443
    for ``wss``, path ``/``, empty query and fragment.

    :param uri: The URI to parse
    :raises BadURIError: If the URI has no scheme or host, or an invalid port
    :raises URLSchemeUnknown: If the scheme is not exactly ``ws`` or ``wss``
    """
    if not isinstance(uri, str):
        raise BadURIError(repr(uri))

    try:
        parsed = urlsplit(uri)
        port = parsed.port
    except ValueError:
        raise BadURIError(uri) from None

    if not parsed.scheme or not parsed.hostname:
        raise BadURIError(uri)

    # urlsplit lowercases the scheme; the scheme check is case-sensitive.
    scheme = uri[: len(parsed.scheme)]
    if scheme not in DEFAULT_PORTS:
        raise URLSchemeUnknown(uri, scheme)

    user = unquote(parsed.username) if parsed.username is not None else None
    password = unquote(parsed.password) if parsed.password is not None else None

    return Url(
        scheme=scheme,
        host=_idna_encode(uri, parsed.hostname),
        port=port if port is not None else DEFAULT_PORTS[scheme],
        user=user,
        password=password,
        path=parsed.path or "/",
        query=parsed.query,
        fragment=parsed.fragment,
    )
