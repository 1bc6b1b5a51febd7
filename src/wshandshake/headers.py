"""
Header resolution for the opening handshake.

Request headers are built by an ordered pipeline. Each stage returns the
headers it contributes and later stages override earlier ones, matching
names case-insensitively:

1. ``protocol_headers`` - the headers the protocol requires, plus basic
   auth taken from the URI user info.
2. ``deprecated_alias_headers`` - headers set through deprecated options
   (``origin``).
3. ``caller_headers`` - the caller's ``headers`` option, which always wins.
"""

from __future__ import annotations

import typing

from ._collections import HTTPHeaderDict
from .exceptions import InvalidArgumentError
from .options import HandshakeOptions
from .util.request import make_headers
from .util.url import Url

WS_VERSION = 13

HeaderStage = typing.Callable[[Url, str, HandshakeOptions], typing.Mapping[str, str]]


def protocol_headers(url: Url, key: str, options: HandshakeOptions) -> typing.Mapping[str, str]:
    headers = {
        "Host": url.host_header,
        "User-Agent": options.user_agent,
        "Connection": "Upgrade",
        "Upgrade": "websocket",
        "Sec-WebSocket-Key": key,
        "Sec-WebSocket-Version": str(WS_VERSION),
    }
    if url.has_credentials:
        headers.update(make_headers(basic_auth=(url.user or "", url.password or "")))
    return headers


def deprecated_alias_headers(url: Url, key: str, options: HandshakeOptions) -> typing.Mapping[str, str]:
    if options.origin is not None:
        return {"Origin": options.origin}
    return {}


def caller_headers(url: Url, key: str, options: HandshakeOptions) -> typing.Mapping[str, str]:
    return options.headers or {}


HEADER_STAGES: typing.Tuple[HeaderStage, ...] = (
    protocol_headers,
    deprecated_alias_headers,
    caller_headers,
)


def _check_header(name: str, value: str) -> None:
    if not name or any(c in name for c in "\r\n:") or name != name.strip():
        raise InvalidArgumentError(f"Invalid header name {name!r}")
    if "\r" in value or "\n" in value:
        raise InvalidArgumentError(f"Invalid value for header {name!r}: {value!r}")


def resolve_headers(
    url: Url,
    key: str,
    options: HandshakeOptions,
    stages: typing.Sequence[HeaderStage] = HEADER_STAGES,
) -> HTTPHeaderDict:
    """
    Run the header pipeline for one handshake attempt.

    :param url: Parsed target
    :param key: The attempt's ``Sec-WebSocket-Key``
    :param options: Handshake options
    :param stages: Stages in increasing order of precedence
    :raises InvalidArgumentError: If a header name or value would break the request
    """
    headers = HTTPHeaderDict()
    for stage in stages:
        headers.extend(stage(url, key, options))

    for name, value in headers.items():
        _check_header(name, value)
    return headers
