"""
Socket helpers for wshandshake.
"""

from __future__ import annotations

import logging
import socket
import typing

log = logging.getLogger(__name__)

_TYPE_SOCKET_OPTIONS = typing.Sequence[typing.Tuple[int, int, typing.Union[int, bytes]]]

default_socket_options: _TYPE_SOCKET_OPTIONS = [(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)]


def create_connection(
    address: tuple[str, int],
    timeout: float | None = None,
    socket_options: _TYPE_SOCKET_OPTIONS | None = None,
) -> socket.socket:
    """
    Connect to *address* and return the socket object.

    Tries every address returned by ``getaddrinfo`` in turn and returns the
    first socket that connects. If all of them fail, the error from the last
    attempt is raised. Socket options are applied before connecting.

    :param address: ``(host, port)`` pair
    :param timeout: Connect timeout in seconds
    :param socket_options: ``setsockopt`` triples applied to the new socket
    :raises OSError: If no address could be connected to
    """
    host, port = address
    if host.startswith("["):
        host = host.strip("[]")

    err: OSError | None = None
    for res in socket.getaddrinfo(host, port, allowed_gai_family(), socket.SOCK_STREAM):
        af, socktype, proto, canonname, sa = res
        sock = None
        try:
            sock = socket.socket(af, socktype, proto)
            _set_socket_options(sock, socket_options)
            if timeout is not None:
                sock.settimeout(timeout)
            log.debug(f"Connecting to {sa}")
            sock.connect(sa)
            # Break explicitly a reference cycle
            err = None
            return sock
        except OSError as _:
            err = _
            if sock is not None:
                sock.close()

    if err is not None:
        try:
            raise err
        finally:
            # Break explicitly a reference cycle
            err = None
    raise OSError("getaddrinfo returns an empty list")


def _set_socket_options(sock: socket.socket, options: _TYPE_SOCKET_OPTIONS | None) -> None:
    if options is None:
        return
    for opt in options:
        sock.setsockopt(*opt)


def allowed_gai_family() -> socket.AddressFamily:
    """
    Returns the address family to pass to ``getaddrinfo``: ``AF_UNSPEC``
    when the host has IPv6, ``AF_INET`` otherwise.
    """
    if HAS_IPV6:
        return socket.AF_UNSPEC
    return socket.AF_INET


def _has_ipv6(host: str) -> bool:
    """Returns True if the system can bind an IPv6 address."""
    sock = None
    has_ipv6 = False

    if socket.has_ipv6:
        try:
            sock = socket.socket(socket.AF_INET6)
            sock.bind((host, 0))
            has_ipv6 = True
        except OSError:
            pass

    if sock:
        sock.close()
    return has_ipv6


HAS_IPV6 = _has_ipv6("::1")
