"""
SSL utilities for wshandshake.
"""

from __future__ import annotations

import socket
import ssl
from typing import Optional, Union

import certifi

from ..exceptions import InvalidArgumentError

# For mocking in tests
SSLContext = ssl.SSLContext


def is_ipaddress(hostname: Union[str, bytes]) -> bool:
    """
    Detects whether the hostname given is an IP address.

    Args:
        hostname: The hostname to check.

    Returns:
        True if the hostname is an IP address, False otherwise.
    """
    if isinstance(hostname, bytes):
        # IDN A-label bytes are ASCII compatible.
        hostname = hostname.decode("ascii")

    # IPv6 addresses with zone IDs contain '%'
    hostname = hostname.split("%")[0]

    for family in (socket.AF_INET, socket.AF_INET6):
        try:
            socket.inet_pton(family, hostname)
            return True
        except (OSError, ValueError):
            continue
    return False


def create_wshandshake_context(
    cert_reqs: Optional[int] = None,
    options: Optional[int] = None,
    ciphers: Optional[str] = None,
    ssl_minimum_version: Optional[int] = None,
    ca_certs: Optional[str] = None,
) -> ssl.SSLContext:
    """
    Creates and configures an :class:`ssl.SSLContext` for ``wss`` connections.

    Certificates are verified against the ``certifi`` CA bundle unless
    ``ca_certs`` names another one.

    Args:
        cert_reqs: The certificate requirements.
        options: The SSL options.
        ciphers: The ciphers to use.
        ssl_minimum_version: The minimum TLS version to use.
        ca_certs: Path to a CA bundle replacing the certifi one.

    Returns:
        The configured SSL context.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

    cert_reqs = ssl.CERT_REQUIRED if cert_reqs is None else cert_reqs

    if options is None:
        options = 0
        # Disable compression to prevent CRIME attacks for OpenSSL 1.0+
        options |= getattr(ssl, "OP_NO_COMPRESSION", 0)

    context.options |= options

    if ssl_minimum_version is None:
        ssl_minimum_version = ssl.TLSVersion.TLSv1_2
    context.minimum_version = ssl_minimum_version

    if cert_reqs == ssl.CERT_NONE:
        context.check_hostname = False
    context.verify_mode = cert_reqs

    if ciphers:
        context.set_ciphers(ciphers)

    if context.verify_mode != ssl.CERT_NONE:
        context.load_verify_locations(cafile=ca_certs or certifi.where())

    return context


def ssl_wrap_socket(
    sock: socket.socket,
    server_hostname: Optional[str] = None,
    ssl_context: Optional[ssl.SSLContext] = None,
) -> ssl.SSLSocket:
    """
    Wraps a connected socket with TLS.

    Args:
        sock: The socket to wrap.
        server_hostname: The server hostname, used for SNI and certificate
            matching.
        ssl_context: The SSL context to use. A default one is created when
            none is given.

    Returns:
        The wrapped socket.
    """
    if ssl_context is None:
        ssl_context = create_wshandshake_context()
    elif not isinstance(ssl_context, SSLContext):
        raise InvalidArgumentError(
            f"Stream context {ssl_context!r} isn't a valid ssl.SSLContext"
        )

    # Without hostname checking an IP literal has no use as a server name.
    if (
        server_hostname is not None
        and not ssl_context.check_hostname
        and is_ipaddress(server_hostname)
    ):
        server_hostname = None

    return ssl_context.wrap_socket(sock, server_hostname=server_hostname)
