"""
Utility functions for wshandshake.
"""

from __future__ import annotations

from .connection import (  # noqa: F401
    allowed_gai_family,
    create_connection,
    default_socket_options,
)
from .request import (  # noqa: F401
    encode_request,
    generate_key,
    make_headers,
)
from .response import (  # noqa: F401
    WS_GUID,
    accept_key_matches,
    compute_accept_key,
    extract_accept_key,
    read_response_head,
)
from .ssl_ import (  # noqa: F401
    create_wshandshake_context,
    is_ipaddress,
    ssl_wrap_socket,
)
from .timeout import Timeout  # noqa: F401
from .url import (  # noqa: F401
    Url,
    parse_url,
)

__all__ = (
    "Timeout",
    "Url",
    "WS_GUID",
    "accept_key_matches",
    "allowed_gai_family",
    "compute_accept_key",
    "create_connection",
    "create_wshandshake_context",
    "default_socket_options",
    "encode_request",
    "extract_accept_key",
    "generate_key",
    "is_ipaddress",
    "make_headers",
    "parse_url",
    "read_response_head",
    "ssl_wrap_socket",
)
