#!/usr/bin/env python3
"""
Example performing a WebSocket opening handshake with wshandshake.

Connects to a ws:// or wss:// URI given on the command line, prints the
server's upgrade response and closes the socket.
"""

import logging
import sys

import wshandshake
from wshandshake.exceptions import ConnectionError, HandshakeError

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("handshake_example")


def handshake_example(uri):
    """Run one handshake against *uri*."""
    logger.info(f"Connecting to {uri}...")

    try:
        conn = wshandshake.connect(
            uri,
            timeout=5,
            headers={"Origin": "https://example.com"},
        )
    except ConnectionError as e:
        logger.error(f"Could not reach {e.host}:{e.port}: {e.reason}")
        return 1
    except HandshakeError as e:
        logger.error(f"Handshake refused: {e}")
        return 1

    try:
        logger.info("Connected!")
        logger.info(f"Upgrade response:\n{conn.response}")
        logger.info(f"Frames should be sent in chunks of {conn.fragment_size} bytes")
    finally:
        logger.info("Closing connection...")
        conn.close()

    return 0


def main():
    """Run the handshake example."""
    if "-v" in sys.argv:
        wshandshake.add_stderr_logger()
    args = [arg for arg in sys.argv[1:] if arg != "-v"]
    uri = args[0] if args else "wss://echo.websocket.org"
    return handshake_example(uri)


if __name__ == "__main__":
    sys.exit(main())
