"""
Process entry point for the MealDB Recipe Finder.

Binds the listening socket itself so a busy port can be detected up front:
if PORT is already in use, the next port is tried (PORT + 1, PORT + 2, ...)
up to PORT_RETRY_LIMIT attempts. The bound socket is then handed to uvicorn.

Run:
    python -m api.server

Press Ctrl+C to stop; the process exits with status 0.
"""

import errno
import logging
import socket
import sys
from typing import Optional, Tuple

import uvicorn

from api.config import ServerConfig

logger = logging.getLogger(__name__)


def bind_socket(host: str, port: int, retry_limit: int) -> Tuple[socket.socket, int]:
    """
    Bind a listening TCP socket, moving to the next port while the port is busy.

    Args:
        host: Address to bind (e.g., "0.0.0.0")
        port: First port to try
        retry_limit: Total number of ports to try, including the first

    Returns:
        Tuple of (bound socket, port actually bound)

    Raises:
        RuntimeError: If every port in the range is in use
        OSError: For bind errors other than "address in use"
    """
    for attempt in range(retry_limit):
        candidate = port + attempt
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, candidate))
        except OSError as e:
            sock.close()
            if e.errno != errno.EADDRINUSE:
                raise
            logger.warning("Port %d in use. Trying %d...", candidate, candidate + 1)
            continue
        return sock, candidate

    raise RuntimeError(
        f"No free port found in range {port}-{port + retry_limit - 1}. "
        "Set PORT to a free port or raise PORT_RETRY_LIMIT."
    )


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """
    Start the web server and block until it is stopped.

    Args:
        host: Bind address (optional, defaults to HOST env var)
        port: First port to try (optional, defaults to PORT env var)
    """
    log_level = ServerConfig.get_log_level()
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    host = host or ServerConfig.get_host()
    port = port if port is not None else ServerConfig.get_port()

    sock, bound_port = bind_socket(host, port, ServerConfig.get_port_retry_limit())

    config = uvicorn.Config("api.main:app", log_level=log_level.lower())
    server = uvicorn.Server(config)

    logger.info("Server started on http://localhost:%d", bound_port)
    logger.info("Open http://localhost:%d in your browser", bound_port)
    logger.info("Press Ctrl+C to stop the server")

    try:
        server.run(sockets=[sock])
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()

    logger.info("Server stopped")


def main() -> None:
    run()
    sys.exit(0)


if __name__ == "__main__":
    main()
