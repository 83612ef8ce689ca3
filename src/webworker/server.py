"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together:

    ServerConfig ──► FileStore(config.root)
         │
         └────────► SocketServer ──► (per connection) Worker.run()

Usage:

    from webworker import WebServer, ServerConfig

    server = WebServer(ServerConfig(port=8080, root="./www"))
    server.run()    # Blocks until Ctrl+C

=============================================================================
"""

import logging
from typing import Optional, Tuple

from .config import ServerConfig
from .core.connection import Connection
from .core.socket_server import SocketServer
from .store import FileStore, ResourceStore
from .worker import handle_connection


logger = logging.getLogger(__name__)


class WebServer:
    """
    Serves files from a resource store, one worker thread per connection.

    Args:
        config: Server configuration (defaults if omitted).
        store: Resource store; a FileStore on config.root if omitted.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        store: Optional[ResourceStore] = None,
    ):
        self.config = config or ServerConfig()
        self.store = store if store is not None else FileStore(self.config.root)
        self._socket_server = SocketServer(self.config)

    @property
    def address(self) -> Tuple[str, int]:
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    def run(self) -> None:
        """Start serving (blocking) until stop() or a shutdown signal."""
        logger.info(f"Serving {self.store!r} as {self.config.server_name}")
        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        logger.info("Server stopped")

    def stop(self) -> None:
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def _handle_connection(self, conn: Connection) -> None:
        handle_connection(conn, self.store, self.config)
