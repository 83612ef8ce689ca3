"""
=============================================================================
WORKER
=============================================================================

A Worker handles exactly one connection: one request in, one response out,
then the connection is closed.

=============================================================================
PIPELINE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         Worker.run()                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   with connection:                                                  │
    │       head     = read_request_head(reader)    ◄── blocks            │
    │       response = build_response(head, store)  ◄── status decided    │
    │       write_headers(response, writer)         ◄── first byte out    │
    │       render(response, store, writer)                               │
    │       flush()                                                       │
    │   # closed here, whatever happened above                            │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ERRORS
=============================================================================

    OSError (client went away, timeout, disk error)  →  WARNING, abandon
    anything else                                    →  ERROR + traceback

Either way the connection is closed exactly once and the exception does
not leave the worker; other connections are never affected.

=============================================================================
"""

import logging
import time
from typing import Optional

from .config import ServerConfig
from .core.connection import Connection, ConnectionState
from .http.request import read_request_head
from .http.response import Response, build_response, write_headers
from .http.content import render
from .logs import access_logger
from .store import FileStore, ResourceStore


logger = logging.getLogger(__name__)


class Worker:
    """
    Handles one connection from request to close.

    Args:
        connection: The client connection (owned by this worker from now on).
        store: Resource store to serve from; a FileStore on config.root
               when omitted.
        config: Server configuration; defaults when omitted.
    """

    def __init__(
        self,
        connection: Connection,
        store: Optional[ResourceStore] = None,
        config: Optional[ServerConfig] = None,
    ):
        self.connection = connection
        self.config = config or ServerConfig()
        self.store = store if store is not None else FileStore(self.config.root)
        self.response: Optional[Response] = None

    def run(self) -> Optional[Response]:
        """
        Serve the connection.

        Returns:
            The response that was written, or None if the connection failed
            before a response could be decided.
        """
        conn = self.connection
        start = time.perf_counter()
        logger.debug(f"[{conn.id}] Handling connection from {conn.client_ip}")

        try:
            with conn:
                self._serve(conn)
        except OSError as e:
            logger.warning(f"[{conn.id}] Output error: {e}")
        except Exception:
            logger.exception(f"[{conn.id}] Unexpected error while handling connection")

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"[{conn.id}] Done handling connection ({duration_ms:.2f}ms)")
        return self.response

    def _serve(self, conn: Connection) -> None:
        config = self.config

        conn.state = ConnectionState.READING
        head = read_request_head(
            conn.reader,
            max_header_bytes=config.max_header_bytes,
            conn_id=conn.id,
        )

        self.response = response = build_response(head, self.store, conn_id=conn.id)
        access_logger.info(
            f'{conn.client_ip} "GET {head.path}" {response.status} '
            f"{response.content_type.mime_type}"
        )

        conn.state = ConnectionState.WRITING
        write_headers(response, conn.writer, config.server_name)
        render(response, self.store, conn.writer, config.server_name, config.markers)
        conn.flush()


def handle_connection(
    connection: Connection,
    store: Optional[ResourceStore],
    config: ServerConfig,
) -> Optional[Response]:
    """Run a Worker on a connection; the thread target used by the server."""
    return Worker(connection, store, config).run()
