"""
=============================================================================
TCP ACCEPT LOOP
=============================================================================

Listens on a TCP port, accepts clients and hands every accepted socket to
a brand new worker thread.

=============================================================================
THREAD PER CONNECTION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   Listening socket (main thread)                                    │
    │        │                                                            │
    │        ├── accept() ──► Connection ──► Thread ──► Worker.run()      │
    │        ├── accept() ──► Connection ──► Thread ──► Worker.run()      │
    │        └── accept() ──► Connection ──► Thread ──► Worker.run()      │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

Workers share nothing: no cache, no pool, no queue. A worker thread lives
for exactly one request and then exits.

=============================================================================
SHUTDOWN
=============================================================================

accept() is given a 1 second timeout so the loop notices when _running is
cleared, either by shutdown() from another thread or by SIGINT/SIGTERM.
Worker threads are daemons; whatever they are doing when the process exits
is cut short, which for a one-shot "Connection: close" response is no
worse than the client disconnecting.

=============================================================================
"""

import logging
import signal
import socket
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


ConnectionHandler = Callable[[Connection], object]


class SocketServer:
    """
    TCP server that spawns one thread per accepted connection.

    Usage:
        def handle(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle)  # Blocks until shutdown()
    """

    def __init__(self, config: ServerConfig):
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the listening socket is bound (tests wait on this)
        self._ready_event = threading.Event()
        self._shutdown_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """The bound address; the real port once started with port 0."""
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Rebind immediately after a restart instead of waiting out TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Accept timeout so the loop can observe _running
        sock.settimeout(1.0)

        return sock

    def _setup_signals(self):
        """
        Install SIGINT/SIGTERM handlers for graceful shutdown.

        Signal handlers can only be installed from the main thread; when the
        server runs in a background thread (tests, embedding) this is skipped.
        """
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: ConnectionHandler):
        """
        Bind, listen and accept until shutdown() is called.

        Args:
            connection_handler: Called in a fresh thread for every
                                accepted connection.

        Raises:
            OSError: If the address cannot be bound.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)

        self._running = True
        self._shutdown_event.clear()
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: ConnectionHandler):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                # Socket error - usually means we're shutting down
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection.from_socket(
                client_socket,
                client_address,
                timeout=self.config.read_timeout,
            )

            worker = threading.Thread(
                target=connection_handler,
                args=(conn,),
                name=f"worker-{conn.id}",
                daemon=True,
            )
            worker.start()

    def shutdown(self):
        """Stop accepting connections. Idempotent."""
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False
        self._shutdown_event.set()

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._ready_event.clear()
        self._shutdown_event.set()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Wait until the listening socket is bound. True if it is."""
        return self._ready_event.wait(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """Wait for the server to shut down. True if it did."""
        return self._shutdown_event.wait(timeout)
