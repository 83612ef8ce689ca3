"""
=============================================================================
CONNECTION
=============================================================================

Wraps one accepted client socket for exactly one request/response cycle.

=============================================================================
READING LINES FROM A BYTE STREAM
=============================================================================

TCP delivers a byte stream, not lines. socket.makefile("rb") gives us a
buffered reader on top of the socket, and readline() on that reader:

    - BLOCKS in the kernel until data arrives (no sleep-and-poll loop)
    - returns exactly one line, terminator included
    - returns b"" when the client closed its side

If a read timeout is configured, a blocked readline() raises
socket.timeout (an OSError) instead of waiting forever.

=============================================================================
ONE CONNECTION, ONE RESPONSE
=============================================================================

    ┌─────────┐   accept()   ┌─────────┐  read head   ┌─────────┐
    │ (none)  │ ───────────► │  OPEN   │ ───────────► │ READING │
    └─────────┘              └─────────┘              └────┬────┘
                                                           │ write
                             ┌─────────┐    close()   ┌────▼────┐
                             │ CLOSED  │ ◄─────────── │ WRITING │
                             └─────────┘              └─────────┘

We always answer with "Connection: close", so there is no keep-alive
state. close() may be called any number of times from any state; only the
first call does anything.

=============================================================================
"""

import logging
import socket
import time
import uuid
from enum import Enum
from typing import BinaryIO, Optional, Tuple


logger = logging.getLogger(__name__)

# Upper bounds for reading leftover client data while closing
DRAIN_TIMEOUT = 0.5
DRAIN_MAX_BYTES = 64 * 1024


class ConnectionState(Enum):
    """Lifecycle of a connection, used for logging and idempotent close."""

    OPEN = "open"
    READING = "reading"
    WRITING = "writing"
    CLOSED = "closed"


class Connection:
    """
    A client connection with buffered binary reader and writer.

    Usually created with from_socket(); tests can use from_streams() with
    in-memory buffers instead of a real socket.

        with Connection.from_socket(client_socket, address) as conn:
            line = conn.reader.readline()
            conn.writer.write(b"HTTP/1.1 200 OK\\r\\n")
        # flushed and closed here
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        address: Tuple[str, int] = ("-", 0),
        sock: Optional[socket.socket] = None,
    ):
        self.reader = reader
        self.writer = writer
        self.address = address
        self.socket = sock
        self.id = uuid.uuid4().hex[:8]
        self.state = ConnectionState.OPEN

    @classmethod
    def from_socket(
        cls,
        sock: socket.socket,
        address: Tuple[str, int],
        timeout: Optional[float] = None,
    ) -> "Connection":
        """
        Wrap an accepted client socket.

        Args:
            sock: Socket returned by accept().
            address: Peer address returned by accept().
            timeout: Read timeout in seconds, None to block indefinitely.
        """
        # The listening socket has an accept timeout; don't inherit it.
        sock.setblocking(True)
        sock.settimeout(timeout)
        return cls(
            reader=sock.makefile("rb"),
            writer=sock.makefile("wb"),
            address=address,
            sock=sock,
        )

    @classmethod
    def from_streams(
        cls,
        reader: BinaryIO,
        writer: BinaryIO,
        address: Tuple[str, int] = ("-", 0),
    ) -> "Connection":
        """Wrap a pair of file objects (no socket underneath)."""
        return cls(reader=reader, writer=writer, address=address)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    def flush(self) -> None:
        """Push buffered response bytes to the client."""
        self.writer.flush()

    def close(self) -> None:
        """
        Flush and close the connection. Safe to call more than once.

        Errors from a peer that already went away are logged at DEBUG and
        otherwise ignored; there is nobody left to tell.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSED

        try:
            self.writer.flush()
        except OSError as e:
            logger.debug(f"[{self.id}] Flush on close failed: {e}")

        for stream in (self.writer, self.reader):
            try:
                stream.close()
            except OSError as e:
                logger.debug(f"[{self.id}] Stream close failed: {e}")

        if self.socket is not None:
            self._close_socket()

        logger.debug(f"[{self.id}] Connection closed")

    def _close_socket(self) -> None:
        try:
            # FIN to the client: the body is complete.
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        try:
            # Drain whatever the client still sends so close() doesn't RST,
            # bounded in total time and bytes.
            deadline = time.monotonic() + DRAIN_TIMEOUT
            drained = 0
            while drained < DRAIN_MAX_BYTES:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                chunk = self.socket.recv(1024)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"Connection(id={self.id!r}, address={self.address!r}, state={self.state.value})"
