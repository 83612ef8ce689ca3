"""
=============================================================================
CORE NETWORKING LAYER
=============================================================================

Transport plumbing below the HTTP pipeline:

    socket_server.py   SocketServer  - bind, listen, accept, thread per client
    connection.py      Connection    - buffered reader/writer over one socket

Nothing in here knows about HTTP. SocketServer hands each Connection to a
callback; the callback (webworker.worker.handle_connection) does the rest.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Accept loop - one thread per connection
    "Connection",       # Client socket wrapper - buffered I/O, close once
    "ConnectionState",  # Connection lifecycle states
]
