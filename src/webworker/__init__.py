"""
=============================================================================
WEBWORKER - One Request, One Response, One Thread
=============================================================================

A minimal HTTP/1.1 responder built on raw sockets. Every accepted
connection gets its own worker thread, which:

    1. reads the request head and extracts the target path
    2. resolves the content type from the path
    3. decides 200 or 404 by trying to open the resource
    4. writes the status line and headers
    5. writes the body:
         - HTML: line by line, with date/server markers expanded
         - images: raw bytes
    6. closes the connection

=============================================================================
QUICK START
=============================================================================

    $ python -m webworker --root ./www --port 8080
    $ curl -i http://127.0.0.1:8080/index.html

    HTTP/1.1 200 OK
    Date: Sun, 18 Oct 2026 12:00:00 GMT
    Server: WebWorker/1.0
    Connection: close
    Content-Type: text/html

    <html>...

Or from Python:

    from webworker import WebServer, ServerConfig

    WebServer(ServerConfig(root="./www")).run()

=============================================================================
PACKAGE LAYOUT
=============================================================================

    webworker/
    ├── __init__.py        ◄── You are here
    ├── __main__.py        ◄── CLI entry point
    ├── config.py          ◄── ServerConfig
    ├── logs.py            ◄── Logging setup
    ├── server.py          ◄── WebServer (config + store + accept loop)
    ├── store.py           ◄── ResourceStore / FileStore
    ├── worker.py          ◄── Worker: one connection, start to finish
    ├── core/
    │   ├── connection.py  ◄── Buffered socket wrapper
    │   └── socket_server.py ◄── Accept loop, thread per connection
    └── http/
        ├── request.py     ◄── Request head reader
        ├── mime_types.py  ◄── Content type resolver
        ├── status_codes.py ◄── 200 / 404
        ├── response.py    ◄── Response decision + header writer
        └── content.py     ◄── Body renderer

=============================================================================
"""

__version__ = "1.0.0"
__author__ = "WebWorker Contributors"

from .config import ServerConfig
from .server import WebServer
from .store import FileStore, ResourceStore
from .worker import Worker, handle_connection
from .core import Connection, SocketServer
from .http import (
    ContentType,
    RequestHead,
    ResourceStatus,
    Response,
    build_response,
    read_request_head,
    render,
    resolve,
    write_headers,
)

__all__ = [
    # Server
    "WebServer",
    "ServerConfig",
    "SocketServer",
    "Connection",
    # Worker
    "Worker",
    "handle_connection",
    # Store
    "ResourceStore",
    "FileStore",
    # HTTP pipeline
    "RequestHead",
    "ContentType",
    "ResourceStatus",
    "Response",
    "read_request_head",
    "resolve",
    "build_response",
    "write_headers",
    "render",
    # Metadata
    "__version__",
]
