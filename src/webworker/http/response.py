"""
=============================================================================
RESPONSE DECISION AND HEADER WRITING
=============================================================================

Everything about the response that has to be settled BEFORE the first
byte goes out lives here.

=============================================================================
DECIDE FIRST, WRITE SECOND
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     build_response()                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   RequestHead("/index.html")                                        │
    │        │                                                            │
    │        ├──► resolve(path)        →  ContentType.HTML                │
    │        ├──► decide(head, store)  →  ResourceStatus.FOUND            │
    │        └──► now()                →  "Sun, 18 Oct 2026 12:00:00 GMT" │
    │                                                                     │
    │   Response(head, content_type, status, date)   ◄── frozen           │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

The Response is immutable. write_headers() and the content renderer both
read response.status; neither of them opens the store again to find out
whether the resource exists. One decision, one status line.

=============================================================================
WIRE FORMAT
=============================================================================

    HTTP/1.1 200 OK\r\n
    Date: Sun, 18 Oct 2026 12:00:00 GMT\r\n
    Server: WebWorker/1.0\r\n
    Connection: close\r\n
    Content-Type: text/html\r\n
    \r\n                                 ◄── header/body separator
    <body bytes...>

No Content-Length is sent. The body ends when we close the connection,
which is exactly what "Connection: close" promises the client.

=============================================================================
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Optional

from .mime_types import ContentType, resolve
from .request import RequestHead
from .status_codes import ResourceStatus
from ..store import ResourceStore


logger = logging.getLogger(__name__)

HTTP_VERSION = "HTTP/1.1"
CRLF = b"\r\n"


@dataclass(frozen=True)
class Response:
    """
    Everything needed to write one response.

    Attributes:
        head: The request this answers.
        content_type: Resolved from head.path.
        status: FOUND or NOT_FOUND, decided once.
        date: HTTP-date used for the Date header and the date marker.
    """

    head: RequestHead
    content_type: ContentType
    status: ResourceStatus
    date: str

    @property
    def path(self) -> str:
        return self.head.path

    @property
    def status_line(self) -> str:
        """e.g. "HTTP/1.1 404 Not Found"."""
        return f"{HTTP_VERSION} {self.status.code} {self.status.phrase}"


def decide(head: RequestHead, store: ResourceStore, conn_id: str = "-") -> ResourceStatus:
    """
    Decide whether the requested resource exists.

    The resource is opened and immediately closed again; the renderer
    opens it a second time when it actually needs the bytes.

    Returns:
        FOUND if the store could open the resource, NOT_FOUND otherwise
        (missing, unreadable, a directory, or an empty path).
    """
    try:
        with store.open(head.path):
            return ResourceStatus.FOUND
    except OSError as e:
        logger.info(f"[{conn_id}] File not found: {head.path!r} ({e.__class__.__name__})")
        return ResourceStatus.NOT_FOUND


def build_response(
    head: RequestHead,
    store: ResourceStore,
    now: Optional[datetime] = None,
    conn_id: str = "-",
) -> Response:
    """
    Resolve, decide and timestamp a response.

    Args:
        head: Parsed request head.
        store: Where the resource lives.
        now: Timestamp for the response (defaults to the current UTC time).
        conn_id: Connection id for log lines.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    return Response(
        head=head,
        content_type=resolve(head.path),
        status=decide(head, store, conn_id),
        date=format_http_date(now),
    )


def write_headers(response: Response, out: BinaryIO, server_name: str) -> None:
    """
    Write the status line, the four headers and the blank separator.

    Order is fixed: status line, Date, Server, Connection, Content-Type,
    blank line.

    Args:
        response: The decided response.
        out: Writable binary stream.
        server_name: Value of the Server header.
    """
    lines = [
        response.status_line,
        f"Date: {response.date}",
        f"Server: {server_name}",
        "Connection: close",
        f"Content-Type: {response.content_type.mime_type}",
    ]
    for line in lines:
        out.write(line.encode("latin-1") + CRLF)
    out.write(CRLF)


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Sun, 18 Oct 2026 12:00:00 GMT

    Aware datetimes are converted to UTC first; naive ones are assumed
    to be UTC already.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    # Weekday names (0=Monday in Python's datetime)
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )
