"""
=============================================================================
REQUEST READER
=============================================================================

Reads the request head off the connection and extracts the one thing we
care about: the TARGET PATH.

=============================================================================
WHAT WE READ
=============================================================================

    GET /index.html HTTP/1.1\r\n      ◄── "GET " found → "/index.html"
    Host: localhost:8080\r\n          ◄── read, logged, ignored
    User-Agent: curl/8.0\r\n          ◄── read, logged, ignored
    \r\n                              ◄── empty line → stop

Every other header is read (so the client's head is fully consumed) but
not interpreted.

=============================================================================
EXTRACTING THE PATH
=============================================================================

The path starts right after the "GET " token and ends at the first
whitespace character OR at the end of the line, whichever comes first:

    "GET /a.html HTTP/1.1"   →  "/a.html"
    "GET /a.html"            →  "/a.html"      (no version, end of line)
    "GET "                   →  ""             (nothing after the token)
    "GET \t/a.html"          →  ""             (whitespace right away)

The scan never looks past the end of the line, so malformed request lines
cannot blow up the reader.

=============================================================================
WHEN THINGS GO WRONG
=============================================================================

    no "GET " line before the blank line  →  path is ""
    client closes the stream early        →  stop, keep what we have
    read error / read timeout             →  log, stop, keep what we have

An empty path resolves to nothing in the store, so the caller ends up
sending a 404 instead of crashing.

=============================================================================
"""

import logging
import re
from dataclasses import dataclass
from typing import BinaryIO, Optional


logger = logging.getLogger(__name__)

GET_TOKEN = "GET "

# Everything up to the first whitespace character (possibly nothing).
_TARGET_PATTERN = re.compile(r"\S*")


@dataclass(frozen=True)
class RequestHead:
    """
    The parsed request head.

    Attributes:
        path: Target path from the request line, "" when none was found.
    """

    path: str = ""

    @property
    def has_target(self) -> bool:
        return bool(self.path)


def parse_target(line: str) -> Optional[str]:
    """
    Extract the target path from a single request line.

    Args:
        line: One decoded line, without its line terminator.

    Returns:
        The path (possibly empty) when the line contains "GET ",
        None otherwise.

    Examples:
        >>> parse_target("GET /index.html HTTP/1.1")
        '/index.html'
        >>> parse_target("Host: example.com") is None
        True
    """
    index = line.find(GET_TOKEN)
    if index < 0:
        return None
    return _TARGET_PATTERN.match(line, index + len(GET_TOKEN)).group()


def read_request_head(
    stream: BinaryIO,
    max_header_bytes: Optional[int] = None,
    conn_id: str = "-",
) -> RequestHead:
    """
    Read a request head from a blocking binary stream.

    Lines are read with stream.readline(), which blocks in the kernel until
    data arrives (or the socket timeout, if any, expires).

    Args:
        stream: Readable binary stream positioned at the request start.
        max_header_bytes: Never read more than this many bytes (plus one);
                          the line crossing the limit is discarded.
                          None means no limit.
        conn_id: Connection id used to prefix log lines.

    Returns:
        RequestHead with the extracted target path.
    """
    path = ""
    consumed = 0

    while True:
        # With a limit, never buffer more than one byte past it.
        limit = -1 if max_header_bytes is None else max_header_bytes - consumed + 1
        try:
            raw = stream.readline(limit)
        except OSError as e:
            logger.warning(f"[{conn_id}] Request read error: {e}")
            break

        if not raw:
            logger.debug(f"[{conn_id}] Stream closed before end of request head")
            break

        consumed += len(raw)
        if max_header_bytes is not None and consumed > max_header_bytes:
            logger.warning(
                f"[{conn_id}] Request head exceeds {max_header_bytes} bytes, "
                f"ignoring the rest"
            )
            break

        line = raw.decode("latin-1").rstrip("\r\n")
        logger.debug(f"[{conn_id}] Request line: ({line})")

        target = parse_target(line)
        if target is not None:
            path = target

        if not line:
            break

    return RequestHead(path=path)
