"""
=============================================================================
CONTENT RENDERER
=============================================================================

Writes the response body once the headers are out.

    ┌──────────────┬─────────────────────────────┬─────────────────────────┐
    │              │  FOUND                      │  NOT_FOUND              │
    ├──────────────┼─────────────────────────────┼─────────────────────────┤
    │  text (html) │  copy lines, expand markers │  <h1>404 Not Found</h1> │
    │  binary      │  copy bytes verbatim        │  (empty body)           │
    └──────────────┴─────────────────────────────┴─────────────────────────┘

=============================================================================
TEMPLATE MARKERS
=============================================================================

HTML documents may contain two marker tokens. The line holding a marker is
written unchanged, and the dynamic text is written right AFTER it:

    source line:    <p>Today is <cs371date></p>\n
    written:        <p>Today is <cs371date></p>\n
                    Sun, 18 Oct 2026 12:00:00 GMT

    source line:    <footer><cs371server></footer>\n
    written:        <footer><cs371server></footer>\n
                    <br>\nWebWorker/1.0<br>

Lines are handled as bytes, so line endings (\n, \r\n, or none on the last
line) and any non-ASCII content pass through untouched.

=============================================================================
"""

import logging
import shutil
from dataclasses import dataclass
from typing import BinaryIO

from .response import Response
from ..store import ResourceStore


logger = logging.getLogger(__name__)

NOT_FOUND_BODY = b"<h1>404 Not Found</h1>"

DEFAULT_DATE_MARKER = "<cs371date>"
DEFAULT_SERVER_MARKER = "<cs371server>"


@dataclass(frozen=True)
class Markers:
    """Marker tokens recognised in HTML documents."""

    date: str = DEFAULT_DATE_MARKER
    server: str = DEFAULT_SERVER_MARKER


def server_fragment(server_name: str) -> bytes:
    """HTML appended after a line holding the server marker."""
    return f"<br>\n{server_name}<br>".encode("utf-8")


def render(
    response: Response,
    store: ResourceStore,
    out: BinaryIO,
    server_name: str,
    markers: Markers = Markers(),
) -> None:
    """
    Write the body for a decided response.

    Args:
        response: The decided response (status and type are final).
        store: Store the resource is read from.
        out: Writable binary stream, headers already written.
        server_name: Used in the server marker fragment.
        markers: Marker tokens to look for in HTML documents.
    """
    if response.content_type.is_binary:
        render_binary(response, store, out)
    else:
        render_text(response, store, out, server_name, markers)


def render_text(
    response: Response,
    store: ResourceStore,
    out: BinaryIO,
    server_name: str,
    markers: Markers = Markers(),
) -> None:
    """Copy an HTML document line by line, expanding markers."""
    if not response.status.is_found:
        out.write(NOT_FOUND_BODY)
        return

    date_token = markers.date.encode("utf-8")
    server_token = markers.server.encode("utf-8")
    date_text = response.date.encode("latin-1")
    fragment = server_fragment(server_name)

    with store.open(response.path) as source:
        for line in source:
            out.write(line)
            if date_token in line:
                out.write(date_text)
            if server_token in line:
                out.write(fragment)


def render_binary(response: Response, store: ResourceStore, out: BinaryIO) -> None:
    """Copy a binary resource unmodified; nothing at all for NOT_FOUND."""
    if not response.status.is_found:
        return

    with store.open(response.path) as source:
        shutil.copyfileobj(source, out)
