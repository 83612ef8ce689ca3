"""
=============================================================================
HTTP PIPELINE
=============================================================================

The per-connection request/response pipeline, one module per stage:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   request.py       read_request_head()   bytes    → RequestHead     │
    │   mime_types.py    resolve()             path     → ContentType     │
    │   response.py      build_response()      head     → Response        │
    │                    write_headers()       Response → status+headers  │
    │   content.py       render()              Response → body            │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

Each stage receives the immutable value produced by the one before it.

=============================================================================
"""

from .request import RequestHead, parse_target, read_request_head
from .mime_types import ContentType, resolve
from .status_codes import ResourceStatus
from .response import Response, build_response, decide, format_http_date, write_headers
from .content import Markers, NOT_FOUND_BODY, render

__all__ = [
    # Request
    "RequestHead",
    "parse_target",
    "read_request_head",
    # Content type
    "ContentType",
    "resolve",
    # Status
    "ResourceStatus",
    # Response
    "Response",
    "build_response",
    "decide",
    "format_http_date",
    "write_headers",
    # Body
    "Markers",
    "NOT_FOUND_BODY",
    "render",
]
