"""
=============================================================================
CONTENT TYPE RESOLUTION
=============================================================================

Maps a request's target path to the MIME type announced in the
Content-Type header and to the rendering strategy used for the body.

=============================================================================
THE FIVE TYPES WE KNOW ABOUT
=============================================================================

    ┌──────────────┬──────────────────┬──────────────────────────────────┐
    │  ContentType │  MIME string     │  Body rendering                  │
    ├──────────────┼──────────────────┼──────────────────────────────────┤
    │  HTML        │  text/html       │  line by line, markers expanded  │
    │  GIF         │  image/gif       │  raw bytes                       │
    │  JPEG        │  image/jpeg      │  raw bytes                       │
    │  PNG         │  image/png       │  raw bytes                       │
    │  ICON        │  image/x-icon    │  raw bytes                       │
    └──────────────┴──────────────────┴──────────────────────────────────┘

Anything that is not recognised as an image is served as HTML.

=============================================================================
SUBSTRING, NOT SUFFIX
=============================================================================

Resolution looks for the marker ANYWHERE in the path, case-insensitively,
in a fixed priority order:

    1. ".gif"   →  GIF
    2. ".jpeg"  →  JPEG
    3. ".png"   →  PNG
    4. "ico"    →  ICON     (note: no dot!)
    5. otherwise →  HTML

So "/favicon.ico" is an icon, but so is "/picoblog.html" and
"/icons/index.html". This loose match is long-standing behaviour that
clients rely on; do not tighten it to a suffix check.

    >>> resolve("/logo.PNG")
    <ContentType.PNG: 'image/png'>
    >>> resolve("/images.gif/readme.png")
    <ContentType.GIF: 'image/gif'>

=============================================================================
"""

from enum import Enum


class ContentType(Enum):
    """
    Response content category.

    The value is the MIME string written in the Content-Type header.
    """

    HTML = "text/html"
    GIF = "image/gif"
    JPEG = "image/jpeg"
    PNG = "image/png"
    ICON = "image/x-icon"

    @property
    def mime_type(self) -> str:
        """The Content-Type header value."""
        return self.value

    @property
    def is_text(self) -> bool:
        """True when the body is rendered line by line with markers."""
        return self is ContentType.HTML

    @property
    def is_binary(self) -> bool:
        """True when the body is copied verbatim."""
        return not self.is_text


# Checked in order; first hit wins.
_MARKERS = (
    (".gif", ContentType.GIF),
    (".jpeg", ContentType.JPEG),
    (".png", ContentType.PNG),
    ("ico", ContentType.ICON),
)


def resolve(path: str) -> ContentType:
    """
    Resolve the content type for a target path.

    Pure function: no I/O, same answer for the same path.

    Args:
        path: Target path extracted from the request line (may be empty).

    Returns:
        The matching ContentType, HTML when nothing matches.
    """
    lowered = path.lower()
    for marker, content_type in _MARKERS:
        if marker in lowered:
            return content_type
    return ContentType.HTML
