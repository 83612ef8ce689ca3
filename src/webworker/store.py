"""
=============================================================================
RESOURCE STORE
=============================================================================

Where response bodies come from. The worker only needs "a named, openable,
readable byte resource", so the store is a tiny protocol with one method:

    store.open(name)  →  binary file object  (or raises OSError)

FileStore is the implementation used by the server. It maps a target path
onto the local filesystem:

    root = "/srv/www"

    "/index.html"        →  /srv/www/index.html
    "/img/logo.png"      →  /srv/www/img/logo.png
    "notes.txt"          →  /srv/www/notes.txt
    ""                   →  (nothing, always missing)

=============================================================================
TRUST BOUNDARY
=============================================================================

The target path comes straight off the wire and is NOT sanitized. A
request for "/../etc/passwd" is looked up as root + "../etc/passwd" and
the operating system resolves the "..". Serving trees containing
sensitive siblings, or exposing the server to untrusted clients, is the
deployer's call. Changing this changes observable behaviour and has to be
an explicit decision, not a side effect of a refactor.

=============================================================================
"""

import os
from typing import BinaryIO, Protocol


class ResourceStore(Protocol):
    """Anything that can open a named resource for binary reading."""

    def open(self, name: str) -> BinaryIO:
        ...


class FileStore:
    """
    Read-only view of a directory on the local filesystem.

    Args:
        root: Directory target paths are resolved against.
    """

    def __init__(self, root: str = "."):
        self.root = root

    def locate(self, name: str) -> str:
        """Map a target path to a filesystem path (no sanitization)."""
        return os.path.join(self.root, name.lstrip("/"))

    def open(self, name: str) -> BinaryIO:
        """
        Open a resource for binary reading.

        Raises:
            FileNotFoundError: For an empty name, or a name the filesystem
                               cannot represent (embedded NUL byte).
            OSError: Whatever the filesystem raises (missing file,
                     permission denied, directory, ...).
        """
        if not name:
            raise FileNotFoundError("empty target path")
        try:
            return open(self.locate(name), "rb")
        except ValueError as e:
            raise FileNotFoundError(f"invalid target path: {e}") from e

    def __repr__(self) -> str:
        return f"FileStore(root={self.root!r})"
