"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All tunables in one dataclass, with defaults good enough for serving a
directory on localhost.

=============================================================================
SOURCES, IN ORDER OF PRECEDENCE
=============================================================================

    1. Command-line flags        python -m webworker --port 3000
    2. Environment variables     WEBWORKER_PORT=3000 python -m webworker
    3. Defaults below

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional

from .http.content import DEFAULT_DATE_MARKER, DEFAULT_SERVER_MARKER, Markers


@dataclass
class ServerConfig:
    """
    Server configuration.

    Example:
        config = ServerConfig(port=3000, root="./www")
        config.validate()
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    Host address to bind to.
    127.0.0.1 = localhost only
    0.0.0.0 = all interfaces
    """

    port: int = 8080
    """Port to listen on. 0 lets the OS pick one."""

    backlog: int = 128
    """Connections the OS queues before refusing new ones."""

    read_timeout: Optional[float] = None
    """
    Socket timeout for reading the request head, in seconds.
    None = block until the client sends something (or hangs up).
    A silent client then holds its worker thread forever, so set this
    for anything exposed beyond localhost.
    """

    max_header_bytes: Optional[int] = None
    """Stop reading the request head after this many bytes. None = no limit."""

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    root: str = "."
    """Directory that target paths are looked up in."""

    date_marker: str = DEFAULT_DATE_MARKER
    """HTML lines containing this token get the current date appended."""

    server_marker: str = DEFAULT_SERVER_MARKER
    """HTML lines containing this token get the server fragment appended."""

    # ─────────────────────────────────────────────────────────────────────
    # IDENTITY AND LOGGING
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "WebWorker/1.0"
    """Value of the Server header and of the server marker fragment."""

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    @property
    def markers(self) -> Markers:
        return Markers(date=self.date_marker, server=self.server_marker)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        WEBWORKER_HOST         Server host (default: 127.0.0.1)
        WEBWORKER_PORT         Server port (default: 8080)
        WEBWORKER_ROOT         Document root (default: .)
        WEBWORKER_TIMEOUT      Read timeout in seconds (default: none)
        WEBWORKER_MAX_HEADER_BYTES  Request head size limit (default: none)
        WEBWORKER_LOG_LEVEL    Logging level (default: INFO)
        WEBWORKER_SERVER_NAME  Server header value (default: WebWorker/1.0)

        =====================================================================
        """
        timeout = os.getenv("WEBWORKER_TIMEOUT")
        max_header_bytes = os.getenv("WEBWORKER_MAX_HEADER_BYTES")
        return cls(
            host=os.getenv("WEBWORKER_HOST", "127.0.0.1"),
            port=int(os.getenv("WEBWORKER_PORT", "8080")),
            root=os.getenv("WEBWORKER_ROOT", "."),
            read_timeout=float(timeout) if timeout else None,
            max_header_bytes=int(max_header_bytes) if max_header_bytes else None,
            log_level=os.getenv("WEBWORKER_LOG_LEVEL", "INFO"),
            server_name=os.getenv("WEBWORKER_SERVER_NAME", "WebWorker/1.0"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError("read_timeout must be > 0")

        if self.max_header_bytes is not None and self.max_header_bytes <= 0:
            raise ValueError("max_header_bytes must be > 0")

        if not self.date_marker or not self.server_marker:
            raise ValueError("markers must not be empty")

        try:
            self.server_name.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError(f"server_name must be latin-1 encodable: {self.server_name!r}")

        if not os.path.isdir(self.root):
            raise ValueError(f"Document root is not a directory: {self.root}")
