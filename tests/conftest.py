"""
pytest configuration and fixtures.
"""

import io
import socket
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Generator, Tuple

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from webworker import Connection, FileStore, ServerConfig, WebServer


FIXED_NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)
FIXED_DATE = "Sun, 18 Oct 2026 12:00:00 GMT"

INDEX_HTML = (
    b"<html>\n"
    b"<body>\n"
    b"<p>Today is <cs371date></p>\n"
    b"<p>Plain line</p>\n"
    b"<footer><cs371server></footer>\n"
    b"</body>\n"
    b"</html>\n"
)

# Bytes that would be mangled by any line-oriented or text processing
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    + bytes(range(256))
    + b"<cs371date>\r\n<cs371server>\n\x00\xff"
)


class CapturingBuffer(io.BytesIO):
    """BytesIO that remembers its contents after close()."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.captured = b""
        self.close_calls = 0

    def close(self):
        if not self.closed:
            self.captured = self.getvalue()
        self.close_calls += 1
        super().close()

    @property
    def data(self) -> bytes:
        return self.captured if self.closed else self.getvalue()


def split_response(raw: bytes) -> Tuple[str, Dict[str, str], bytes]:
    """Split raw response bytes into status line, headers and body."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("latin-1").split("\r\n")
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(": ")
        headers[name] = value
    return lines[0], headers, body


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """Document root with an HTML page, images and a subdirectory."""
    (tmp_path / "index.html").write_bytes(INDEX_HTML)
    (tmp_path / "logo.png").write_bytes(PNG_BYTES)
    (tmp_path / "favicon.ico").write_bytes(b"\x00\x00\x01\x00" + bytes(range(64)))
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "about.html").write_bytes(b"<h1>About</h1>\r\n<cs371server>")
    return tmp_path


@pytest.fixture
def store(doc_root: Path) -> FileStore:
    return FileStore(str(doc_root))


@pytest.fixture
def config(doc_root: Path) -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        root=str(doc_root),
        read_timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def make_connection():
    """Build an in-memory Connection from raw request bytes."""

    def factory(request: bytes) -> Connection:
        return Connection.from_streams(
            reader=io.BytesIO(request),
            writer=CapturingBuffer(),
            address=("127.0.0.1", 12345),
        )

    return factory


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: WebServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()
        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.stop()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw request bytes and read until the server closes."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def test_server(config: ServerConfig) -> Generator[TestServer, None, None]:
    """Running server on a free port, serving doc_root."""
    test_srv = TestServer(WebServer(config))
    test_srv.start()

    yield test_srv

    test_srv.stop()
