"""
Unit tests for the response decision and header writing.
"""

import io
from datetime import datetime, timedelta, timezone

import pytest

from webworker.http.mime_types import ContentType
from webworker.http.request import RequestHead
from webworker.http.response import (
    Response,
    build_response,
    decide,
    format_http_date,
    write_headers,
)
from webworker.http.status_codes import ResourceStatus

from conftest import FIXED_DATE, FIXED_NOW


class CountingStore:
    """Wraps a store and counts open() calls."""

    def __init__(self, store):
        self.store = store
        self.opened = []

    def open(self, name):
        self.opened.append(name)
        return self.store.open(name)


class TestDecide:

    def test_existing_file_is_found(self, store):
        assert decide(RequestHead("/index.html"), store) is ResourceStatus.FOUND

    def test_nested_file_is_found(self, store):
        assert decide(RequestHead("/pages/about.html"), store) is ResourceStatus.FOUND

    def test_missing_file(self, store):
        assert decide(RequestHead("/missing.html"), store) is ResourceStatus.NOT_FOUND

    def test_empty_path(self, store):
        assert decide(RequestHead(""), store) is ResourceStatus.NOT_FOUND

    def test_nul_byte_is_not_found(self, store):
        assert decide(RequestHead("/a\x00b.html"), store) is ResourceStatus.NOT_FOUND

    def test_directory_is_not_found(self, store):
        assert decide(RequestHead("/pages"), store) is ResourceStatus.NOT_FOUND

    def test_traversal_is_not_sanitized(self, doc_root, store):
        """".." segments are resolved by the filesystem, not rejected."""
        (doc_root.parent / "outside.html").write_bytes(b"outside")
        assert decide(RequestHead("/../outside.html"), store) is ResourceStatus.FOUND


class TestBuildResponse:

    def test_found_html(self, store):
        response = build_response(RequestHead("/index.html"), store, now=FIXED_NOW)

        assert response.status is ResourceStatus.FOUND
        assert response.content_type is ContentType.HTML
        assert response.date == FIXED_DATE
        assert response.path == "/index.html"

    def test_not_found_image(self, store):
        response = build_response(RequestHead("/missing.gif"), store, now=FIXED_NOW)

        assert response.status is ResourceStatus.NOT_FOUND
        assert response.content_type is ContentType.GIF

    def test_decides_exactly_once(self, store):
        counting = CountingStore(store)
        build_response(RequestHead("/index.html"), counting)
        assert counting.opened == ["/index.html"]

    def test_response_is_immutable(self, store):
        response = build_response(RequestHead("/index.html"), store)
        with pytest.raises(AttributeError):
            response.status = ResourceStatus.NOT_FOUND

    def test_default_date_is_current(self, store):
        response = build_response(RequestHead("/index.html"), store)
        assert response.date.endswith(" GMT")


class TestWriteHeaders:

    def make_response(self, status, content_type=ContentType.HTML):
        return Response(
            head=RequestHead("/x"),
            content_type=content_type,
            status=status,
            date=FIXED_DATE,
        )

    def test_found_header_block(self):
        out = io.BytesIO()

        write_headers(self.make_response(ResourceStatus.FOUND), out, "TestServer/1.0")

        assert out.getvalue() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Date: Sun, 18 Oct 2026 12:00:00 GMT\r\n"
            b"Server: TestServer/1.0\r\n"
            b"Connection: close\r\n"
            b"Content-Type: text/html\r\n"
            b"\r\n"
        )

    def test_not_found_writes_single_status_line(self):
        out = io.BytesIO()

        write_headers(self.make_response(ResourceStatus.NOT_FOUND, ContentType.PNG), out, "S")

        raw = out.getvalue()
        assert raw.startswith(b"HTTP/1.1 404 Not Found\r\n")
        assert raw.count(b"HTTP/1.1") == 1
        assert b"Content-Type: image/png\r\n" in raw
        assert raw.endswith(b"\r\n\r\n")

    def test_no_bare_line_feeds(self):
        out = io.BytesIO()
        write_headers(self.make_response(ResourceStatus.FOUND), out, "S")
        raw = out.getvalue()
        assert raw.count(b"\n") == raw.count(b"\r\n")

    def test_status_line(self):
        assert self.make_response(ResourceStatus.FOUND).status_line == "HTTP/1.1 200 OK"
        assert self.make_response(ResourceStatus.NOT_FOUND).status_line == "HTTP/1.1 404 Not Found"


class TestResourceStatus:

    def test_codes_and_phrases(self):
        assert ResourceStatus.FOUND.code == 200
        assert ResourceStatus.FOUND.phrase == "OK"
        assert ResourceStatus.NOT_FOUND.code == 404
        assert ResourceStatus.NOT_FOUND.phrase == "Not Found"
        assert str(ResourceStatus.NOT_FOUND) == "404 Not Found"


class TestFormatHttpDate:

    def test_utc(self):
        assert format_http_date(FIXED_NOW) == "Sun, 18 Oct 2026 12:00:00 GMT"

    def test_converts_to_gmt(self):
        plus_two = timezone(timedelta(hours=2))
        dt = datetime(2026, 10, 18, 14, 0, 0, tzinfo=plus_two)
        assert format_http_date(dt) == "Sun, 18 Oct 2026 12:00:00 GMT"

    def test_zero_padding(self):
        dt = datetime(2026, 1, 1, 1, 2, 3)
        assert format_http_date(dt) == "Thu, 01 Jan 2026 01:02:03 GMT"
