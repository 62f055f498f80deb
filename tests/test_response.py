"""Tests for roost.http.response — mutable response and commit points."""

import pytest

from roost.errors import HeadersAlreadySentError
from roost.http.response import BufferedBody, HttpResponse


class TestHttpResponse:
    def test_defaults(self) -> None:
        r = HttpResponse()
        assert r.status == 200
        assert r.content_type is None
        assert r.charset == "utf-8"
        assert r.has_started is False
        assert isinstance(r.body, BufferedBody)

    def test_set_status(self) -> None:
        r = HttpResponse()
        r.set_status(201)
        assert r.status == 201

    def test_status_property_setter(self) -> None:
        r = HttpResponse()
        r.status = 204
        assert r.status == 204

    def test_set_header_replaces(self) -> None:
        r = HttpResponse(headers={"Location": "/old"})
        r.set_header("location", "/new")
        assert r.headers.get_list("Location") == ["/new"]

    def test_content_type_property(self) -> None:
        r = HttpResponse()
        r.content_type = "application/json"
        assert r.content_type == "application/json"
        assert r.headers["Content-Type"] == "application/json"

    def test_output_stream_is_body(self) -> None:
        body = BufferedBody()
        assert HttpResponse(body).get_output_stream() is body


class TestCommit:
    @pytest.mark.asyncio
    async def test_write_commits_once(self) -> None:
        r = HttpResponse()
        r.set_status(201)
        r.set_header("Location", "/a")

        await r.write(b"one")
        await r.write(b"two")

        assert r.has_started is True
        assert r.body.committed_status == 201
        assert r.body.committed_headers == [("Location", "/a")]
        assert r.body.getvalue() == b"onetwo"

    @pytest.mark.asyncio
    async def test_no_mutation_after_start(self) -> None:
        r = HttpResponse()
        await r.write(b"x")

        with pytest.raises(HeadersAlreadySentError, match="already sent"):
            r.set_status(500)
        with pytest.raises(HeadersAlreadySentError):
            r.set_header("X-Late", "1")
        assert r.status == 200
        assert "x-late" not in r.headers

    @pytest.mark.asyncio
    async def test_complete_without_body(self) -> None:
        r = HttpResponse(status=204)

        await r.complete()

        assert r.body.committed_status == 204
        assert r.body.closed is True
        assert r.body.getvalue() == b""
