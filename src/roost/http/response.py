"""Mutable HTTP response for a single in-flight request.

Results mutate the response in place: status, headers, then body bytes.
The body sink decides when status and headers are committed to the
wire; after that commit point they are read-only.

Two commit points, never rolled back:

1. ``start`` sends status and headers (first ``write`` or ``complete``).
2. ``write`` sends body bytes. A failure here leaves a truncated response.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from roost.errors import HeadersAlreadySentError
from roost.http.headers import MutableHeaders


class ResponseBody(Protocol):
    """Output stream of a response.

    ``start`` is called once, before the first ``write``, with the
    response whose status and headers are being committed.
    """

    @property
    def has_started(self) -> bool: ...

    async def start(self, response: HttpResponse) -> None: ...

    async def write(self, data: bytes) -> None: ...

    async def close(self) -> None: ...


class BufferedBody:
    """In-memory body sink.

    Records the committed status and headers so callers can tell what
    would have gone on the wire.
    """

    __slots__ = ("_buffer", "_closed", "committed_headers", "committed_status")

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._closed = False
        self.committed_status: int | None = None
        self.committed_headers: list[tuple[str, str]] = []

    @property
    def has_started(self) -> bool:
        return self.committed_status is not None

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self, response: HttpResponse) -> None:
        self.committed_status = response.status
        self.committed_headers = response.headers.items()

    async def write(self, data: bytes) -> None:
        self._buffer.extend(data)

    async def close(self) -> None:
        self._closed = True

    def getvalue(self) -> bytes:
        """Everything written so far."""
        return bytes(self._buffer)


class HttpResponse:
    """The response half of one request.

    Usage::

        response = HttpResponse()
        response.set_status(201)
        response.set_header("Location", "/users/42")
        await response.write(b"{}")
        await response.complete()
    """

    __slots__ = ("_status", "body", "charset", "headers")

    def __init__(
        self,
        body: ResponseBody | None = None,
        *,
        status: int = 200,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        charset: str = "utf-8",
    ) -> None:
        self.body: ResponseBody = body if body is not None else BufferedBody()
        self.headers = MutableHeaders(headers)
        self.charset = charset
        self._status = status

    def __repr__(self) -> str:
        return f"HttpResponse(status={self._status}, headers={self.headers!r})"

    @property
    def has_started(self) -> bool:
        """True once status and headers have been committed."""
        return self.body.has_started

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, status: int) -> None:
        self.set_status(status)

    def set_status(self, status: int) -> None:
        """Set the status code. Fails after the response has started."""
        self._ensure_not_started("status")
        self._status = status

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing values. Fails after start."""
        self._ensure_not_started(f"header {name!r}")
        self.headers.set(name, value)

    @property
    def content_type(self) -> str | None:
        """The declared ``Content-Type``, or None when nothing set it."""
        return self.headers.get("content-type")

    @content_type.setter
    def content_type(self, value: str) -> None:
        self.set_header("Content-Type", value)

    def get_output_stream(self) -> ResponseBody:
        """The body sink bytes are written to."""
        return self.body

    async def write(self, data: bytes) -> None:
        """Write body bytes, committing status and headers first if needed."""
        if not self.body.has_started:
            await self.body.start(self)
        await self.body.write(data)

    async def complete(self) -> None:
        """Commit (if nothing was written) and close the body."""
        if not self.body.has_started:
            await self.body.start(self)
        await self.body.close()

    def _ensure_not_started(self, what: str) -> None:
        if self.body.has_started:
            msg = f"Cannot set {what}: response headers were already sent."
            raise HeadersAlreadySentError(msg)
