"""ASGI body sink — translates response commits into ASGI messages.

``start`` sends ``http.response.start``; each ``write`` sends one
``http.response.body`` chunk with ``more_body=True``; ``close`` sends the
terminating empty body. Transport failures surface as
``StreamWriteError`` and are never retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import anyio

from roost._internal.asgi import Send
from roost.errors import StreamWriteError

if TYPE_CHECKING:
    from roost.http.response import HttpResponse

logger = logging.getLogger("roost.server")

_TRANSPORT_ERRORS = (OSError, anyio.BrokenResourceError, anyio.ClosedResourceError)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ASGIBody:
    """Response body backed by an ASGI ``send`` callable."""

    __slots__ = ("_body_allowed", "_closed", "_send", "_started")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._started = False
        self._closed = False
        self._body_allowed = True

    @property
    def has_started(self) -> bool:
        return self._started

    async def start(self, response: HttpResponse) -> None:
        message = {
            "type": "http.response.start",
            "status": response.status,
            "headers": response.headers.raw,
        }
        # Marked started before sending: a failed send still counts as
        # committed, since the peer may have received part of the head.
        self._started = True
        self._body_allowed = _body_allowed(response.status)
        await self._emit(message)

    async def write(self, data: bytes) -> None:
        if self._closed:
            msg = "Cannot write to a closed response body."
            raise StreamWriteError(msg)
        if not data or not self._body_allowed:
            return
        await self._emit({"type": "http.response.body", "body": data, "more_body": True})

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._emit({"type": "http.response.body", "body": b"", "more_body": False})

    async def _emit(self, message: dict[str, Any]) -> None:
        try:
            await self._send(message)
        except _TRANSPORT_ERRORS as exc:
            logger.debug("ASGI send failed during %s: %s", message["type"], exc)
            msg = f"Response stream failed during {message['type']}: {exc}"
            raise StreamWriteError(msg) from exc
