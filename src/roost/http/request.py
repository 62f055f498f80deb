"""Immutable HTTP request.

Frozen metadata only. Results read the request for negotiation
(``Accept``, ``Accept-Charset``) and for absolute URL generation
(scheme, host, root path); they never consume the body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from roost._internal.multimap import MultiValueMapping
from roost.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Usage::

        request = Request.from_asgi(scope)
        request.accept  # "application/json" or None
    """

    method: str = "GET"
    path: str = "/"
    headers: MultiValueMapping = field(default_factory=Headers)
    scheme: str = "http"
    server: tuple[str, int] | None = None
    root_path: str = ""

    def get_header(self, name: str) -> str | None:
        """Return the first value of header *name*, or None."""
        return self.headers.get(name)

    @property
    def accept(self) -> str | None:
        """The raw ``Accept`` header value."""
        return self.headers.get("accept")

    @property
    def accept_charset(self) -> str | None:
        """The raw ``Accept-Charset`` header value."""
        return self.headers.get("accept-charset")

    @property
    def host(self) -> str:
        """Host for absolute URLs: the ``Host`` header, else the server address."""
        host = self.headers.get("host")
        if host:
            return host
        if self.server is None:
            return "localhost"
        name, port = self.server
        default_port = 443 if self.scheme == "https" else 80
        return name if port == default_port else f"{name}:{port}"

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            scheme=scope.get("scheme", "http"),
            server=tuple(server) if server else None,
            root_path=scope.get("root_path", ""),
        )
