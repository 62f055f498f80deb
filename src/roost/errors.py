"""Roost exception hierarchy.

Shared across results, negotiation, routing, and the ASGI endpoint so
every module raises and catches the same types.
"""

from dataclasses import dataclass

NO_ROUTE_MATCH = "No route matches the supplied values."


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when result options or the formatter registry are invalid.

    Typically raised while building ``ResultOptions`` at startup.
    """


class RouteResolutionError(RoostError, RuntimeError):
    """The route name and values did not resolve to any URL.

    Raised before the response is touched. Never retried.
    """

    def __init__(self, message: str = NO_ROUTE_MATCH) -> None:
        super().__init__(message)


class HeadersAlreadySentError(RoostError, RuntimeError):
    """Status or headers were changed after the response was committed."""


class StreamWriteError(RoostError, OSError):
    """The transport failed while body bytes were being written.

    Status and headers that were already sent stay sent; the response
    is left truncated.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by the negotiation layer or by handlers. The ASGI endpoint
    turns these into error responses while headers are still unsent.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotAcceptable(HTTPError):  # noqa: N818
    """406: no registered formatter can produce an acceptable representation."""

    def __init__(self, detail: str = "Not Acceptable") -> None:
        super().__init__(status=406, detail=detail)
