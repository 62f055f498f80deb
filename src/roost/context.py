"""Per-request action context.

``ActionContext`` bundles what a result needs to execute: the request,
the mutable response, ambient route data, and the shared services.
``context_var`` exposes the current context to code that has no direct
reference, the same way the request is exposed to handlers.

Thread safety:
    ``ContextVar`` is task-local under asyncio. The services bundle is
    frozen and shared read-only across requests.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field

from roost.config import ResultOptions
from roost.http.request import Request
from roost.http.response import HttpResponse
from roost.routing.resolver import RouteData, RouteTableResolver, UrlResolver
from roost.server.negotiation import ObjectResultExecutor


@dataclass(frozen=True, slots=True)
class ResultServices:
    """Process-wide collaborators, built once before serving."""

    url_resolver: UrlResolver
    object_executor: ObjectResultExecutor
    options: ResultOptions

    @classmethod
    def create(
        cls,
        url_resolver: UrlResolver | None = None,
        options: ResultOptions | None = None,
    ) -> ResultServices:
        """Wire the default executor to *options*."""
        options = options or ResultOptions()
        return cls(
            url_resolver=url_resolver if url_resolver is not None else RouteTableResolver(),
            object_executor=ObjectResultExecutor(options),
            options=options,
        )


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Everything one result execution touches."""

    request: Request
    response: HttpResponse
    services: ResultServices
    route_data: RouteData = field(default_factory=RouteData)


context_var: ContextVar[ActionContext] = ContextVar("roost_action_context")
"""The context of the request being served. Set by the ASGI endpoint."""


def get_context() -> ActionContext:
    """Return the current action context.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
