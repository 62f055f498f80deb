"""ASGI endpoint — runs one handler and executes the result it returns.

The only component that touches raw ASGI scope. Builds the Request,
an ``HttpResponse`` whose body is an ASGI sink, and the ActionContext,
then executes the handler's result.

Errors are turned into responses only while headers are still unsent:

- ``HTTPError`` (e.g. ``NotAcceptable``) -> its status, detail as text.
- anything else -> logged, 500.

After the commit point the exception propagates to the server, which
is the only one that can drop the connection.
"""

import logging
from collections.abc import Callable, Mapping
from contextvars import Token
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost.config import ResultOptions
from roost.context import ActionContext, ResultServices, context_var
from roost.errors import HTTPError, StreamWriteError
from roost.http.request import Request
from roost.http.response import HttpResponse, ResponseBody
from roost.results import ObjectResult
from roost.routing.resolver import RouteData, UrlResolver
from roost.routing.values import RouteValues
from roost.server.sender import ASGIBody

logger = logging.getLogger("roost.server")


async def _send_error(
    body: ResponseBody,
    status: int,
    detail: str,
    headers: tuple[tuple[str, str], ...] = (),
) -> HttpResponse:
    """Replace whatever the result set with a plain-text error response."""
    response = HttpResponse(body, status=status, headers=headers)
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    await response.write(detail.encode("utf-8"))
    return response


class ResultEndpoint:
    """ASGI application for a single handler returning an action result.

    Usage::

        async def create_user(request):
            return CreatedAtRouteResult("user_detail", {"id": 7}, {"id": 7})

        app = ResultEndpoint(
            create_user,
            url_resolver=RouteTableResolver({"user_detail": "/users/{id:int}"}),
        )

    Handlers returning something without ``execute`` are wrapped in
    ``ObjectResult``. ``route_name`` names the route this endpoint is
    mounted at; path parameters are read from ``scope["path_params"]``.
    """

    __slots__ = ("handler", "route_name", "services")

    def __init__(
        self,
        handler: Callable[..., Any],
        *,
        url_resolver: UrlResolver | None = None,
        options: ResultOptions | None = None,
        services: ResultServices | None = None,
        route_name: str | None = None,
    ) -> None:
        self.handler = handler
        self.route_name = route_name
        self.services = services or ResultServices.create(url_resolver, options)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:  # noqa: ARG002
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        response = HttpResponse(ASGIBody(send), charset=self.services.options.default_charset)
        path_params: Mapping[str, Any] = scope.get("path_params") or {}
        context = ActionContext(
            request=request,
            response=response,
            services=self.services,
            route_data=RouteData(
                route_name=self.route_name,
                values=RouteValues(path_params),
                request=request,
            ),
        )

        token: Token[ActionContext] = context_var.set(context)
        try:
            try:
                result = await invoke(self.handler, request)
                if not hasattr(result, "execute"):
                    result = ObjectResult(result)
                await result.execute(context)
            except HTTPError as exc:
                if response.has_started:
                    raise
                logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
                response = await _send_error(
                    response.body, exc.status, exc.detail or f"Error {exc.status}", exc.headers
                )
            except StreamWriteError:
                raise
            except Exception:
                if response.has_started:
                    raise
                logger.exception("500 %s %s", request.method, request.path)
                response = await _send_error(response.body, 500, "Internal Server Error")
            await response.complete()
        finally:
            context_var.reset(token)
