"""Roost — action results for ASGI handlers.

Handlers return a result; the result sets status and headers, then
writes its value through content negotiation.

Basic usage::

    from roost import CreatedAtRouteResult, ResultEndpoint, RouteTableResolver

    async def create_user(request):
        user = {"id": 7, "name": "Ada"}
        return CreatedAtRouteResult("user_detail", {"id": user["id"]}, user)

    app = ResultEndpoint(
        create_user,
        url_resolver=RouteTableResolver({"user_detail": "/users/{id:int}"}),
    )
"""

from importlib import import_module

__version__ = "0.1.0-dev"

# public name -> defining module, imported on first access
_LAZY_IMPORTS: dict[str, str] = {
    "ActionContext": "roost.context",
    "get_context": "roost.context",
    "ResultOptions": "roost.config",
    "CreatedAtRouteResult": "roost.results",
    "CreatedResult": "roost.results",
    "ObjectResult": "roost.results",
    "FormatterRegistry": "roost.formatters.base",
    "JsonOutputFormatter": "roost.formatters.json",
    "StringOutputFormatter": "roost.formatters.text",
    "ObjectResultExecutor": "roost.server.negotiation",
    "ResultEndpoint": "roost.server.handler",
    "RouteTableResolver": "roost.routing.resolver",
    "RouteValues": "roost.routing.values",
    "Request": "roost.http.request",
    "HttpResponse": "roost.http.response",
    "ConfigurationError": "roost.errors",
    "HTTPError": "roost.errors",
    "NotAcceptable": "roost.errors",
    "RoostError": "roost.errors",
    "RouteResolutionError": "roost.errors",
    "StreamWriteError": "roost.errors",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
