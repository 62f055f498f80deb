"""URL resolution — route name + route values -> URL.

``UrlResolver`` is the only thing results depend on. ``RouteTableResolver``
is the built-in implementation over a frozen table of named templates;
any object with a matching ``resolve`` method can replace it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol
from urllib.parse import quote, urlencode

from roost.errors import ConfigurationError
from roost.routing.params import CONVERTERS, accepts_param, format_param
from roost.routing.route import Route
from roost.routing.values import RouteValues

if TYPE_CHECKING:
    from roost.http.request import Request

logger = logging.getLogger("roost.routing")


@dataclass(frozen=True, slots=True)
class RouteData:
    """Ambient routing state of the current request.

    ``route_name`` and ``values`` describe the route the request matched;
    they fill in what a result leaves unspecified.
    """

    route_name: str | None = None
    values: RouteValues = field(default_factory=RouteValues)
    request: Request | None = None


class UrlResolver(Protocol):
    """Turns a route name and values into a URL, or None when nothing matches."""

    def resolve(
        self,
        route_name: str | None,
        route_values: RouteValues,
        route_data: RouteData,
    ) -> str | None: ...


class RouteTableResolver:
    """Generate URLs from a read-only table of named route templates.

    Usage::

        resolver = RouteTableResolver({"user_detail": "/users/{id:int}"})
        resolver.resolve("user_detail", RouteValues(id=42), RouteData())
        # "/users/42"

    Values not consumed by the template become the query string.
    With ``absolute=True`` URLs carry scheme and host from the request
    in ``route_data``.
    """

    __slots__ = ("_routes", "absolute")

    def __init__(
        self,
        routes: Mapping[str, str] | Iterable[Route] = (),
        *,
        absolute: bool = False,
    ) -> None:
        if isinstance(routes, Mapping):
            table = {name: Route(name, path) for name, path in routes.items()}
        else:
            table = {route.name: route for route in routes}
        for route in table.values():
            for seg in route.segments:
                if seg.is_param and seg.param_type not in CONVERTERS:
                    msg = (
                        f"Route {route.name!r} uses unknown converter "
                        f"{seg.param_type!r} in {route.path!r}."
                    )
                    raise ConfigurationError(msg)
        self._routes: dict[str, Route] = table
        self.absolute = absolute

    @classmethod
    def from_routes(cls, routes: Iterable[Route], *, absolute: bool = False) -> RouteTableResolver:
        """Build a resolver from named ``Route`` objects."""
        return cls(list(routes), absolute=absolute)

    @property
    def routes(self) -> list[Route]:
        """All named routes, in registration order."""
        return list(self._routes.values())

    def resolve(
        self,
        route_name: str | None,
        route_values: RouteValues,
        route_data: RouteData,
    ) -> str | None:
        """Resolve to a URL, or None if the name or values don't fit a route."""
        name = route_name or route_data.route_name
        if not name:
            return None
        route = self._routes.get(name)
        if route is None:
            logger.debug("No route named %r", name)
            return None

        # Ambient values only apply when linking to the route being served.
        ambient = route_data.values if name == route_data.route_name else RouteValues()

        parts: list[str] = []
        used: set[str] = set()
        for seg in route.segments:
            if not seg.is_param:
                parts.append(seg.value)
                continue
            param = seg.param_name or ""
            if param in route_values and route_values[param] is not None:
                value = route_values[param]
            elif param in ambient and ambient[param] is not None:
                value = ambient[param]
            else:
                logger.debug("Route %r is missing a value for %r", name, param)
                return None
            text = format_param(value)
            if not accepts_param(text, seg.param_type):
                logger.debug("Value %r does not fit {%s:%s}", text, param, seg.param_type)
                return None
            safe = "/" if seg.param_type == "path" else ""
            parts.append(quote(text, safe=safe))
            used.add(param.lower())

        path = "/" + "/".join(parts)
        query = [
            (key, format_param(value))
            for key, value in route_values.items()
            if key.lower() not in used and value is not None
        ]
        if query:
            path = f"{path}?{urlencode(query)}"
        return self._prefix(path, route_data.request)

    def _prefix(self, path: str, request: Request | None) -> str:
        if request is None:
            return path
        path = f"{request.root_path.rstrip('/')}{path}"
        if self.absolute:
            return f"{request.scheme}://{request.host}{path}"
        return path
