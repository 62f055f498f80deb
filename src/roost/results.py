"""Action results — values handlers return to describe a response.

A result is created per request, executed once against an
``ActionContext``, then discarded. ``execute`` mutates the response:
status and headers first, then the negotiated body.

Usage::

    async def create_user(request):
        user = await users.add(...)
        return CreatedAtRouteResult("user_detail", {"id": user.id}, user)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from roost.errors import RouteResolutionError
from roost.http.media import MediaType
from roost.routing.values import RouteValues

if TYPE_CHECKING:
    from roost.context import ActionContext

logger = logging.getLogger("roost.results")

HTTP_201_CREATED = 201


class ActionResult(Protocol):
    """Anything with ``async execute(context)``."""

    async def execute(self, context: ActionContext) -> None: ...


def _media_types(content_types: Iterable[str | MediaType]) -> tuple[MediaType, ...]:
    return tuple(
        ct if isinstance(ct, MediaType) else MediaType.parse(ct) for ct in content_types
    )


@dataclass(frozen=True, slots=True)
class ObjectResult:
    """Write *value* through content negotiation, optionally with a status.

    ``content_types`` restricts the representation; when set, the
    request's ``Accept`` header is not consulted.
    """

    value: Any = None
    status: int | None = None
    content_types: tuple[MediaType, ...] = ()

    def __init__(
        self,
        value: Any = None,
        status: int | None = None,
        content_types: Iterable[str | MediaType] = (),
    ) -> None:
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "status", status)
        object.__setattr__(self, "content_types", _media_types(content_types))

    async def execute(self, context: ActionContext) -> None:
        if self.status is not None:
            context.response.set_status(self.status)
        await context.services.object_executor.execute(context, self)


@dataclass(frozen=True, slots=True)
class CreatedResult:
    """201 Created with an explicit ``Location``."""

    location: str
    value: Any = None
    content_types: tuple[MediaType, ...] = ()

    def __post_init__(self) -> None:
        if not self.location:
            msg = "CreatedResult requires a non-empty location."
            raise ValueError(msg)
        object.__setattr__(self, "content_types", _media_types(self.content_types))

    async def execute(self, context: ActionContext) -> None:
        context.response.set_status(HTTP_201_CREATED)
        context.response.set_header("Location", self.location)
        await context.services.object_executor.execute(context, self)


@dataclass(frozen=True, slots=True)
class CreatedAtRouteResult:
    """201 Created with a ``Location`` generated from a named route.

    An empty *route_name* links to the route serving the current request.
    *route_values* may be None, a mapping, or an object whose attributes
    become the values.
    """

    route_name: str | None = None
    route_values: RouteValues = field(default_factory=RouteValues)
    value: Any = None
    content_types: tuple[MediaType, ...] = ()

    def __init__(
        self,
        route_name: str | None = None,
        route_values: Any = None,
        value: Any = None,
        *,
        content_types: Iterable[str | MediaType] = (),
    ) -> None:
        object.__setattr__(self, "route_name", route_name)
        object.__setattr__(self, "route_values", RouteValues.coerce(route_values))
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "content_types", _media_types(content_types))

    async def execute(self, context: ActionContext) -> None:
        """Resolve the route, set 201 + ``Location``, then write the value.

        Raises ``RouteResolutionError`` before touching the response when
        the resolver returns no URL.
        """
        url = context.services.url_resolver.resolve(
            self.route_name,
            self.route_values,
            context.route_data,
        )
        if not url:
            raise RouteResolutionError()

        logger.debug("Created at route %r -> %s", self.route_name, url)
        context.response.set_status(HTTP_201_CREATED)
        context.response.set_header("Location", url)
        await context.services.object_executor.execute(context, self)
