"""Immutable route values.

Parameters substituted into a named route template. Keys compare
case-insensitively, like route parameter names, but keep the spelling
and order they were given in.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class RouteValues(Mapping[str, Any]):
    """An immutable, ordered ``str -> value`` mapping.

    Usage::

        RouteValues({"id": 42})
        RouteValues(id=42, page=2)
        RouteValues.coerce(None)  # empty
    """

    __slots__ = ("_items",)

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        pairs: list[tuple[str, Any]] = []
        if values is not None:
            source = values.items() if isinstance(values, Mapping) else values
            pairs.extend(source)
        pairs.extend(kwargs.items())

        items: dict[str, tuple[str, Any]] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                msg = f"Route value keys must be str, got {type(key).__name__}"
                raise TypeError(msg)
            folded = key.lower()
            # A later duplicate replaces the value but keeps the first position.
            original = items[folded][0] if folded in items else key
            items[folded] = (original, value)
        object.__setattr__(self, "_items", items)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RouteValues is immutable"
        raise AttributeError(msg)

    @classmethod
    def coerce(cls, values: Any) -> RouteValues:
        """Accept ``None``, a mapping, pairs, or an object with attributes.

        Dataclass instances contribute their fields; other objects
        contribute their public instance attributes.
        """
        if values is None:
            return cls()
        if isinstance(values, RouteValues):
            return values
        if isinstance(values, Mapping):
            return cls(values)
        if dataclasses.is_dataclass(values) and not isinstance(values, type):
            return cls({f.name: getattr(values, f.name) for f in dataclasses.fields(values)})
        if isinstance(values, (list, tuple)):
            return cls(values)
        if hasattr(values, "__dict__"):
            return cls({k: v for k, v in vars(values).items() if not k.startswith("_")})
        msg = f"Cannot build route values from {type(values).__name__}"
        raise TypeError(msg)

    def __getitem__(self, key: str) -> Any:
        return self._items[key.lower()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RouteValues):
            return list(self.items()) == list(other.items())
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"RouteValues({{{items}}})"

    def merged(self, other: Mapping[str, Any]) -> RouteValues:
        """Return new values with *other* layered on top of these."""
        return RouteValues([*self.items(), *other.items()])
