"""Output formatter capability and the ordered formatter registry.

A formatter answers two questions: *can you write this value as this
content type?* (a pure predicate, no I/O) and *give me the bytes*.
Writing to the response is the negotiation layer's job, so a formatter
can never produce partial output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, overload

from roost.errors import ConfigurationError
from roost.http.media import MediaType

if TYPE_CHECKING:
    from roost.http.request import Request


@dataclass(frozen=True, slots=True)
class OutputFormatterContext:
    """What a formatter is asked to write.

    ``content_type`` is None when the caller has no preference.
    """

    value: Any
    content_type: MediaType | None = None
    request: Request | None = None

    @property
    def value_type(self) -> type:
        return type(self.value)

    def with_content_type(self, content_type: MediaType | None) -> OutputFormatterContext:
        return OutputFormatterContext(self.value, content_type, self.request)


class OutputFormatter(ABC):
    """Base class for output formatters.

    Subclasses set ``supported_media_types``, override ``can_write_type``
    when they only handle some values, and implement ``serialize``.
    A formatter with ``accepts_any_content_type`` writes whatever
    concrete content type it is asked for.
    """

    supported_media_types: tuple[MediaType, ...] = ()
    supported_encodings: tuple[str, ...] = ("utf-8",)
    accepts_any_content_type: bool = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def can_write_type(self, value_type: type) -> bool:
        """Whether values of *value_type* can be written at all."""
        return True

    def can_write(self, context: OutputFormatterContext) -> bool:
        """Whether this formatter can write ``context.value`` as ``context.content_type``."""
        if not self.can_write_type(context.value_type):
            return False
        return self.select_content_type(context.content_type) is not None

    def select_content_type(self, requested: MediaType | None) -> MediaType | None:
        """The concrete content type this formatter would produce for *requested*.

        Wildcard ranges resolve to the first supported type they cover;
        a concrete request covered by a supported type is kept as is
        (including its parameters).
        """
        if requested is None:
            return self.supported_media_types[0] if self.supported_media_types else None
        for supported in self.supported_media_types:
            if not requested.is_wildcard and requested.is_subset_of(supported):
                return requested
            if supported.is_subset_of(requested):
                return supported
        if self.accepts_any_content_type and not requested.is_wildcard:
            return requested
        return None

    def supports_encoding(self, name: str) -> bool:
        """Whether *name* is one of ``supported_encodings`` (case-insensitive)."""
        return name.lower() in {e.lower() for e in self.supported_encodings}

    def select_encoding(self, preferred: Iterable[str], default: str) -> str:
        """First of *preferred* this formatter supports, else *default*."""
        for name in preferred:
            if self.supports_encoding(name):
                return name.lower()
        return default

    @abstractmethod
    def serialize(self, context: OutputFormatterContext, encoding: str) -> bytes:
        """Render ``context.value`` to bytes."""


class FormatterRegistry(Sequence[OutputFormatter]):
    """Immutable, ordered sequence of output formatters.

    Assembled once at startup and shared read-only by every request.
    Order is negotiation priority: the earliest formatter that can write
    a value wins.
    """

    __slots__ = ("_formatters",)

    def __init__(self, formatters: Iterable[OutputFormatter] = ()) -> None:
        items = tuple(formatters)
        for formatter in items:
            if not isinstance(formatter, OutputFormatter):
                msg = (
                    f"Formatter registry entries must be OutputFormatter instances, "
                    f"got {type(formatter).__name__}."
                )
                raise ConfigurationError(msg)
        self._formatters = items

    @classmethod
    def default(cls, *, json_indent: int | None = None) -> FormatterRegistry:
        """``[StringOutputFormatter, JsonOutputFormatter]``."""
        from roost.formatters.json import JsonOutputFormatter
        from roost.formatters.text import StringOutputFormatter

        return cls([StringOutputFormatter(), JsonOutputFormatter(indent=json_indent)])

    @overload
    def __getitem__(self, index: int) -> OutputFormatter: ...

    @overload
    def __getitem__(self, index: slice) -> FormatterRegistry: ...

    def __getitem__(self, index: int | slice) -> OutputFormatter | FormatterRegistry:
        if isinstance(index, slice):
            return FormatterRegistry(self._formatters[index])
        return self._formatters[index]

    def __iter__(self) -> Iterator[OutputFormatter]:
        return iter(self._formatters)

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        return f"FormatterRegistry({list(self._formatters)!r})"

    def with_formatter(self, formatter: OutputFormatter, *, first: bool = False) -> FormatterRegistry:
        """Return a new registry with *formatter* appended (or prepended)."""
        if first:
            return FormatterRegistry((formatter, *self._formatters))
        return FormatterRegistry((*self._formatters, formatter))
