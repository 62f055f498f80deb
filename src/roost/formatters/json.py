"""JSON formatter."""

import dataclasses
import json as json_module
from collections.abc import Mapping
from typing import Any

from roost.formatters.base import OutputFormatter, OutputFormatterContext
from roost.http.media import MediaType


def _default(value: Any) -> Any:
    """Fallback encoder: dataclasses and mappings become objects, the rest ``str``."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


class JsonOutputFormatter(OutputFormatter):
    """Writes any value as ``application/json`` (or ``text/json``).

    Values the ``json`` module can't encode natively go through a
    fallback: dataclasses via ``asdict``, mappings as objects, anything
    else as its ``str``.
    """

    supported_media_types = (
        MediaType("application", "json"),
        MediaType("text", "json"),
    )
    supported_encodings = ("utf-8", "utf-16")

    def __init__(self, *, indent: int | None = None) -> None:
        self.indent = indent

    def __repr__(self) -> str:
        return f"JsonOutputFormatter(indent={self.indent!r})"

    def serialize(self, context: OutputFormatterContext, encoding: str) -> bytes:
        text = json_module.dumps(
            context.value,
            default=_default,
            indent=self.indent,
            ensure_ascii=False,
        )
        return text.encode(encoding)
