"""Content negotiation — writes a result's value through one output formatter.

Candidate content types come from, in order:

1. Explicit types: the result's ``content_types``, else a ``Content-Type``
   the response already declares. These short-circuit ``Accept``.
2. The request's ``Accept`` header, best quality first.

Formatters are tried in registry order; the first that can write the
value as any candidate wins. When ``Accept`` matches nothing (or there
are no candidates) the first formatter that can write the value at all
is used. Explicit types never fall back.

Selection finishes before a single byte is written, and the body is
written exactly once. Status and other headers are left alone; only
``Content-Type`` is set.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from roost.config import ResultOptions
from roost.errors import ConfigurationError, NotAcceptable
from roost.formatters.base import OutputFormatter, OutputFormatterContext
from roost.http.media import MediaType, parse_accept, parse_accept_charset

if TYPE_CHECKING:
    from roost.context import ActionContext
    from roost.http.request import Request
    from roost.http.response import HttpResponse

logger = logging.getLogger("roost.negotiation")


@dataclass(frozen=True, slots=True)
class FormatterSelection:
    """The formatter that won negotiation and the concrete type it will produce."""

    formatter: OutputFormatter
    content_type: MediaType


@dataclass(frozen=True, slots=True)
class Candidates:
    """Content types to negotiate against.

    ``explicit`` candidates were declared by the result or upstream
    code and must be honoured; ``Accept``-derived ones may fall back.
    ``refused`` means ``Accept`` listed types but gave every one ``q=0``.
    """

    types: tuple[MediaType, ...] = ()
    explicit: bool = False
    refused: bool = False


def candidate_content_types(
    request: Request,
    response: HttpResponse,
    content_types: Sequence[MediaType],
    options: ResultOptions,
) -> Candidates:
    """Work out which content types the response may be written as.

    Raises ``ConfigurationError`` when upstream code declared a
    ``Content-Type`` that is not a valid media type.
    """
    if content_types:
        return Candidates(tuple(content_types), explicit=True)
    declared = response.content_type
    if declared:
        try:
            media = MediaType.parse(declared)
        except ValueError as exc:
            msg = f"Response declares an invalid Content-Type: {declared!r}"
            raise ConfigurationError(msg) from exc
        return Candidates((media,), explicit=True)

    ranges = parse_accept(request.accept, keep_refused=True)
    accepted = tuple(m for m in ranges if m.quality > 0)
    if ranges and not accepted:
        return Candidates(refused=True)
    if not options.respect_browser_accept_header and any(
        m.media_type == "*/*" for m in accepted
    ):
        # Browsers list */* alongside everything; treat it as no preference.
        return Candidates()
    return Candidates(accepted)


def select_formatter(
    context: OutputFormatterContext,
    formatters: Sequence[OutputFormatter],
    candidates: Candidates,
    *,
    allow_fallback: bool = True,
) -> FormatterSelection | None:
    """Pick the first formatter, in registry order, that can write the value.

    Returns None when nothing can.
    """
    for formatter in formatters:
        for candidate in candidates.types:
            if formatter.can_write(context.with_content_type(candidate)):
                content_type = formatter.select_content_type(candidate)
                if content_type is not None:
                    return FormatterSelection(formatter, content_type)

    constrained = bool(candidates.types) or candidates.refused
    if constrained and (candidates.explicit or not allow_fallback):
        return None

    unconstrained = context.with_content_type(None)
    for formatter in formatters:
        if formatter.can_write(unconstrained):
            content_type = formatter.select_content_type(None)
            if content_type is not None:
                return FormatterSelection(formatter, content_type)
    return None


class ObjectResultExecutor:
    """Writes result values to the response using the configured formatters.

    One instance serves every request; it holds only frozen options.
    """

    __slots__ = ("options",)

    def __init__(self, options: ResultOptions | None = None) -> None:
        self.options = options or ResultOptions()

    async def execute(self, context: ActionContext, result: Any) -> None:
        """Write ``result.value`` (honouring ``result.content_types`` if present)."""
        content_types = getattr(result, "content_types", ())
        await self.write(result.value, context, content_types=content_types)

    async def write(
        self,
        value: Any,
        context: ActionContext,
        *,
        content_types: Sequence[MediaType] = (),
    ) -> None:
        """Negotiate a formatter for *value* and write it to the response.

        A ``None`` value writes nothing. Raises ``NotAcceptable`` when no
        formatter can produce an acceptable representation; nothing is
        written in that case.
        """
        if value is None:
            logger.debug("No value to write; leaving the body empty")
            return

        request, response = context.request, context.response
        formatter_context = OutputFormatterContext(value=value, request=request)
        candidates = candidate_content_types(request, response, content_types, self.options)
        selection = select_formatter(
            formatter_context,
            self.options.formatters,
            candidates,
            allow_fallback=not self.options.return_http_not_acceptable,
        )
        if selection is None:
            wanted = ", ".join(str(m) for m in candidates.types) or "any"
            logger.warning(
                "No output formatter can write %s as %s",
                type(value).__name__,
                wanted,
            )
            msg = f"No output formatter can write {type(value).__name__} as {wanted}."
            raise NotAcceptable(msg)

        formatter, content_type = selection.formatter, selection.content_type
        charset = content_type.charset
        if charset and formatter.supported_encodings and not formatter.supports_encoding(charset):
            logger.debug("%r cannot encode %s; choosing another charset", formatter, charset)
            content_type = content_type.without_param("charset")
        encoding = self._select_encoding(formatter, content_type, request, response)
        logger.debug("Selected %r to write %s as %s", formatter, type(value).__name__, content_type)

        payload = formatter.serialize(formatter_context.with_content_type(content_type), encoding)
        textual = content_type.is_textual and formatter.supported_encodings
        if textual and content_type.charset is None:
            content_type = content_type.with_param("charset", encoding)
        response.set_header("Content-Type", str(content_type))
        await response.write(payload)

    def _select_encoding(
        self,
        formatter: OutputFormatter,
        content_type: MediaType,
        request: Request,
        response: HttpResponse,
    ) -> str:
        if content_type.charset:
            return content_type.charset
        preferred = parse_accept_charset(request.accept_charset)
        return formatter.select_encoding(preferred, response.charset)
