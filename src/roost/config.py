"""Result execution options.

ResultOptions is a frozen dataclass, immutable after creation, built
once at startup and shared by every request.
"""

from dataclasses import dataclass, field

from roost.formatters.base import FormatterRegistry


@dataclass(frozen=True, slots=True)
class ResultOptions:
    """Options for executing action results. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        options = ResultOptions(
            formatters=FormatterRegistry([JsonOutputFormatter()]),
            return_http_not_acceptable=True,
        )
    """

    # Negotiation order: the first formatter that can write a value wins
    formatters: FormatterRegistry = field(default_factory=FormatterRegistry.default)

    # Encoding used when neither the content type nor Accept-Charset picks one
    default_charset: str = "utf-8"

    # Browsers send "*/*" with everything; by default such headers are ignored
    respect_browser_accept_header: bool = False

    # 406 instead of the first-formatter fallback when Accept matches nothing
    return_http_not_acceptable: bool = False
