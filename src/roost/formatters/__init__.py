"""Output formatters — turn a result's value into response bytes.

Formatters are tried in registry order during content negotiation.
"""

from roost.formatters.base import FormatterRegistry, OutputFormatter, OutputFormatterContext
from roost.formatters.binary import BytesOutputFormatter
from roost.formatters.json import JsonOutputFormatter
from roost.formatters.text import StringOutputFormatter

__all__ = [
    "BytesOutputFormatter",
    "FormatterRegistry",
    "JsonOutputFormatter",
    "OutputFormatter",
    "OutputFormatterContext",
    "StringOutputFormatter",
]
