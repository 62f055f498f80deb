"""Plain-text formatter for ``str`` values."""

from roost.formatters.base import OutputFormatter, OutputFormatterContext
from roost.http.media import MediaType


class StringOutputFormatter(OutputFormatter):
    """Writes ``str`` values as ``text/plain``."""

    supported_media_types = (MediaType("text", "plain"),)
    supported_encodings = ("utf-8", "utf-16")

    def can_write_type(self, value_type: type) -> bool:
        return issubclass(value_type, str)

    def serialize(self, context: OutputFormatterContext, encoding: str) -> bytes:
        return str(context.value).encode(encoding)
