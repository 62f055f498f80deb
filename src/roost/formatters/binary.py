"""Raw bytes formatter."""

from roost.formatters.base import OutputFormatter, OutputFormatterContext
from roost.http.media import MediaType


class BytesOutputFormatter(OutputFormatter):
    """Writes ``bytes``-like values untouched.

    Produces ``application/octet-stream`` by default and any concrete
    content type it is asked for; the bytes are the caller's encoding.
    """

    supported_media_types = (MediaType("application", "octet-stream"),)
    supported_encodings = ()
    accepts_any_content_type = True

    def can_write_type(self, value_type: type) -> bool:
        return issubclass(value_type, (bytes, bytearray, memoryview))

    def serialize(self, context: OutputFormatterContext, encoding: str) -> bytes:  # noqa: ARG002
        return bytes(context.value)
