"""HTML formatter rendering kida templates.

Handlers return ``Template("users/detail.html", user=user)`` as a
result value; this formatter renders it when ``text/html`` wins
negotiation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from roost.errors import ConfigurationError
from roost.formatters.base import OutputFormatter, OutputFormatterContext
from roost.http.media import MediaType


@dataclass(frozen=True, slots=True)
class Template:
    """Render a full kida template.

    Usage::

        return CreatedAtRouteResult("user_detail", {"id": 7}, Template("user.html", user=user))
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)

    @staticmethod
    def inline(source: str, /, **context: Any) -> InlineTemplate:
        """Create a template from a string.  For prototyping only."""
        return InlineTemplate(source, **context)


@dataclass(frozen=True, slots=True)
class InlineTemplate:
    """A template rendered from a string source."""

    source: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, source: str, /, **context: Any) -> None:
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "context", context)


class TemplateOutputFormatter(OutputFormatter):
    """Writes ``Template`` and ``InlineTemplate`` values as ``text/html``.

    File templates need an environment (or a ``template_dir`` to build
    one); inline templates fall back to a bare environment.
    """

    supported_media_types = (MediaType("text", "html"),)
    supported_encodings = ("utf-8",)

    def __init__(
        self,
        env: Environment | None = None,
        *,
        template_dir: str | Path | None = None,
    ) -> None:
        if env is None and template_dir is not None:
            env = Environment(loader=FileSystemLoader(str(template_dir)))
        self.env = env

    def can_write_type(self, value_type: type) -> bool:
        return issubclass(value_type, (Template, InlineTemplate))

    def serialize(self, context: OutputFormatterContext, encoding: str) -> bytes:
        value = context.value
        if isinstance(value, InlineTemplate):
            env = self.env or Environment()
            html = env.from_string(value.source).render(value.context)
        else:
            if self.env is None:
                msg = (
                    "Template values require a kida Environment. "
                    "Pass env= or template_dir= to TemplateOutputFormatter."
                )
                raise ConfigurationError(msg)
            html = self.env.get_template(value.name).render(value.context)
        return html.encode(encoding)
