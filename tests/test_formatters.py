"""Tests for roost.formatters — built-in output formatters and the registry."""

import dataclasses
from datetime import date
from pathlib import Path

import pytest
from kida import Environment

from roost.errors import ConfigurationError
from roost.formatters import (
    BytesOutputFormatter,
    FormatterRegistry,
    JsonOutputFormatter,
    OutputFormatterContext,
    StringOutputFormatter,
)
from roost.formatters.template import InlineTemplate, Template, TemplateOutputFormatter
from roost.http.media import MediaType


def _ctx(value, content_type=None):
    ct = MediaType.parse(content_type) if content_type else None
    return OutputFormatterContext(value, ct)


class TestStringOutputFormatter:
    def test_writes_only_str(self) -> None:
        formatter = StringOutputFormatter()
        assert formatter.can_write(_ctx("x"))
        assert not formatter.can_write(_ctx(1))
        assert not formatter.can_write(_ctx(b"x"))

    def test_content_type_selection(self) -> None:
        formatter = StringOutputFormatter()
        assert str(formatter.select_content_type(None)) == "text/plain"
        assert str(formatter.select_content_type(MediaType.parse("text/*"))) == "text/plain"
        assert str(formatter.select_content_type(MediaType.parse("*/*"))) == "text/plain"
        assert formatter.select_content_type(MediaType.parse("application/json")) is None

    def test_keeps_requested_parameters(self) -> None:
        selected = StringOutputFormatter().select_content_type(
            MediaType.parse("text/plain; charset=utf-16")
        )
        assert str(selected) == "text/plain; charset=utf-16"

    def test_serialize(self) -> None:
        assert StringOutputFormatter().serialize(_ctx("hé"), "utf-8") == "hé".encode()

    def test_select_encoding(self) -> None:
        formatter = StringOutputFormatter()
        assert formatter.select_encoding(["latin-1", "UTF-16"], "utf-8") == "utf-16"
        assert formatter.select_encoding(["latin-1"], "utf-8") == "utf-8"

    def test_supports_encoding(self) -> None:
        formatter = StringOutputFormatter()
        assert formatter.supports_encoding("UTF-16")
        assert not formatter.supports_encoding("bogus")
        assert not BytesOutputFormatter().supports_encoding("utf-8")


class TestJsonOutputFormatter:
    def test_writes_anything(self) -> None:
        formatter = JsonOutputFormatter()
        assert formatter.can_write(_ctx("x"))
        assert formatter.can_write(_ctx([1, 2]))
        assert formatter.can_write(_ctx({"a": 1}, "text/json"))
        assert not formatter.can_write(_ctx({"a": 1}, "text/html"))

    def test_wildcard_resolves_to_application_json(self) -> None:
        selected = JsonOutputFormatter().select_content_type(MediaType.parse("*/*"))
        assert str(selected) == "application/json"

    def test_serialize_non_ascii(self) -> None:
        payload = JsonOutputFormatter().serialize(_ctx({"name": "Zoë"}), "utf-8")
        assert payload == '{"name": "Zoë"}'.encode()

    def test_serialize_fallbacks(self) -> None:
        @dataclasses.dataclass
        class User:
            id: int
            joined: date

        value = {"user": User(1, date(2024, 1, 2)), "tags": ("a", "b")}
        payload = JsonOutputFormatter().serialize(_ctx(value), "utf-8")
        assert payload == b'{"user": {"id": 1, "joined": "2024-01-02"}, "tags": ["a", "b"]}'

    def test_indent(self) -> None:
        payload = JsonOutputFormatter(indent=2).serialize(_ctx({"a": 1}), "utf-8")
        assert payload == b'{\n  "a": 1\n}'

    def test_repr(self) -> None:
        assert repr(JsonOutputFormatter(indent=2)) == "JsonOutputFormatter(indent=2)"


class TestBytesOutputFormatter:
    def test_writes_bytes_like(self) -> None:
        formatter = BytesOutputFormatter()
        assert formatter.can_write(_ctx(b"x"))
        assert formatter.can_write(_ctx(bytearray(b"x")))
        assert not formatter.can_write(_ctx("x"))

    def test_any_concrete_type(self) -> None:
        formatter = BytesOutputFormatter()
        assert str(formatter.select_content_type(MediaType.parse("image/png"))) == "image/png"
        assert formatter.select_content_type(MediaType.parse("image/*")) is None
        assert str(formatter.select_content_type(None)) == "application/octet-stream"

    def test_serialize_untouched(self) -> None:
        payload = BytesOutputFormatter().serialize(_ctx(memoryview(b"\x00\x01")), "utf-8")
        assert payload == b"\x00\x01"


class TestTemplateOutputFormatter:
    def test_file_template(self, tmp_path: Path) -> None:
        (tmp_path / "hello.html").write_text("<p>Hello {{ name }}</p>")
        formatter = TemplateOutputFormatter(template_dir=tmp_path)

        payload = formatter.serialize(_ctx(Template("hello.html", name="Ada")), "utf-8")

        assert payload == b"<p>Hello Ada</p>"

    def test_inline_template_without_env(self) -> None:
        formatter = TemplateOutputFormatter()
        value = Template.inline("<h1>{{ title }}</h1>", title="Created")

        assert isinstance(value, InlineTemplate)
        assert formatter.serialize(_ctx(value), "utf-8") == b"<h1>Created</h1>"

    def test_explicit_env(self) -> None:
        formatter = TemplateOutputFormatter(Environment())
        value = InlineTemplate("{{ n }}", n=3)
        assert formatter.serialize(_ctx(value), "utf-8") == b"3"

    def test_file_template_requires_env(self) -> None:
        with pytest.raises(ConfigurationError, match="kida Environment"):
            TemplateOutputFormatter().serialize(_ctx(Template("x.html")), "utf-8")

    def test_writes_only_templates_as_html(self) -> None:
        formatter = TemplateOutputFormatter()
        assert formatter.can_write(_ctx(Template("x.html"), "text/html"))
        assert not formatter.can_write(_ctx(Template("x.html"), "application/json"))
        assert not formatter.can_write(_ctx("<p>raw</p>"))

    def test_template_frozen(self) -> None:
        value = Template("x.html", a=1)
        assert value.context == {"a": 1}
        with pytest.raises(AttributeError):
            value.name = "y.html"  # type: ignore[misc]


class TestFormatterRegistry:
    def test_default_order(self) -> None:
        registry = FormatterRegistry.default()
        assert [type(f) for f in registry] == [StringOutputFormatter, JsonOutputFormatter]

    def test_default_json_indent(self) -> None:
        registry = FormatterRegistry.default(json_indent=4)
        assert registry[1].indent == 4  # type: ignore[attr-defined]

    def test_rejects_non_formatters(self) -> None:
        with pytest.raises(ConfigurationError, match="got str"):
            FormatterRegistry(["json"])  # type: ignore[list-item]

    def test_slice_is_registry(self) -> None:
        registry = FormatterRegistry.default()
        assert isinstance(registry[:1], FormatterRegistry)
        assert len(registry[:1]) == 1

    def test_with_formatter(self) -> None:
        registry = FormatterRegistry.default()
        binary = BytesOutputFormatter()

        appended = registry.with_formatter(binary)
        prepended = registry.with_formatter(binary, first=True)

        assert appended[-1] is binary
        assert prepended[0] is binary
        assert len(registry) == 2
