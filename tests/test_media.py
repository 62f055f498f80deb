"""Tests for roost.http.media — media types and Accept parsing."""

import pytest

from roost.http.media import MediaType, parse_accept, parse_accept_charset


class TestMediaTypeParse:
    def test_simple(self) -> None:
        m = MediaType.parse("application/json")
        assert m.type == "application"
        assert m.subtype == "json"
        assert m.params == ()
        assert m.quality == 1.0

    def test_params_and_quality(self) -> None:
        m = MediaType.parse('Text/HTML; Charset="UTF-8"; q=0.7')
        assert m.media_type == "text/html"
        assert m.charset == "UTF-8"
        assert m.quality == 0.7

    def test_quality_clamped(self) -> None:
        assert MediaType.parse("text/plain;q=5").quality == 1.0

    @pytest.mark.parametrize("text", ["", "json", "text/", "/plain", "text/pl ain"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            MediaType.parse(text)

    def test_non_numeric_quality(self) -> None:
        with pytest.raises(ValueError):
            MediaType.parse("text/plain;q=high")

    def test_str_excludes_quality(self) -> None:
        m = MediaType.parse("text/plain; charset=utf-8; q=0.5")
        assert str(m) == "text/plain; charset=utf-8"


class TestMediaTypeMatching:
    def test_subset_of_wildcards(self) -> None:
        json = MediaType.parse("application/json")
        assert json.is_subset_of(MediaType.parse("application/*"))
        assert json.is_subset_of(MediaType.parse("*/*"))
        assert not MediaType.parse("application/*").is_subset_of(json)

    def test_params_on_range_required(self) -> None:
        plain = MediaType.parse("text/plain")
        utf8 = MediaType.parse("text/plain; charset=utf-8")
        assert utf8.is_subset_of(plain)
        assert not plain.is_subset_of(utf8)

    def test_matches_symmetric(self) -> None:
        a = MediaType.parse("text/*")
        b = MediaType.parse("text/csv")
        assert a.matches(b)
        assert b.matches(a)
        assert not b.matches(MediaType.parse("application/json"))

    def test_with_param_replaces(self) -> None:
        m = MediaType.parse("text/plain; charset=ascii").with_param("Charset", "utf-8")
        assert str(m) == "text/plain; charset=utf-8"

    def test_without_param(self) -> None:
        m = MediaType.parse("text/plain; charset=bogus; format=flowed").without_param("CHARSET")
        assert str(m) == "text/plain; format=flowed"
        assert m.charset is None

    @pytest.mark.parametrize(
        ("text", "textual"),
        [
            ("text/csv", True),
            ("application/json", True),
            ("application/problem+json", True),
            ("image/png", False),
        ],
    )
    def test_is_textual(self, text: str, textual: bool) -> None:
        assert MediaType.parse(text).is_textual is textual


class TestParseAccept:
    def test_empty(self) -> None:
        assert parse_accept(None) == []
        assert parse_accept("") == []

    def test_sorted_by_quality_stable(self) -> None:
        result = parse_accept("text/a;q=0.5, text/b, text/c;q=0.5, text/d")
        assert [m.subtype for m in result] == ["b", "d", "a", "c"]

    def test_zero_quality_dropped(self) -> None:
        result = parse_accept("text/plain;q=0, application/json")
        assert [m.media_type for m in result] == ["application/json"]

    def test_keep_refused(self) -> None:
        result = parse_accept("text/plain;q=0, application/json", keep_refused=True)
        assert [(m.media_type, m.quality) for m in result] == [
            ("application/json", 1.0),
            ("text/plain", 0.0),
        ]

    def test_malformed_skipped(self) -> None:
        result = parse_accept("garbage, application/json, text/x;q=oops,")
        assert [m.media_type for m in result] == ["application/json"]


class TestParseAcceptCharset:
    def test_order(self) -> None:
        assert parse_accept_charset("utf-8;q=0.5, UTF-16") == ["utf-16", "utf-8"]

    def test_zero_and_bad_quality(self) -> None:
        assert parse_accept_charset("latin-1;q=0, ascii;q=x, utf-8") == ["utf-8"]

    def test_missing(self) -> None:
        assert parse_accept_charset(None) == []
