"""Tests for roost.errors — exception hierarchy and error messages."""

import pytest

from roost.errors import (
    NO_ROUTE_MATCH,
    ConfigurationError,
    HeadersAlreadySentError,
    HTTPError,
    NotAcceptable,
    RoostError,
    RouteResolutionError,
    StreamWriteError,
)


class TestHierarchy:
    def test_http_error_is_roost_error(self) -> None:
        assert issubclass(HTTPError, RoostError)

    def test_not_acceptable_is_http_error(self) -> None:
        assert issubclass(NotAcceptable, HTTPError)

    def test_configuration_error_is_roost_error(self) -> None:
        assert issubclass(ConfigurationError, RoostError)

    def test_route_resolution_is_invalid_operation(self) -> None:
        assert issubclass(RouteResolutionError, RoostError)
        assert issubclass(RouteResolutionError, RuntimeError)

    def test_stream_write_is_io_error(self) -> None:
        assert issubclass(StreamWriteError, RoostError)
        assert issubclass(StreamWriteError, OSError)

    def test_headers_already_sent(self) -> None:
        assert issubclass(HeadersAlreadySentError, RuntimeError)


class TestRouteResolutionError:
    def test_default_message(self) -> None:
        assert str(RouteResolutionError()) == "No route matches the supplied values."
        assert NO_ROUTE_MATCH == "No route matches the supplied values."

    def test_custom_message(self) -> None:
        assert str(RouteResolutionError("nope")) == "nope"


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request body")
        assert err.status == 400
        assert err.detail == "Bad request body"

    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad")) == "400: Bad"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestNotAcceptable:
    def test_status(self) -> None:
        err = NotAcceptable()
        assert err.status == 406
        assert err.detail == "Not Acceptable"

    def test_custom_detail(self) -> None:
        assert str(NotAcceptable("no json")) == "406: no json"

    def test_catchable_as_http_error(self) -> None:
        with pytest.raises(HTTPError):
            raise NotAcceptable()
