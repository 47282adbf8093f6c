"""Tests for linkmap.errors — exception hierarchy and error messages."""

import dataclasses

import pytest

from linkmap.errors import (
    ConfigurationError,
    HTTPError,
    InterceptorError,
    LinkmapError,
    NoSuchLink,
    NotFound,
    TemplatesNotInstalledError,
)
from linkmap.routing.pattern import parse_pattern


class TestHierarchy:
    def test_http_error_is_linkmap_error(self) -> None:
        assert issubclass(HTTPError, LinkmapError)

    def test_no_such_link_is_not_found(self) -> None:
        assert issubclass(NoSuchLink, NotFound)

    def test_configuration_error_is_linkmap_error(self) -> None:
        assert issubclass(ConfigurationError, LinkmapError)

    def test_interceptor_error_is_value_error(self) -> None:
        assert issubclass(InterceptorError, LinkmapError)
        assert issubclass(InterceptorError, ValueError)

    def test_templates_not_installed(self) -> None:
        assert issubclass(TemplatesNotInstalledError, LinkmapError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad link")) == "400: Bad link"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_fields(self) -> None:
        assert [f.name for f in dataclasses.fields(HTTPError)] == ["status", "detail"]

    def test_not_found_status(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_no_such_link_carries_detail(self) -> None:
        err = NoSuchLink("Can't find link for UserPage.")
        assert err.status == 404
        assert str(err) == "404: Can't find link for UserPage."

    def test_can_be_raised_and_caught_as_not_found(self) -> None:
        with pytest.raises(NotFound):
            raise NoSuchLink("gone")


class TestErrorMessages:
    def test_bad_section_names_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match=r"user/\{a:b:c\}"):
            parse_pattern("user/{a:b:c}")
