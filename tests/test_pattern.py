"""Tests for switchyard.routing.pattern — normalization and matching."""

import pytest

from switchyard.errors import ConfigurationError
from switchyard.routing.pattern import PathPattern, normalize_path


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            (("/",), "/"),
            (("",), "/"),
            (("//users///",), "/users"),
            (("/api/", "/users/"), "/api/users"),
            (("api", "v1", ":id"), "/api/v1/:id"),
            (("/", "/"), "/"),
        ],
    )
    def test_normalizes(self, parts, expected) -> None:
        assert normalize_path(*parts) == expected


class TestPathPatternCompile:
    def test_literal_and_named_segments(self) -> None:
        pattern = PathPattern.compile("/users/:id/posts/:post_id")
        assert pattern.source == "/users/:id/posts/:post_id"
        assert pattern.param_names == ("id", "post_id")

    def test_source_is_normalized(self) -> None:
        assert PathPattern.compile("users//:id/").source == "/users/:id"

    @pytest.mark.parametrize(
        "source",
        ["/users/{id}", "/users/<id>", "/files/*", "/users/:", "/users/:id-x", "/a:b"],
    )
    def test_rejects_foreign_syntax(self, source) -> None:
        with pytest.raises(ConfigurationError):
            PathPattern.compile(source)

    def test_rejects_repeated_names(self) -> None:
        with pytest.raises(ConfigurationError, match="more than once"):
            PathPattern.compile("/a/:id/b/:id")


class TestPathPatternMatch:
    def test_extracts_params_verbatim(self) -> None:
        pattern = PathPattern.compile("/users/:id")
        assert pattern.match("/users/42") == {"id": "42"}
        assert pattern.match("/users/a%20b") == {"id": "a%20b"}

    def test_segment_count_must_match(self) -> None:
        pattern = PathPattern.compile("/users/:id")
        assert pattern.match("/users") is None
        assert pattern.match("/users/42/posts") is None

    def test_literals_compare_exactly(self) -> None:
        pattern = PathPattern.compile("/users/me")
        assert pattern.match("/users/me") == {}
        assert pattern.match("/users/Me") is None

    def test_root(self) -> None:
        pattern = PathPattern.compile("/")
        assert pattern.match("/") == {}
        assert pattern.match("/x") is None

    def test_params_in_pattern_order(self) -> None:
        pattern = PathPattern.compile("/:b/:a")
        assert list(pattern.match("/1/2")) == ["b", "a"]
