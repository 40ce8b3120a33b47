"""Path normalization and segment-wise pattern matching.

A pattern is a ``/``-delimited sequence of literal segments and named
segments written ``:name``::

    /users/:id/posts/:post_id

Matching is structural: the path and the pattern must have the same
number of segments, literals compare exactly, and a named segment
captures any single non-empty segment verbatim (no decoding, no type
conversion).
"""

import re
from dataclasses import dataclass

from switchyard.errors import ConfigurationError

_PARAM_NAME = re.compile(r"^[A-Za-z0-9_]+$")
_FOREIGN_SYNTAX = re.compile(r"[{}<>*]")


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split("/") if part]


def normalize_path(*parts: str) -> str:
    """Join path fragments into one canonical path.

    Repeated slashes collapse, empty segments vanish, and the result
    has a leading slash and no trailing slash, except for the root::

        normalize_path("/api/", "//users/")  -> "/api/users"
        normalize_path("", "/")              -> "/"
    """
    segments: list[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return "/" + "/".join(segments)


@dataclass(frozen=True, slots=True)
class Segment:
    """One compiled segment: a literal, or a named capture."""

    value: str
    is_param: bool = False


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled route pattern.

    Usage::

        pattern = PathPattern.compile("/users/:id")
        pattern.match("/users/42")     # {"id": "42"}
        pattern.match("/users/42/x")   # None
    """

    source: str
    segments: tuple[Segment, ...]

    @classmethod
    def compile(cls, pattern: str) -> "PathPattern":
        """Parse and validate *pattern*.

        Raises ``ConfigurationError`` for parameter syntaxes other than
        ``:name``, for a bare ``:`` and for repeated parameter names.
        """
        segments: list[Segment] = []
        seen: set[str] = set()
        for part in split_path(pattern):
            if part.startswith(":"):
                name = part[1:]
                if not _PARAM_NAME.match(name):
                    msg = (
                        f"Invalid parameter segment {part!r} in route {pattern!r}. "
                        "Parameter names are one or more letters, digits or underscores."
                    )
                    raise ConfigurationError(msg)
                if name in seen:
                    msg = f"Parameter {name!r} appears more than once in route {pattern!r}."
                    raise ConfigurationError(msg)
                seen.add(name)
                segments.append(Segment(name, is_param=True))
            elif _FOREIGN_SYNTAX.search(part) or ":" in part:
                msg = (
                    f"Unsupported segment {part!r} in route {pattern!r}. "
                    "Use ':name' for path parameters."
                )
                raise ConfigurationError(msg)
            else:
                segments.append(Segment(part))
        return cls(source=normalize_path(pattern), segments=tuple(segments))

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(segment.value for segment in self.segments if segment.is_param)

    def match(self, path: str) -> dict[str, str] | None:
        """Return the captured parameters, or ``None`` when *path* does not fit."""
        parts = split_path(path)
        if len(parts) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts, strict=True):
            if segment.is_param:
                params[segment.value] = part
            elif segment.value != part:
                return None
        return params
