"""Validation error model: path-addressed issues and their aggregate.

Composite schemas never build paths top-down. The innermost failing
schema reports an issue with an empty path, and each enclosing object
or array prefixes its key or index as the error travels outward, so a
finished path always reads root to leaf::

    ("users", 2, "email")
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeAlias, TypeVar

from switchyard.errors import SwitchyardError

T = TypeVar("T")

PathSegment: TypeAlias = str | int


class IssueCode(StrEnum):
    """Machine-readable issue codes, serialized as their string value."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LENGTH = "invalid_length"
    INVALID_STRING = "invalid_string"
    INVALID_UNION = "invalid_union"
    INVALID_ENUM_VALUE = "invalid_enum_value"


@dataclass(frozen=True, slots=True)
class Issue:
    """One field-level validation failure."""

    path: tuple[PathSegment, ...]
    message: str
    code: str

    def prefixed(self, segment: PathSegment) -> "Issue":
        """Return a copy with *segment* prepended to the path."""
        return Issue(path=(segment, *self.path), message=self.message, code=self.code)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{"path": [...], "message": ..., "code": ...}``."""
        return {"path": list(self.path), "message": self.message, "code": str(self.code)}


class ValidationError(SwitchyardError):
    """An ordered, non-empty sequence of issues produced by a schema.

    ``str(error)`` joins the issues as ``path: message`` pairs, with path
    segments joined by dots.
    """

    def __init__(self, issues: Iterable[Issue]) -> None:
        self.issues: tuple[Issue, ...] = tuple(issues)
        super().__init__(
            ", ".join(
                f"{'.'.join(str(segment) for segment in issue.path)}: {issue.message}"
                for issue in self.issues
            )
        )

    @classmethod
    def single(cls, message: str, code: str) -> "ValidationError":
        """An error with one issue at the root path."""
        return cls([Issue(path=(), message=message, code=code)])

    def prefixed(self, segment: PathSegment) -> "ValidationError":
        """Return a new error whose issue paths all start with *segment*."""
        return ValidationError(issue.prefixed(segment) for issue in self.issues)

    def to_list(self) -> list[dict[str, Any]]:
        """All issues in wire form."""
        return [issue.to_dict() for issue in self.issues]


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """The outcome of ``Schema.safe_parse``.

    Exactly one of ``data`` (on success) or ``error`` (on failure) is
    meaningful. The result is falsy when validation failed::

        result = schema.safe_parse(payload)
        if not result:
            return res.status(400).json({"details": result.error.to_list()})
    """

    success: bool
    data: T | None = None
    error: ValidationError | None = None

    def __bool__(self) -> bool:
        return self.success
