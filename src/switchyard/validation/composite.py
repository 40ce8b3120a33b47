"""Composite schemas: object, array, union, enum, optional, nullable.

Objects and arrays validate every child and report every failure in a
single pass, prefixing each child issue with its key or index. Unions
deliberately do the opposite and hide branch details behind one
``invalid_union`` issue.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from switchyard.validation.base import MISSING, Schema, describe_type, stringify
from switchyard.validation.issues import Issue, IssueCode, ValidationError
from switchyard.validation.primitives import Bound

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ObjectSchema(Schema[dict[str, Any]]):
    """Validates a mapping key by key.

    Keys missing from the input are handed to their schema as
    ``MISSING``. Keys not declared in the shape are dropped.
    """

    shape: tuple[tuple[str, Schema[Any]], ...]
    message: str | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.shape)

    def parse(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            text = self.message or f"Expected object, got {describe_type(value)}"
            raise self._fail(text, IssueCode.INVALID_TYPE)

        result: dict[str, Any] = {}
        issues: list[Issue] = []
        for key, schema in self.shape:
            try:
                result[key] = schema.parse(value.get(key, MISSING))
            except ValidationError as exc:
                issues.extend(issue.prefixed(key) for issue in exc.issues)

        if issues:
            raise ValidationError(issues)
        return result


@dataclass(frozen=True, slots=True)
class ArraySchema(Schema[list[T]]):
    """Validates a list (or tuple) element by element.

    Length constraints are checked before any element, and a length
    failure is the only issue reported.
    """

    item: Schema[T]
    message: str | None = None
    min_length: Bound | None = None
    max_length: Bound | None = None
    exact_length: Bound | None = None

    def _message(self, message: str | None, default: str) -> str:
        return message or self.message or default

    def min(self, length: int, message: str | None = None) -> "ArraySchema[T]":
        text = self._message(message, f"Array must have at least {length} items")
        return replace(self, min_length=Bound(length, text))

    def max(self, length: int, message: str | None = None) -> "ArraySchema[T]":
        text = self._message(message, f"Array must have at most {length} items")
        return replace(self, max_length=Bound(length, text))

    def length(self, length: int, message: str | None = None) -> "ArraySchema[T]":
        text = self._message(message, f"Array must have exactly {length} items")
        return replace(self, exact_length=Bound(length, text))

    def parse(self, value: Any) -> list[T]:
        if not isinstance(value, (list, tuple)):
            text = self.message or f"Expected array, got {describe_type(value)}"
            raise self._fail(text, IssueCode.INVALID_TYPE)

        if self.min_length is not None and len(value) < self.min_length.value:
            raise self._fail(self.min_length.message, IssueCode.TOO_SMALL)
        if self.max_length is not None and len(value) > self.max_length.value:
            raise self._fail(self.max_length.message, IssueCode.TOO_BIG)
        if self.exact_length is not None and len(value) != self.exact_length.value:
            raise self._fail(self.exact_length.message, IssueCode.INVALID_LENGTH)

        result: list[T] = []
        issues: list[Issue] = []
        for index, element in enumerate(value):
            try:
                result.append(self.item.parse(element))
            except ValidationError as exc:
                issues.extend(issue.prefixed(index) for issue in exc.issues)

        if issues:
            raise ValidationError(issues)
        return result


@dataclass(frozen=True, slots=True)
class UnionSchema(Schema[Any]):
    """Returns the result of the first member that accepts the input.

    When every member fails, the member issues are discarded and a
    single root ``invalid_union`` issue is raised instead.
    """

    members: tuple[Schema[Any], ...]
    message: str | None = None

    def parse(self, value: Any) -> Any:
        for member in self.members:
            try:
                return member.parse(value)
            except ValidationError:
                continue

        text = self.message or "Value does not match any of the expected types"
        raise self._fail(text, IssueCode.INVALID_UNION)


@dataclass(frozen=True, slots=True)
class EnumSchema(Schema[Any]):
    """Accepts the input when its string form equals the string form of
    one of ``values``, and returns that declared value.

    ``s.enum([1, 2]).parse("1")`` is ``1``, not ``"1"``.
    """

    values: tuple[Any, ...]
    message: str | None = None

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(stringify(literal) for literal in self.values)

    def parse(self, value: Any) -> Any:
        if value is MISSING:
            raise self._fail(self.message or "Required", IssueCode.INVALID_TYPE)

        text = stringify(value)
        for literal in self.values:
            if stringify(literal) == text:
                return literal

        options = ", ".join(self.labels)
        message = self.message or f"Expected one of [{options}], got {text}"
        raise self._fail(message, IssueCode.INVALID_ENUM_VALUE)


@dataclass(frozen=True, slots=True)
class OptionalSchema(Schema[T | None]):
    """Returns ``None`` for an absent value; everything else, including
    ``None``, ``""``, ``0`` and ``False``, goes to the wrapped schema.
    """

    inner: Schema[T]

    def parse(self, value: Any) -> T | None:
        if value is MISSING:
            return None
        return self.inner.parse(value)


@dataclass(frozen=True, slots=True)
class NullableSchema(Schema[T | None]):
    """Returns ``None`` for any falsy input (``None``, ``""``, ``0``,
    ``False``, empty containers, absent values).

    Broader than ``OptionalSchema`` on purpose: ``nullable(number())``
    turns ``0`` into ``None``.
    """

    inner: Schema[T]

    def parse(self, value: Any) -> T | None:
        if not value:
            return None
        return self.inner.parse(value)
