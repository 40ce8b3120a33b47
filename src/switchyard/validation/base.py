"""Schema base class, the MISSING sentinel, and coercion helpers."""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from switchyard.validation.issues import IssueCode, ParseResult, ValidationError

if TYPE_CHECKING:
    from switchyard.validation.composite import NullableSchema, OptionalSchema

T = TypeVar("T")


class _Missing:
    """Marker for an absent value, e.g. a key not present in an input mapping.

    Falsy, so ``nullable`` treats it as "no value" like any other falsy input.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def stringify(value: Any) -> str:
    """Render a decoded JSON-ish value the way string schemas see it.

    ``None`` -> ``"null"``, booleans -> ``"true"``/``"false"``, integral
    floats lose their ``.0`` so ``3.0`` and ``3`` stringify alike.
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def describe_type(value: Any) -> str:
    """A JSON-flavoured type name for error messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


class Schema(ABC, Generic[T]):
    """Base class for every validator.

    Subclasses are frozen dataclasses: built once, shared read-only
    between concurrent requests. Constraint methods return new schemas.
    """

    __slots__ = ()

    @abstractmethod
    def parse(self, value: Any) -> T:
        """Return the coerced value or raise ``ValidationError``."""

    def safe_parse(self, value: Any) -> ParseResult[T]:
        """Like ``parse`` but returns a ``ParseResult`` instead of raising.

        Only ``ValidationError`` is captured; anything else propagates.
        """
        try:
            data = self.parse(value)
        except ValidationError as exc:
            return ParseResult(success=False, error=exc)
        return ParseResult(success=True, data=data)

    def optional(self) -> "OptionalSchema[T]":
        """Shorthand for ``s.optional(self)``."""
        from switchyard.validation.composite import OptionalSchema

        return OptionalSchema(self)

    def nullable(self) -> "NullableSchema[T]":
        """Shorthand for ``s.nullable(self)``."""
        from switchyard.validation.composite import NullableSchema

        return NullableSchema(self)

    @staticmethod
    def _fail(message: str, code: IssueCode) -> ValidationError:
        return ValidationError.single(message, code)
