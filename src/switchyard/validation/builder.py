"""Schema construction namespace.

Usage::

    from switchyard.validation import s

    user = s.object({
        "name": s.string().min(3),
        "email": s.string().email(),
        "age": s.optional(s.number().integer().positive()),
        "role": s.enum(["admin", "member"]),
    })
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from switchyard.errors import ConfigurationError
from switchyard.validation.base import Schema
from switchyard.validation.composite import (
    ArraySchema,
    EnumSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    UnionSchema,
)
from switchyard.validation.primitives import (
    AnySchema,
    BooleanSchema,
    FileSchema,
    NumberSchema,
    StringSchema,
)

T = TypeVar("T")


def _require_schema(candidate: object, where: str) -> Schema[Any]:
    if not isinstance(candidate, Schema):
        msg = f"{where} must be a Schema, got {type(candidate).__name__}."
        raise ConfigurationError(msg)
    return candidate


class SchemaBuilder:
    """Factory methods for every schema type. Use the shared ``s`` instance."""

    __slots__ = ()

    @staticmethod
    def string(message: str | None = None) -> StringSchema:
        return StringSchema(message=message)

    @staticmethod
    def number(message: str | None = None) -> NumberSchema:
        return NumberSchema(message=message)

    @staticmethod
    def boolean(message: str | None = None) -> BooleanSchema:
        return BooleanSchema(message=message)

    @staticmethod
    def file(message: str | None = None) -> FileSchema:
        return FileSchema(message=message)

    @staticmethod
    def any() -> AnySchema:
        return AnySchema()

    @staticmethod
    def object(shape: Mapping[str, Schema[Any]], message: str | None = None) -> ObjectSchema:
        pairs = tuple(
            (key, _require_schema(schema, f"Field {key!r}")) for key, schema in shape.items()
        )
        return ObjectSchema(shape=pairs, message=message)

    @staticmethod
    def array(item: Schema[T], message: str | None = None) -> ArraySchema[T]:
        return ArraySchema(item=_require_schema(item, "Array item"), message=message)

    @staticmethod
    def union(*members: Schema[Any], message: str | None = None) -> UnionSchema:
        if len(members) < 2:
            msg = f"A union needs at least two member schemas, got {len(members)}."
            raise ConfigurationError(msg)
        checked = tuple(_require_schema(member, "Union member") for member in members)
        return UnionSchema(members=checked, message=message)

    @staticmethod
    def enum(values: Iterable[Any], message: str | None = None) -> EnumSchema:
        literals = tuple(values)
        if not literals:
            msg = "An enum needs at least one value."
            raise ConfigurationError(msg)
        return EnumSchema(values=literals, message=message)

    @staticmethod
    def optional(schema: Schema[T]) -> OptionalSchema[T]:
        return OptionalSchema(_require_schema(schema, "Optional inner"))

    @staticmethod
    def nullable(schema: Schema[T]) -> NullableSchema[T]:
        return NullableSchema(_require_schema(schema, "Nullable inner"))


s = SchemaBuilder()
