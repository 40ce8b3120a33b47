"""Route, RouteSchemas and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from switchyard._internal.types import Handler
from switchyard.errors import ConfigurationError
from switchyard.middleware.protocol import Middleware
from switchyard.routing.pattern import PathPattern
from switchyard.validation.base import Schema

_SCHEMA_SECTIONS = ("query", "params", "body")


@dataclass(frozen=True, slots=True)
class RouteSchemas:
    """Input contracts for a route, validated in the order query, params, body."""

    query: Schema[Any] | None = None
    params: Schema[Any] | None = None
    body: Schema[Any] | None = None

    @classmethod
    def coerce(cls, value: "RouteSchemas | Mapping[str, Schema[Any]] | None") -> "RouteSchemas | None":
        """Accept a ``RouteSchemas``, a mapping of section name to schema, or ``None``."""
        if value is None or isinstance(value, RouteSchemas):
            return value

        unknown = sorted(set(value) - set(_SCHEMA_SECTIONS))
        if unknown:
            msg = (
                f"Unknown schema section(s) {', '.join(unknown)}. "
                f"Expected any of: {', '.join(_SCHEMA_SECTIONS)}."
            )
            raise ConfigurationError(msg)
        for section, schema in value.items():
            if not isinstance(schema, Schema):
                msg = f"Schema for {section!r} must be a Schema, got {type(schema).__name__}."
                raise ConfigurationError(msg)
        return cls(**dict(value))

    def sections(self) -> tuple[tuple[str, Schema[Any]], ...]:
        """The declared sections, in validation order."""
        pairs = ((name, getattr(self, name)) for name in _SCHEMA_SECTIONS)
        return tuple((name, schema) for name, schema in pairs if schema is not None)


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Identity is ``(method, pattern.source)``. Created at registration,
    never modified; mounting builds new ``Route`` objects.
    """

    method: str
    pattern: PathPattern
    handler: Handler
    middleware: tuple[Middleware, ...] = ()
    schemas: RouteSchemas | None = None

    @property
    def url(self) -> str:
        return self.pattern.source

    def with_prefix(self, prefix: str, middleware: tuple[Middleware, ...] = ()) -> "Route":
        """A copy relocated under *prefix* with *middleware* prepended."""
        return Route(
            method=self.method,
            pattern=PathPattern.compile(f"{prefix}/{self.pattern.source}"),
            handler=self.handler,
            middleware=(*middleware, *self.middleware),
            schemas=self.schemas,
        )


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
