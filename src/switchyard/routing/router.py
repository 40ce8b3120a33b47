"""Router: route registration, router-level middleware and mounting.

A router is a mutable setup-time object. Routers compose by mounting,
which snapshot-copies routes; nothing is linked, so changing a router
after it was mounted has no effect on the parent.

Usage::

    users = Router(prefix="/users")
    users.use(require_login)

    @users.get("/:id", schemas={"params": s.object({"id": s.number().integer()})})
    async def show(req, res):
        return res.json(await load_user(req.params["id"]))

    app = App()
    app.mount(users, "/api")      # GET /api/users/:id
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeAlias

from switchyard._internal.types import Handler
from switchyard.middleware.protocol import Middleware
from switchyard.routing.pattern import PathPattern, normalize_path
from switchyard.routing.registry import RouteRegistry
from switchyard.routing.route import Route, RouteSchemas
from switchyard.validation.base import Schema

logger = logging.getLogger("switchyard.routing")

SchemasArg: TypeAlias = RouteSchemas | Mapping[str, Schema[Any]] | None


class Router:
    """A group of routes sharing a prefix and middleware."""

    __slots__ = ("_middleware", "_registry", "prefix")

    def __init__(self, prefix: str = "/") -> None:
        self.prefix = normalize_path(prefix)
        self._registry = RouteRegistry()
        self._middleware: list[Middleware] = []

    @property
    def registry(self) -> RouteRegistry:
        return self._registry

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return tuple(self._middleware)

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._registry)

    # -- Composition --

    def use(self, middleware: Middleware) -> None:
        """Append router-level middleware.

        Runs before route middleware for every route of this router,
        including routes mounted earlier or later.
        """
        self._check_not_frozen()
        self._middleware.append(middleware)

    def mount(self, router: "Router", prefix: str = "/") -> None:
        """Copy every route of *router* into this router under *prefix*.

        Each copy gets ``router``'s middleware prepended to its own.
        Raises ``DuplicateRouteError`` on the first collision.
        """
        self._check_not_frozen()
        mounted = router.middleware
        base = normalize_path(self.prefix, prefix)
        for route in router.routes:
            copy = route.with_prefix(base, mounted)
            self._registry.add(copy)
            logger.debug("Mounted %s %s", copy.method, copy.url)

    # -- Registration --

    def route(
        self,
        method: str,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register *handler* for ``method url``.

        Without *handler*, returns a decorator::

            @router.route("HEAD", "/health")
            def health(req, res):
                return res.empty()
        """
        def decorator(func: Handler) -> Handler:
            self._add(method, url, func, middleware, schemas)
            return func

        if handler is None:
            return decorator
        return decorator(handler)

    def get(
        self,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register a GET route."""
        return self.route("GET", url, handler, middleware=middleware, schemas=schemas)

    def post(
        self,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register a POST route."""
        return self.route("POST", url, handler, middleware=middleware, schemas=schemas)

    def put(
        self,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register a PUT route."""
        return self.route("PUT", url, handler, middleware=middleware, schemas=schemas)

    def patch(
        self,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register a PATCH route."""
        return self.route("PATCH", url, handler, middleware=middleware, schemas=schemas)

    def delete(
        self,
        url: str,
        handler: Handler | None = None,
        *,
        middleware: Iterable[Middleware] = (),
        schemas: SchemasArg = None,
    ) -> Any:
        """Register a DELETE route."""
        return self.route("DELETE", url, handler, middleware=middleware, schemas=schemas)

    # -- Internal --

    def _add(
        self,
        method: str,
        url: str,
        handler: Callable[..., Any],
        middleware: Iterable[Middleware],
        schemas: SchemasArg,
    ) -> None:
        self._check_not_frozen()
        route = Route(
            method=method.upper(),
            pattern=PathPattern.compile(normalize_path(self.prefix, url)),
            handler=handler,
            middleware=tuple(middleware),
            schemas=RouteSchemas.coerce(schemas),
        )
        self._registry.add(route)
        logger.debug("Registered %s %s", route.method, route.url)

    def _check_not_frozen(self) -> None:
        """Routers never freeze; ``App`` overrides this."""
