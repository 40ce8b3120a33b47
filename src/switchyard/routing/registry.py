"""Route storage: a mutable registry during setup, a frozen table at runtime."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from switchyard.errors import DuplicateRouteError
from switchyard.routing.route import Route, RouteMatch


class RouteRegistry:
    """Routes grouped by method, kept in registration order.

    Usage::

        registry = RouteRegistry()
        registry.add(route)
        table = registry.freeze()
        table.match("GET", "/users/42")
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, list[Route]] = {}

    def add(self, route: Route) -> None:
        """Append *route*. Raises ``DuplicateRouteError`` if its identity is taken."""
        bucket = self._routes.setdefault(route.method, [])
        for existing in bucket:
            if existing.url == route.url:
                raise DuplicateRouteError(route.method, route.url)
        bucket.append(route)

    def __iter__(self) -> Iterator[Route]:
        for bucket in self._routes.values():
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._routes.values())

    def for_method(self, method: str) -> tuple[Route, ...]:
        return tuple(self._routes.get(method, ()))

    def freeze(self) -> "RouteTable":
        """Snapshot the current routes into an immutable ``RouteTable``."""
        return RouteTable({method: tuple(bucket) for method, bucket in self._routes.items()})


class RouteTable:
    """Immutable routes by method. Safe to share across concurrent requests."""

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, tuple[Route, ...]]) -> None:
        self._routes: Mapping[str, tuple[Route, ...]] = MappingProxyType(dict(routes))

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(route for bucket in self._routes.values() for route in bucket)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._routes.values())

    def match(self, method: str, path: str) -> RouteMatch | None:
        """First route for *method* whose pattern fits *path*, in registration order."""
        for route in self._routes.get(method, ()):
            params = route.pattern.match(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None
