"""Routing: path patterns, route registries and composable routers.

Routes are registered on mutable ``Router`` objects during setup and
snapshotted into an immutable ``RouteTable`` when the app freezes.
Matching is first-match in registration order.
"""

from switchyard.routing.pattern import PathPattern, normalize_path
from switchyard.routing.registry import RouteRegistry, RouteTable
from switchyard.routing.route import Route, RouteMatch, RouteSchemas
from switchyard.routing.router import Router

__all__ = [
    "PathPattern",
    "Route",
    "RouteMatch",
    "RouteRegistry",
    "RouteSchemas",
    "RouteTable",
    "Router",
    "normalize_path",
]
