"""Shared type aliases used across switchyard modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: (request, response_builder) -> response value or None
Handler: TypeAlias = Callable[..., Any]

# Not-found handler: same shape as a handler; None falls back to the default 404
NotFoundHandler: TypeAlias = Callable[..., Any]
