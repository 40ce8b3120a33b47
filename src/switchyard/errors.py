"""Switchyard exception hierarchy.

Shared across the router, registry, schemas and dispatcher so every
module raises and catches the same types.
"""


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when routes, schemas or the app are set up incorrectly.

    Always raised at registration time, never while serving a request.
    """


class DuplicateRouteError(ConfigurationError):
    """A route with the same method and normalized pattern already exists."""

    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.url = url
        super().__init__(f"The route {url!r} is already registered for the {method!r} method.")
