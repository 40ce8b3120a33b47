"""Switchyard — request dispatch and schema validation for ASGI services.

Routes, composable routers and middleware chains, with declared input
contracts enforced before any handler runs.

Basic usage::

    from switchyard import App
    from switchyard.validation import s

    app = App()

    @app.post("/users", schemas={"body": s.object({"name": s.string().min(3)})})
    def create_user(req, res):
        return res.status(201).json({"name": req.body["name"]})

Serve ``app`` with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DuplicateRouteError",
    "Request",
    "Response",
    "ResponseBuilder",
    "Router",
    "SwitchyardError",
    "ValidationError",
    "s",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name == "App":
        from switchyard.app import App

        return App

    if name == "AppConfig":
        from switchyard.config import AppConfig

        return AppConfig

    if name == "Request":
        from switchyard.http.request import Request

        return Request

    if name in ("Response", "ResponseBuilder"):
        from switchyard.http import response as _resp

        return getattr(_resp, name)

    if name == "Router":
        from switchyard.routing.router import Router

        return Router

    if name in ("SwitchyardError", "ConfigurationError", "DuplicateRouteError"):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    if name in ("ValidationError", "s"):
        from switchyard import validation as _validation

        return getattr(_validation, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
