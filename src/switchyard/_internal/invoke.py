"""Invoke helpers: call sync or async pipeline steps uniformly.

Middleware, handlers and not-found handlers can be ``def`` or
``async def``. The sync/async check lives here and nowhere else.

Usage::

    from switchyard._internal.invoke import invoke

    result = await invoke(middleware, request, res)
"""

import inspect
from typing import Any


async def invoke(step: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a pipeline step and await the result if it is awaitable.

    Works with both sync and async callables::

        def require_json(req, res):
            if req.content_type != "application/json":
                return res.status(415).json({"success": False})

        async def load_user(req, res):
            req.data["user"] = await users.get(req.params["id"])
    """
    result = step(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
