"""Middleware protocol.

A middleware is any callable matching::

    def my_mw(request: Request, res: ResponseBuilder) -> object | None: ...

sync or async. Returning ``None`` (or an empty ``""``/``b""``)
continues the pipeline; returning anything else (a ``Response``, or a
value ``negotiate`` accepts) ends it. No base class required. The
framework checks the shape, not the lineage.

Middleware that only decorates the eventual response sets headers or
status on ``res`` and returns ``None``: the builder is shared with
every later step, including the handler.
"""

from collections.abc import Awaitable
from typing import Any, Protocol

from switchyard.http.request import Request
from switchyard.http.response import ResponseBuilder


class Middleware(Protocol):
    """Protocol for switchyard middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def require_token(request: Request, res: ResponseBuilder):
            if request.headers.get("authorization") != f"Bearer {TOKEN}":
                return res.status(401).json({"success": False})
            return None

        # Class middleware
        class Tagger:
            def __call__(self, request: Request, res: ResponseBuilder) -> None:
                res.header("X-Served-By", "switchyard")
    """

    def __call__(self, request: Request, res: ResponseBuilder) -> Any | Awaitable[Any]: ...
